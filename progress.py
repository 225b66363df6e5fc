from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from typing import Tuple

from analyzer import largest_children
from tree import TreeNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanProgress:
    root: TreeNode
    files_scanned: int
    dirs_scanned: int
    total_size: int
    # copy of the root's children at publish time; the scan keeps appending to the live list
    children: Tuple[TreeNode, ...] = ()


class ProgressMailbox:
    """Single-slot mailbox; a new snapshot replaces an unread one."""

    def __init__(self):
        self._lock = threading.Lock()
        self._latest = None

    def put(self, snapshot):
        with self._lock:
            self._latest = snapshot

    def take(self):
        with self._lock:
            snapshot, self._latest = self._latest, None
        return snapshot

    def clear(self):
        with self._lock:
            self._latest = None


@dataclass
class ProgressState:
    files_scanned: int = 0
    dirs_scanned: int = 0
    total_size: int = 0
    largest: Tuple[TreeNode, ...] = field(default_factory=tuple)
    has_snapshot: bool = False

    def update(self, snapshot: ScanProgress, preview_limit: int) -> None:
        self.files_scanned = snapshot.files_scanned
        self.dirs_scanned = snapshot.dirs_scanned
        self.total_size = snapshot.total_size
        self.largest = tuple(largest_children(snapshot.children, preview_limit))
        self.has_snapshot = True


class ProgressReporter:
    def __init__(self, mailbox, state, interval=1.0, preview_limit=5):
        self.mailbox = mailbox
        self.state = state
        self.interval = interval
        self.preview_limit = preview_limit

    def tick(self):
        snapshot = self.mailbox.take()
        if snapshot is None:
            return False
        self.state.update(snapshot, self.preview_limit)
        return True

    async def run(self, done: asyncio.Future) -> None:
        """Poll once per interval until ``done`` resolves, then drop leftovers."""
        while not done.done():
            try:
                await asyncio.wait_for(asyncio.shield(done), timeout=self.interval)
            except asyncio.TimeoutError:
                self.tick()
            except Exception:
                # scan failures are reported through the scan future itself
                break
        self.mailbox.clear()
        logger.debug("progress reporter stopped after %d files", self.state.files_scanned)
