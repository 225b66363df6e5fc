from __future__ import annotations

import asyncio
import logging
import os
import shutil
import time
from dataclasses import dataclass
from typing import Callable, Optional

from background import run_in_thread
from navigator import Navigator
from settings import Settings
from tree import TreeNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusMessage:
    text: str
    expires_at: float
    is_error: bool = False

    def active(self, now):
        return now < self.expires_at


def remove_path(path):
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.remove(path)


class Deleter:
    """Removes one entry at a time; the tree is only touched on the loop thread."""

    def __init__(self, navigator: Navigator, settings: Optional[Settings] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.navigator = navigator
        self.settings = settings or Settings()
        self.clock = clock
        self.target = None
        self.started_at = None
        self.status = None

    @property
    def in_progress(self):
        return self.target is not None

    def start(self, target: TreeNode) -> asyncio.Future:
        if self.in_progress:
            raise RuntimeError(f"already deleting {self.target.path!r}")
        self.target = target
        self.started_at = self.clock()
        logger.info("deleting %s", target.path)
        future = run_in_thread(remove_path, target.path, name="dusty-delete")
        future.add_done_callback(self._finish)
        return future

    def _finish(self, future):
        target, self.target = self.target, None
        self.started_at = None
        if future.cancelled():
            return
        error = future.exception()
        now = self.clock()
        if error is not None:
            logger.warning("failed to delete %s: %s", target.path, error)
            self.status = StatusMessage(
                f"Error deleting: {error}", now + self.settings.error_status_seconds, is_error=True
            )
            return
        self.navigator.remove(target)
        logger.info("deleted %s (%d bytes)", target.path, target.size)
        self.status = StatusMessage(f"Deleted: {target.name}", now + self.settings.deleted_status_seconds)

    def status_text(self):
        if self.status is None or not self.status.active(self.clock()):
            return None
        return self.status.text
