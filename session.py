from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

from background import run_in_thread
from deleter import Deleter
from navigator import Navigator
from progress import ProgressMailbox, ProgressReporter, ProgressState
from scanner import scan
from settings import Settings

logger = logging.getLogger(__name__)

QUIT_KEYS = {"q", "CTRL_C"}


class Session:
    """Foreground state of one run; everything here runs on the event loop thread."""

    def __init__(self, path: str, settings: Optional[Settings] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.path = path
        self.settings = settings or Settings()
        self.clock = clock
        self.mailbox = ProgressMailbox()
        self.progress = ProgressState()
        self.reporter = ProgressReporter(
            self.mailbox, self.progress,
            interval=self.settings.progress_interval,
            preview_limit=self.settings.preview_limit,
        )
        self.scanning = False
        self.started_at = clock()
        self.scan_error: Optional[BaseException] = None
        self.navigator: Optional[Navigator] = None
        self.deleter = None
        self._scan_future = None
        self._reporter_task = None

    def start_scan(self) -> asyncio.Future:
        if self.scanning or self.navigator is not None:
            raise RuntimeError("a scan already ran in this session")
        self.scanning = True
        self.started_at = self.clock()
        future = run_in_thread(
            scan, self.path, self.mailbox, self.settings.max_workers, name="dusty-scan"
        )
        future.add_done_callback(self.finish_scan)
        self._scan_future = future
        self._reporter_task = asyncio.ensure_future(self.reporter.run(future))
        return future

    def finish_scan(self, future):
        self.scanning = False
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self.scan_error = error
            return
        self.navigator = Navigator(future.result())
        self.deleter = Deleter(self.navigator, self.settings, clock=self.clock)

    @property
    def deleting(self):
        return self.deleter is not None and self.deleter.in_progress

    @property
    def busy(self):
        return self.scanning or self.deleting

    def elapsed(self):
        if self.deleting:
            return self.clock() - self.deleter.started_at
        return self.clock() - self.started_at

    def handle_key(self, key: str) -> bool:
        """Apply one key; returns False when the session should end."""
        if key in QUIT_KEYS:
            return False
        if self.busy or self.navigator is None:
            return True

        nav = self.navigator
        if key in ("UP", "k"):
            nav.move_cursor(-1)
        elif key in ("DOWN", "j"):
            nav.move_cursor(1)
        elif key in ("ENTER", "RIGHT", "l"):
            nav.enter()
        elif key in ("LEFT", "h", "BACKSPACE"):
            nav.exit()
        elif key == "s":
            nav.toggle_sort()
        elif key == "HOME":
            nav.go_to_root()
        elif key == "d":
            self.delete_selected()
        return True

    def delete_selected(self):
        target = self.navigator.selected
        if target is None:
            return None
        return self.deleter.start(target)

    def status_text(self):
        if self.deleter is None:
            return None
        return self.deleter.status_text()

    def close(self):
        if self._reporter_task is not None and not self._reporter_task.done():
            self._reporter_task.cancel()
        if self.busy:
            logger.info("abandoning background work on quit")
