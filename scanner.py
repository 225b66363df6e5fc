import os
import stat
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from time import perf_counter
from typing import Optional

from analyzer import SortMode, sort_children
from progress import ProgressMailbox, ScanProgress
from tree import TreeNode

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """The scan root itself could not be read; no tree was produced."""

    def __init__(self, path, cause: OSError):
        super().__init__(f"{path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause


@dataclass
class _Walk:
    loop: asyncio.AbstractEventLoop
    executor: ThreadPoolExecutor
    mailbox: Optional[ProgressMailbox] = None
    root: Optional[TreeNode] = None
    files_scanned: int = 0
    dirs_scanned: int = 0
    total_size: int = 0

    def publish(self):
        if self.mailbox is None or self.root is None:
            return
        self.mailbox.put(ScanProgress(
            root=self.root,
            files_scanned=self.files_scanned,
            dirs_scanned=self.dirs_scanned,
            total_size=self.total_size,
            children=tuple(self.root.children),
        ))


async def stat_path(walk, path):
    return await walk.loop.run_in_executor(walk.executor, os.stat, path)


async def list_dir(walk, path):
    return await walk.loop.run_in_executor(walk.executor, os.listdir, path)


async def scan_directory_recursive(path, walk):
    # os.stat follows symlinks and hard links are not deduplicated
    info = await stat_path(walk, path)

    node = TreeNode(path=path, is_dir=stat.S_ISDIR(info.st_mode))
    if walk.root is None:
        walk.root = node

    if not node.is_dir:
        node.size = info.st_size
        walk.files_scanned += 1
        return node

    walk.dirs_scanned += 1
    try:
        entries = await list_dir(walk, path)
    except OSError as exc:
        logger.debug("cannot list %s: %s", path, exc)
        node.scan_error = exc
        return node

    # Scan entries in parallel; each child attaches itself when done
    await asyncio.gather(*[
        scan_child(os.path.join(path, entry), node, walk)
        for entry in entries
    ])

    sort_children(node, SortMode.SIZE)
    return node


async def scan_child(path, parent, walk):
    try:
        child = await scan_directory_recursive(path, walk)
    except OSError as exc:
        logger.debug("skipping %s: %s", path, exc)
        return None

    parent.add_child(child)
    if parent is walk.root:
        walk.total_size = parent.size
        walk.publish()
    return child


def scan(path, mailbox=None, max_workers=None):
    """Build the tree for ``path``; meant to run off the UI thread.

    Raises ScanError when ``path`` itself cannot be stat'd. Every other
    filesystem error only prunes or empties the affected subtree.
    """
    loop = asyncio.new_event_loop()
    start = perf_counter()
    logger.info("scanning %s", path)
    try:
        with ThreadPoolExecutor(max_workers=max_workers or (os.cpu_count() or 1) * 2) as executor:
            walk = _Walk(loop=loop, executor=executor, mailbox=mailbox)
            try:
                root = loop.run_until_complete(scan_directory_recursive(path, walk))
            except OSError as exc:
                logger.error("cannot scan %s: %s", path, exc)
                raise ScanError(path, exc) from exc
    finally:
        loop.close()

    logger.info(
        "scanned %s in %.2fs: %d files, %d dirs, %d bytes",
        path, perf_counter() - start, walk.files_scanned, walk.dirs_scanned, root.size,
    )
    return root
