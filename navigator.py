from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from analyzer import SortMode, sort_tree
from tree import TreeNode


@dataclass(frozen=True)
class EntryView:
    name: str
    size: int
    percent: float
    is_dir: bool


@dataclass(frozen=True)
class DirectoryView:
    """What the browser needs to draw the current directory."""

    path: str
    size: int
    sort_mode: SortMode
    entries: Tuple[EntryView, ...]
    cursor: int


class Navigator:
    """Cursor and sort state over a finished scan tree.

    ``current`` always points into the tree rooted at ``root``; ``cursor`` is
    an index into ``current.children`` and stays 0 when that list is empty.
    """

    def __init__(self, root: TreeNode, sort_mode: SortMode = SortMode.SIZE):
        self.root = root
        self.current = root
        self.cursor = 0
        self.sort_mode = sort_mode

    @property
    def selected(self):
        children = self.current.children
        if not children:
            return None
        return children[self.cursor]

    def move_cursor(self, delta):
        count = len(self.current.children)
        if count == 0:
            return
        self.cursor = max(0, min(count - 1, self.cursor + delta))

    def enter(self):
        target = self.selected
        # empty directories have nothing to show one level down
        if target is None or not target.is_dir or not target.children:
            return False
        self.current = target
        self.cursor = 0
        return True

    def exit(self):
        parent = self.current.parent
        if parent is None:
            return False
        self.cursor = 0
        for i, child in enumerate(parent.children):
            if child is self.current:
                self.cursor = i
                break
        self.current = parent
        return True

    def toggle_sort(self):
        self.sort_mode = self.sort_mode.toggled()
        sort_tree(self.root, self.sort_mode)
        self.cursor = 0

    def go_to_root(self):
        self.current = self.root
        self.cursor = 0

    def remove(self, node: TreeNode) -> None:
        """Drop a deleted node and shrink every ancestor by its size."""
        parent = node.detach()
        if parent is None:
            return
        parent.recalculate_sizes()
        self._clamp_cursor()

    def _clamp_cursor(self):
        last = len(self.current.children) - 1
        if self.cursor > last:
            self.cursor = max(0, last)

    def view(self) -> DirectoryView:
        current = self.current
        entries = []
        for child in current.children:
            percent = child.size / current.size * 100 if current.size > 0 else 0.0
            entries.append(EntryView(name=child.name, size=child.size, percent=percent, is_dir=child.is_dir))
        return DirectoryView(
            path=current.path,
            size=current.size,
            sort_mode=self.sort_mode,
            entries=tuple(entries),
            cursor=self.cursor,
        )
