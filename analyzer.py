from __future__ import annotations

import enum
import heapq
from typing import List

from tree import TreeNode


class SortMode(enum.Enum):
    SIZE = "size"
    NAME = "name"

    def toggled(self) -> "SortMode":
        return SortMode.NAME if self is SortMode.SIZE else SortMode.SIZE


def sort_children(node: TreeNode, mode: SortMode = SortMode.SIZE) -> None:
    # list.sort is stable, equal keys keep their relative order
    if mode is SortMode.NAME:
        node.children.sort(key=lambda child: child.name.lower())
    else:
        node.children.sort(key=lambda child: child.size, reverse=True)


def sort_tree(root: TreeNode, mode: SortMode) -> None:
    """Re-sort every directory below ``root``, O(nodes * log(children))."""
    for node in root.iter_nodes():
        if node.children:
            sort_children(node, mode)


def largest_children(children, limit: int) -> List[TreeNode]:
    return heapq.nlargest(limit, children, key=lambda child: child.size)
