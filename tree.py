from __future__ import annotations

import os
import weakref
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(eq=False)
class TreeNode:
    """One filesystem entry of a scan.

    Nodes compare by identity. The parent link is a weak reference so the tree
    is only owned top-down, from the root through ``children``.
    """

    path: str
    is_dir: bool
    size: int = 0
    children: List["TreeNode"] = field(default_factory=list)
    scan_error: Optional[OSError] = None
    _parent: Optional[weakref.ref] = field(default=None, repr=False)

    @property
    def name(self):
        return os.path.basename(self.path.rstrip("\\/")) or self.path

    @property
    def parent(self):
        if self._parent is None:
            return None
        return self._parent()

    def add_child(self, child: "TreeNode") -> None:
        if not self.is_dir:
            raise ValueError(f"cannot add children to file {self.path!r}")
        child._parent = weakref.ref(self)
        self.children.append(child)
        self.size += child.size

    def detach(self):
        parent = self.parent
        if parent is None:
            return None
        for i, child in enumerate(parent.children):
            if child is self:
                del parent.children[i]
                break
        self._parent = None
        return parent

    def recalculate_sizes(self):
        node = self
        while node is not None:
            if node.is_dir:
                node.size = sum(child.size for child in node.children)
            node = node.parent

    def iter_nodes(self):
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))
