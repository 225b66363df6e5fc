from __future__ import annotations

import unittest

from analyzer import SortMode, largest_children, sort_children, sort_tree
from tree import TreeNode


def leaf(path, size):
    return TreeNode(path, is_dir=False, size=size)


class SortTests(unittest.TestCase):
    def test_size_sort_is_descending_and_stable(self) -> None:
        root = TreeNode("/r", is_dir=True)
        for path, size in [("/r/a", 10), ("/r/b", 30), ("/r/c", 10), ("/r/d", 20)]:
            root.add_child(leaf(path, size))

        sort_children(root, SortMode.SIZE)

        self.assertEqual([c.name for c in root.children], ["b", "d", "a", "c"])

    def test_name_sort_ignores_case(self) -> None:
        root = TreeNode("/r", is_dir=True)
        for path in ["/r/beta", "/r/Alpha", "/r/gamma", "/r/Delta"]:
            root.add_child(leaf(path, 1))

        sort_children(root, SortMode.NAME)

        self.assertEqual([c.name for c in root.children], ["Alpha", "beta", "Delta", "gamma"])

    def test_sort_tree_reaches_nested_directories(self) -> None:
        root = TreeNode("/r", is_dir=True)
        inner = TreeNode("/r/inner", is_dir=True)
        inner.add_child(leaf("/r/inner/z", 1))
        inner.add_child(leaf("/r/inner/y", 2))
        root.add_child(inner)

        sort_tree(root, SortMode.NAME)

        self.assertEqual([c.name for c in inner.children], ["y", "z"])

    def test_toggled(self) -> None:
        self.assertIs(SortMode.SIZE.toggled(), SortMode.NAME)
        self.assertIs(SortMode.NAME.toggled(), SortMode.SIZE)

    def test_largest_children_caps_preview(self) -> None:
        children = [leaf(f"/r/{i}", size) for i, size in enumerate([5, 50, 1, 500, 7, 70, 3])]

        top = largest_children(children, 5)

        self.assertEqual([c.size for c in top], [500, 70, 50, 7, 5])
        self.assertEqual(largest_children(children[:2], 5), [children[1], children[0]])


if __name__ == "__main__":
    unittest.main()
