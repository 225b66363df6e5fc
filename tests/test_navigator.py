"""Tests for cursor movement, enter/exit, sorting and removal."""

from __future__ import annotations

import unittest

from analyzer import SortMode
from navigator import Navigator
from tree import TreeNode


def build():
    """/r: big/ (b1 600, b2 400), Apple (300), empty/ (), zed/ (inner/ (x 50))."""
    root = TreeNode("/r", is_dir=True)
    big = TreeNode("/r/big", is_dir=True)
    big.add_child(TreeNode("/r/big/b1", is_dir=False, size=600))
    big.add_child(TreeNode("/r/big/b2", is_dir=False, size=400))
    zed = TreeNode("/r/zed", is_dir=True)
    inner = TreeNode("/r/zed/inner", is_dir=True)
    inner.add_child(TreeNode("/r/zed/inner/x", is_dir=False, size=50))
    zed.add_child(inner)
    root.add_child(big)
    root.add_child(TreeNode("/r/Apple", is_dir=False, size=300))
    root.add_child(zed)
    root.add_child(TreeNode("/r/empty", is_dir=True))
    return root


class NavigatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.root = build()
        self.nav = Navigator(self.root)

    def names(self, node=None):
        return [c.name for c in (node or self.nav.current).children]

    def test_move_cursor_clamps(self) -> None:
        self.nav.move_cursor(-1)
        self.assertEqual(self.nav.cursor, 0)
        self.nav.move_cursor(10)
        self.assertEqual(self.nav.cursor, 3)
        self.nav.move_cursor(-2)
        self.assertEqual(self.nav.cursor, 1)

    def test_move_cursor_on_empty_directory_is_noop(self) -> None:
        nav = Navigator(TreeNode("/e", is_dir=True))
        nav.move_cursor(1)
        self.assertEqual(nav.cursor, 0)
        self.assertIsNone(nav.selected)

    def test_enter_directory_resets_cursor(self) -> None:
        self.assertTrue(self.nav.enter())
        self.assertEqual(self.nav.current.name, "big")
        self.assertEqual(self.nav.cursor, 0)

    def test_enter_file_or_empty_directory_is_noop(self) -> None:
        self.nav.move_cursor(1)
        self.assertFalse(self.nav.enter())
        self.nav.move_cursor(2)
        self.assertEqual(self.nav.selected.name, "empty")
        self.assertFalse(self.nav.enter())
        self.assertIs(self.nav.current, self.root)
        self.assertEqual(self.nav.cursor, 3)

    def test_exit_from_root_is_noop(self) -> None:
        self.nav.move_cursor(2)
        self.assertFalse(self.nav.exit())
        self.assertIs(self.nav.current, self.root)
        self.assertEqual(self.nav.cursor, 2)

    def test_enter_then_exit_restores_cursor(self) -> None:
        self.nav.move_cursor(2)
        self.nav.enter()
        self.nav.enter()
        self.assertEqual(self.nav.current.name, "inner")

        self.nav.exit()
        self.assertEqual(self.nav.current.name, "zed")
        self.assertEqual(self.nav.cursor, 0)
        self.nav.exit()
        self.assertIs(self.nav.current, self.root)
        self.assertEqual(self.nav.cursor, 2)

    def test_exit_after_external_detach_resets_cursor(self) -> None:
        self.nav.move_cursor(2)
        self.nav.enter()
        zed = self.nav.current
        parent = zed.parent
        parent.children.remove(zed)

        self.nav.exit()

        self.assertIs(self.nav.current, self.root)
        self.assertEqual(self.nav.cursor, 0)

    def test_toggle_sort_sorts_whole_tree_by_name(self) -> None:
        self.nav.move_cursor(2)
        self.nav.toggle_sort()

        self.assertIs(self.nav.sort_mode, SortMode.NAME)
        self.assertEqual(self.nav.cursor, 0)
        self.assertEqual(self.names(), ["Apple", "big", "empty", "zed"])
        big = self.root.children[1]
        big.children.reverse()
        self.nav.toggle_sort()
        self.nav.toggle_sort()
        self.assertEqual(self.names(big), ["b1", "b2"])

    def test_toggle_sort_twice_restores_size_order(self) -> None:
        before = [c.size for c in self.root.children]

        self.nav.toggle_sort()
        self.nav.toggle_sort()

        self.assertIs(self.nav.sort_mode, SortMode.SIZE)
        self.assertEqual([c.size for c in self.root.children], sorted(before, reverse=True))
        self.assertEqual(self.names(), ["big", "Apple", "zed", "empty"])

    def test_go_to_root(self) -> None:
        self.nav.enter()
        self.nav.move_cursor(1)
        self.nav.go_to_root()
        self.assertIs(self.nav.current, self.root)
        self.assertEqual(self.nav.cursor, 0)

    def test_remove_updates_sizes_and_clamps_cursor(self) -> None:
        self.nav.enter()
        self.nav.move_cursor(1)
        b2 = self.nav.selected

        self.nav.remove(b2)

        big = self.nav.current
        self.assertEqual(self.names(), ["b1"])
        self.assertEqual(big.size, 600)
        self.assertEqual(self.root.size, 950)
        self.assertEqual(self.nav.cursor, 0)

    def test_remove_last_child_leaves_empty_listing(self) -> None:
        self.nav.move_cursor(2)
        self.nav.enter()
        inner = self.nav.selected
        self.nav.remove(inner)

        self.assertEqual(self.nav.current.children, [])
        self.assertEqual(self.nav.current.size, 0)
        self.assertEqual(self.nav.cursor, 0)
        self.assertEqual(self.root.size, 1300)

    def test_view_reports_percentages(self) -> None:
        view = self.nav.view()

        self.assertEqual(view.path, "/r")
        self.assertEqual(view.size, 1350)
        self.assertIs(view.sort_mode, SortMode.SIZE)
        self.assertEqual(view.cursor, 0)
        first = view.entries[0]
        self.assertEqual((first.name, first.size, first.is_dir), ("big", 1000, True))
        self.assertAlmostEqual(first.percent, 1000 / 1350 * 100)
        self.assertEqual(view.entries[3].percent, 0.0)

    def test_view_of_zero_sized_directory(self) -> None:
        root = TreeNode("/z", is_dir=True)
        root.add_child(TreeNode("/z/a", is_dir=False, size=0))

        view = Navigator(root).view()

        self.assertEqual(view.entries[0].percent, 0.0)


if __name__ == "__main__":
    unittest.main()
