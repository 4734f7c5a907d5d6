"""Tests for tree and summary rendering."""

import os
import sys

import pytest

from lstree.filters.size_filter import MAX_SIZE, SizeRange
from lstree.options import TreeOptions
from lstree.render.terminal import (
    ANSI_PALETTE,
    ASCII_GLYPHS,
    PLAIN_PALETTE,
    UNICODE_GLYPHS,
    TerminalCapabilities,
)
from lstree.render.tree_renderer import TreeRenderer, describe_size_range
from lstree.tree.tree_node import LOOP_MARKER, TreeNode
from lstree.tree.tree_walker import TraversalStats, TreeWalker, WalkResult
from lstree.types import EntryType

PLAIN = TerminalCapabilities(glyphs=UNICODE_GLYPHS, palette=PLAIN_PALETTE)


def render(options, capabilities=PLAIN):
    result = TreeWalker(options).walk()
    return list(TreeRenderer(options, capabilities).render(result))


@pytest.fixture
def small_tree():
    """A hand-built tree that does not touch the filesystem."""
    root = TreeNode("root", entry_type=EntryType.DIRECTORY)
    bin_dir = TreeNode("bin", parent=root, entry_type=EntryType.DIRECTORY, mode=0o40755)
    TreeNode("tool", parent=bin_dir, entry_type=EntryType.EXECUTABLE, size_bytes=2048, mode=0o100755)
    TreeNode(
        "link", parent=bin_dir, entry_type=EntryType.SYMLINK, size_bytes=2048, mode=0o100755, symlink_target="tool"
    )
    TreeNode("bad", parent=root, entry_type=EntryType.ERROR, error="Permission denied")
    TreeNode("notes.txt", parent=root, entry_type=EntryType.FILE, size_bytes=12, mode=0o100644)
    return root


class TestTreeLines:
    def test_full_listing(self, project_tree):
        lines = render(TreeOptions(root=str(project_tree)))

        assert lines == [
            str(project_tree),
            "├── README.md",
            "├── docs",
            "│   ├── guide.txt",
            "│   └── notes.md",
            "├── empty",
            "├── setup.py",
            "└── src",
            "    ├── app.py",
            "    ├── lib",
            "    │   ├── report.txt",
            "    │   └── util.py",
            "    └── run.sh",
            "",
            "4 directories, 8 files, 1 executable",
        ]

    def test_ascii_glyphs(self, project_tree):
        caps = TerminalCapabilities(glyphs=ASCII_GLYPHS, palette=PLAIN_PALETTE)
        lines = render(TreeOptions(root=str(project_tree), pattern="*.md"), caps)

        assert lines[1:4] == ["|-- README.md", "`-- docs", "    `-- notes.md"]

    def test_filtered_listing_keeps_connectors_consistent(self, project_tree):
        lines = render(TreeOptions(root=str(project_tree), pattern="*.py"))

        assert lines[1:6] == [
            "├── setup.py",
            "└── src",
            "    ├── app.py",
            "    └── lib",
            "        └── util.py",
        ]

    def test_tree_line_count_matches_visible_entries(self, project_tree):
        options = TreeOptions(root=str(project_tree), pattern="*.txt")
        result = TreeWalker(options).walk()
        lines = list(TreeRenderer(options, PLAIN).stream_tree(result.root))

        assert len(lines) == result.stats.entries == 5

    def test_sizes(self, project_tree):
        lines = render(TreeOptions(root=str(project_tree), show_size=True, max_depth=1))

        assert lines[1] == "├──    10B README.md"
        assert lines[2] == "├── docs"
        assert lines[4] == "├──    20B setup.py"

    def test_size_column_for_kilobytes(self, project_tree):
        lines = render(TreeOptions(root=str(project_tree), show_size=True, pattern="guide*"))

        assert lines[1:3] == ["└── docs", "    └──   2.0K guide.txt"]

    def test_permissions(self, project_tree):
        lines = render(TreeOptions(root=str(project_tree), show_permissions=True, pattern="*.sh"))

        assert lines[2] == "    └── rwxr-xr-x run.sh"

    def test_size_and_permissions_order(self, small_tree):
        options = TreeOptions(show_size=True, show_permissions=True)
        renderer = TreeRenderer(options, PLAIN)
        lines = list(renderer.stream_tree(small_tree))

        assert lines[1] == "│   ├──   2.0K rwxr-xr-x tool"
        assert lines[0] == "├── rwxr-xr-x bin"

    def test_symlink_suffix(self, small_tree):
        lines = list(TreeRenderer(TreeOptions(), PLAIN).stream_tree(small_tree))

        assert lines[2] == "│   └── link -> tool"

    def test_loop_suffix(self):
        root = TreeNode("root", entry_type=EntryType.DIRECTORY)
        TreeNode("up", parent=root, entry_type=EntryType.SYMLINK, symlink_target=LOOP_MARKER)

        lines = list(TreeRenderer(TreeOptions(), PLAIN).stream_tree(root))

        assert lines == ["└── up -> [loop detected]"]

    def test_error_entry(self, small_tree):
        lines = list(TreeRenderer(TreeOptions(show_size=True, show_permissions=True), PLAIN).stream_tree(small_tree))

        assert lines[3] == "├── [error accessing bad]"

    def test_colors(self, small_tree):
        caps = TerminalCapabilities(glyphs=UNICODE_GLYPHS, palette=ANSI_PALETTE)
        lines = list(TreeRenderer(TreeOptions(), caps).stream_tree(small_tree))

        assert lines == [
            "├── \033[1;34mbin\033[0m",
            "│   ├── \033[1;32mtool\033[0m",
            "│   └── \033[1;36mlink\033[0m -> tool",
            "├── \033[1;31m[error accessing bad]\033[0m",
            "└── \033[0;37mnotes.txt\033[0m",
        ]

    def test_empty_tree(self, tmp_path):
        assert render(TreeOptions(root=str(tmp_path))) == [str(tmp_path), "", "0 directories, 0 files"]


class TestRootLine:
    def test_plain_root(self):
        renderer = TreeRenderer(TreeOptions(), PLAIN)
        assert renderer.root_line(TreeNode(".", entry_type=EntryType.DIRECTORY)) == "."

    def test_symlink_root(self):
        renderer = TreeRenderer(TreeOptions(), PLAIN)
        root = TreeNode("current", entry_type=EntryType.DIRECTORY, symlink_target="releases/v2")

        assert renderer.root_line(root) == "current -> releases/v2"


class TestSummary:
    def summary(self, options, **counts):
        return TreeRenderer(options, PLAIN).summary_lines(TraversalStats(**counts))

    def test_singular_and_plural(self):
        assert self.summary(TreeOptions(), directories=1, files=1) == ["1 directory, 1 file"]
        assert self.summary(TreeOptions(), directories=2, files=0) == ["2 directories, 0 files"]

    def test_dirs_only_omits_files(self):
        assert self.summary(TreeOptions(dirs_only=True), directories=3) == ["3 directories"]

    def test_symlinks_and_executables_when_present(self):
        assert self.summary(TreeOptions(), directories=1, files=2, symlinks=1, executables=2) == [
            "1 directory, 2 files, 1 symlink, 2 executables"
        ]

    def test_symlinks_and_executables_when_filtered(self):
        assert self.summary(TreeOptions(only_symlinks=True), directories=1) == ["1 directory, 0 files, 0 symlinks"]
        assert self.summary(TreeOptions(only_executables=True), directories=1) == [
            "1 directory, 0 files, 0 executables"
        ]

    def test_total_size_with_show_size(self):
        assert self.summary(TreeOptions(show_size=True), files=2, total_bytes=3072) == [
            "0 directories, 2 files",
            "Total size: 3.0K",
        ]

    def test_size_range(self):
        options = TreeOptions(size_range=SizeRange(36864, 1048576))

        assert self.summary(options, directories=1, files=2, size_matched=2, total_bytes=100000) == [
            "1 directory, 2 files, 2 files in size range [36.0K, 1.0M]",
            "Total size: 97.7K",
        ]

    def test_size_range_unbounded(self):
        options = TreeOptions(size_range=SizeRange(10240, MAX_SIZE))

        assert self.summary(options, files=1, size_matched=1, total_bytes=20480)[0] == (
            "0 directories, 1 file, 1 file in size range [10.0K, unlimited]"
        )

    def test_from_walk(self, project_tree):
        lines = render(TreeOptions(root=str(project_tree), size_range=SizeRange(1024, 4096)))

        assert lines[-2:] == ["1 directory, 1 file, 1 file in size range [1.0K, 4.0K]", "Total size: 2.0K"]


@pytest.mark.parametrize(
    "size_range,expected",
    [
        (SizeRange(36864, 1048576), "[36.0K, 1.0M]"),
        (SizeRange(0, 512000), "[0B, 500.0K]"),
        (SizeRange(10240, MAX_SIZE), "[10.0K, unlimited]"),
    ],
)
def test_describe_size_range(size_range, expected):
    assert describe_size_range(size_range) == expected


def test_render_result_without_walk():
    root = TreeNode("root", entry_type=EntryType.DIRECTORY)
    TreeNode("a.txt", parent=root, size_bytes=1)
    result = WalkResult(root=root, stats=TraversalStats(files=1, total_bytes=1))

    lines = list(TreeRenderer(TreeOptions(), PLAIN).render(result))

    assert lines == ["root", "└── a.txt", "", "0 directories, 1 file"]


def test_deep_tree_renders_without_recursion():
    root = node = TreeNode("root", entry_type=EntryType.DIRECTORY)
    for index in range(300):
        node = TreeNode(f"d{index}", parent=node, entry_type=EntryType.DIRECTORY)

    depth = 0
    frame = sys._getframe()
    while frame is not None:
        depth += 1
        frame = frame.f_back

    original_limit = sys.getrecursionlimit()
    sys.setrecursionlimit(depth + 100)
    try:
        lines = list(TreeRenderer(TreeOptions(), PLAIN).stream_tree(root))
    finally:
        sys.setrecursionlimit(original_limit)

    assert len(lines) == 300
    assert lines[-1] == " " * 4 * 299 + "└── d299"


def test_symlink_root_line_from_walk(project_tree, tmp_path):
    link = tmp_path / "project_link"
    try:
        os.symlink(project_tree, link)
    except (OSError, NotImplementedError):
        pytest.skip("Symlink creation not supported on this platform/environment")

    assert render(TreeOptions(root=str(link), max_depth=0))[0] == f"{link} -> {project_tree}"
