"""Text rendering of a walked tree and its summary."""

from typing import Iterator, List, Tuple

from lstree.filters.size_filter import SizeRange
from lstree.options import TreeOptions
from lstree.render.formatting import format_permissions, format_size
from lstree.render.terminal import TerminalCapabilities
from lstree.tree.tree_node import TreeNode
from lstree.tree.tree_walker import TraversalStats, WalkResult

# Width of the size column; wide enough for "1023B" and "999.9K"
SIZE_COLUMN_WIDTH = 6


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def describe_size_range(size_range: SizeRange) -> str:
    """Describe a size range for the summary line.

    Example:
        >>> describe_size_range(SizeRange(36864, 1048576))
        '[36.0K, 1.0M]'
        >>> describe_size_range(SizeRange(10240))
        '[10.0K, unlimited]'
    """
    upper = "unlimited" if size_range.is_unbounded else format_size(size_range.max_bytes)
    return f"[{format_size(size_range.min_bytes)}, {upper}]"


class TreeRenderer:
    """Turns a WalkResult into lines of text.

    Lines are produced in display order: the root line, one line per visible
    entry, a blank line and the summary. Output contains no trailing newlines;
    the caller decides how lines are written.

    Example:
        >>> renderer = TreeRenderer(options, detect_capabilities())  # doctest: +SKIP
        >>> for line in renderer.render(TreeWalker(options).walk()):  # doctest: +SKIP
        ...     print(line)
        src
        ├── main.py
        └── utils
            └── helpers.py
        <BLANKLINE>
        1 directory, 2 files
    """

    def __init__(self, options: TreeOptions, capabilities: TerminalCapabilities) -> None:
        self.options = options
        self.capabilities = capabilities

    def render(self, result: WalkResult) -> Iterator[str]:
        yield self.root_line(result.root)
        yield from self.stream_tree(result.root)
        yield ""
        yield from self.summary_lines(result.stats)

    def root_line(self, root: TreeNode) -> str:
        if root.symlink_target:
            return f"{root.name} -> {root.symlink_target}"
        return str(root.name)

    def stream_tree(self, root: TreeNode) -> Iterator[str]:
        """Generate one line per entry below root, depth first.

        Uses an explicit stack of (node, prefix, is_last) so tree depth is not
        limited by the recursion limit.
        """
        glyphs = self.capabilities.glyphs
        stack: List[Tuple[TreeNode, str, bool]] = []

        def push_children(node: TreeNode, prefix: str) -> None:
            children = node.children
            for index in reversed(range(len(children))):
                stack.append((children[index], prefix, index == len(children) - 1))

        push_children(root, "")
        while stack:
            node, prefix, is_last = stack.pop()
            yield self.format_entry(node, prefix, is_last)
            if node.children:
                push_children(node, prefix + ("    " if is_last else glyphs.vertical + "   "))

    def format_entry(self, node: TreeNode, prefix: str, is_last: bool) -> str:
        """Format a single tree line: prefix, connector, colored text and symlink suffix."""
        glyphs = self.capabilities.glyphs
        connector = (glyphs.corner if is_last else glyphs.junction) + glyphs.horizontal

        if node.is_error:
            text = f"[error accessing {node.name}]"
            suffix = ""
        else:
            parts = []
            if self.options.show_size and not node.is_dir and node.size_bytes is not None:
                parts.append(format_size(node.size_bytes).rjust(SIZE_COLUMN_WIDTH))
            if self.options.show_permissions:
                parts.append(format_permissions(node.mode))
            parts.append(node.name)
            text = " ".join(parts)
            suffix = f" -> {node.symlink_target}" if node.is_symlink and node.symlink_target else ""

        return f"{prefix}{connector} {self.capabilities.palette.paint(text, node.entry_type)}{suffix}"

    def summary_lines(self, stats: TraversalStats) -> List[str]:
        options = self.options
        parts = [_plural(stats.directories, "directory", "directories")]
        if not options.dirs_only:
            parts.append(_plural(stats.files, "file", "files"))
        if stats.symlinks or options.only_symlinks:
            parts.append(_plural(stats.symlinks, "symlink", "symlinks"))
        if stats.executables or options.only_executables:
            parts.append(_plural(stats.executables, "executable", "executables"))
        if options.size_range is not None:
            matched = _plural(stats.size_matched, "file", "files")
            parts.append(f"{matched} in size range {describe_size_range(options.size_range)}")

        lines = [", ".join(parts)]
        if options.show_size or options.size_range is not None:
            lines.append(f"Total size: {format_size(stats.total_bytes)}")
        return lines
