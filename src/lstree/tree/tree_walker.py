"""Directory traversal producing a filtered tree and its statistics.

This module provides the TreeWalker class, which lists a directory hierarchy
into a tree of TreeNode objects, decides which entries are visible under the
active filters, and counts what will be displayed.
"""

import os
import stat
import sys
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Optional, Set, TextIO, Tuple

from lstree.exceptions import RootPathError
from lstree.filters.composite_filter import CompositeEntryFilter
from lstree.filters.pattern_filter import PatternFilter
from lstree.filters.size_filter import SizeRangeFilter
from lstree.options import TreeOptions
from lstree.tree.file_identifier import FileIdentifier
from lstree.tree.tree_node import LOOP_MARKER, TreeNode
from lstree.types import EntryType

Branch = FrozenSet[FileIdentifier]


@dataclass
class TraversalStats:
    """Counts of the entries left in the tree after filtering.

    Attributes:
        directories: Directories displayed (the root is not counted).
        files: Files displayed, executables included.
        symlinks: Symbolic links displayed, whatever they point to.
        executables: Displayed files with the owner execute bit.
        total_bytes: Sum of the sizes of displayed files.
        size_matched: Displayed files and symlinks that satisfied an active size range.
    """

    directories: int = 0
    files: int = 0
    symlinks: int = 0
    executables: int = 0
    total_bytes: int = 0
    size_matched: int = 0

    def record(self, node: TreeNode, size_filter_active: bool = False) -> None:
        """Count one displayed entry. Error entries are not counted."""
        if node.is_error:
            return
        if node.is_symlink:
            self.symlinks += 1
            # Only a link with a sized target can have passed the size filter
            if size_filter_active and node.size_bytes is not None:
                self.size_matched += 1
        elif node.is_dir:
            self.directories += 1
        else:
            self.files += 1
            if node.entry_type == EntryType.EXECUTABLE:
                self.executables += 1
            if node.size_bytes is not None:
                self.total_bytes += node.size_bytes
            if size_filter_active:
                self.size_matched += 1

    @property
    def entries(self) -> int:
        return self.directories + self.files + self.symlinks


@dataclass
class WalkResult:
    """Outcome of one traversal.

    Attributes:
        root: Root node; only visible entries remain attached below it.
        stats: Counts of the visible entries.
        errors: Messages for directories that could not be listed.
    """

    root: TreeNode
    stats: TraversalStats
    errors: List[str] = field(default_factory=list)


def build_content_filter(options: TreeOptions) -> CompositeEntryFilter:
    """Combine the name pattern and size range options into one filter."""
    composite = CompositeEntryFilter([])
    if options.pattern is not None:
        composite.add_filter(PatternFilter(options.pattern, options.pattern_mode))
    if options.size_range is not None:
        composite.add_filter(SizeRangeFilter(options.size_range))
    return composite


class TreeWalker:
    """Walks a directory hierarchy and returns the tree that should be displayed.

    A walk happens in three steps over the same list of nodes:

    1. Build: list directories with an explicit stack, creating a TreeNode per
       entry. Hidden entries are skipped unless requested. Descent stops at the
       maximum depth unless a content filter needs to see the whole tree.
    2. Annotate: visit the nodes children-first and mark every node whose
       subtree holds an entry matching the content filters.
    3. Prune: detach invisible entries and entries deeper than the maximum
       depth, counting whatever remains.

    No recursion is used, so deep trees do not hit the interpreter's
    recursion limit.

    Symbolic Link Behavior:
        Symlinks are shown as symlink entries with their target. Links that
        point to directories are listed like directories, whether or not
        follow_symlinks is set; a link back to a directory on the current
        branch is marked as a loop and not descended.

    Interruption:
        should_stop is polled before each entry is taken off the stack. Once
        it returns True the walk raises KeyboardInterrupt.

    Error Handling:
        - Root missing, not a directory, or unreadable: RootPathError
        - Subdirectory unreadable: reported to the error stream, kept as an
          empty directory, traversal continues
        - Entry metadata unreadable: kept as an error entry unless a filter
          is active

    Example:
        >>> walker = TreeWalker(TreeOptions(root="src"))  # doctest: +SKIP
        >>> result = walker.walk()  # doctest: +SKIP
        >>> result.stats.files  # doctest: +SKIP
        12
    """

    def __init__(
        self,
        options: TreeOptions,
        error_stream: Optional[TextIO] = None,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> None:
        """Initialize a TreeWalker.

        Args:
            options: Display and filter options.
            error_stream: Where traversal errors are reported. Defaults to sys.stderr.
            should_stop: Cancellation check, e.g. SignalHandler.stop_requested.
        """
        self.options = options
        self.error_stream = error_stream
        self.should_stop = should_stop
        self.content_filter = build_content_filter(options)

    def walk(self) -> WalkResult:
        """Traverse the root and return the visible tree with its statistics.

        Each call re-reads the filesystem and returns an independent result.

        Raises:
            RootPathError: If the root cannot be listed.
            KeyboardInterrupt: If should_stop returned True during the walk.
        """
        errors: List[str] = []
        root = self._create_root()
        nodes = self._build(root, errors)
        if self.options.has_content_filter:
            self._annotate_matches(nodes)
        stats = self._prune(nodes)
        return WalkResult(root=root, stats=stats, errors=errors)

    def _report(self, errors: List[str], message: str) -> None:
        errors.append(message)
        print(f"Error: {message}", file=self.error_stream or sys.stderr)

    def _create_root(self) -> TreeNode:
        root_path = str(self.options.root)
        if not os.path.lexists(root_path):
            raise RootPathError(root_path, "No such file or directory")
        if not os.path.isdir(root_path):
            raise RootPathError(root_path, "Not a directory")

        target = None
        if os.path.islink(root_path):
            try:
                target = os.readlink(root_path)
            except OSError as e:
                raise RootPathError(root_path, e.strerror or str(e))

        return TreeNode(root_path, fs_path=root_path, entry_type=EntryType.DIRECTORY, symlink_target=target)

    def _build(self, root: TreeNode, errors: List[str]) -> List[TreeNode]:
        """List the tree below root in pre-order using an explicit stack."""
        nodes: List[TreeNode] = []
        root_id = FileIdentifier.for_path(root.fs_path)
        stack: List[Tuple[TreeNode, Branch]] = [(root, frozenset([root_id]) if root_id is not None else frozenset())]

        while stack:
            if self.should_stop is not None and self.should_stop():
                raise KeyboardInterrupt
            node, branch = stack.pop()
            nodes.append(node)
            if not node.is_dir or not self._should_descend(node):
                continue

            try:
                children = self._list_children(node, branch)
            except OSError as e:
                if node.is_root:
                    raise RootPathError(node.fs_path, e.strerror or str(e))
                self._report(errors, f"cannot read directory {node.fs_path}: {e.strerror or e}")
                continue

            # Reversed so the first child is popped first
            for child, child_id in reversed(children):
                stack.append((child, branch | {child_id} if child_id is not None else branch))

        return nodes

    def _should_descend(self, node: TreeNode) -> bool:
        if self.options.has_content_filter or self.options.max_depth is None:
            return True
        return node.depth_level < self.options.max_depth

    def _list_children(self, node: TreeNode, branch: Branch) -> List[Tuple[TreeNode, Optional[FileIdentifier]]]:
        with os.scandir(node.fs_path) as it:
            entries = sorted(it, key=lambda entry: entry.name)

        children = []
        for entry in entries:
            if not self.options.show_hidden and entry.name.startswith("."):
                continue
            children.append(self._create_node(entry, node, branch))
        return children

    def _create_node(
        self, entry: "os.DirEntry[str]", parent: TreeNode, branch: Branch
    ) -> Tuple[TreeNode, Optional[FileIdentifier]]:
        """Create the node for one directory entry.

        Returns:
            The node, and the identity of the directory it leads to if it
            should be descended into.
        """
        try:
            entry_stat = entry.stat(follow_symlinks=False)
        except OSError as e:
            node = TreeNode(
                entry.name, parent=parent, fs_path=entry.path, entry_type=EntryType.ERROR, error=e.strerror or str(e)
            )
            return node, None

        mode = entry_stat.st_mode
        if stat.S_ISLNK(mode):
            return self._create_symlink_node(entry, parent, branch, mode)

        if stat.S_ISDIR(mode):
            node = TreeNode(entry.name, parent=parent, fs_path=entry.path, entry_type=EntryType.DIRECTORY, mode=mode)
            return node, FileIdentifier.from_stat(entry_stat)

        is_executable = stat.S_ISREG(mode) and bool(mode & stat.S_IXUSR)
        node = TreeNode(
            entry.name,
            parent=parent,
            fs_path=entry.path,
            entry_type=EntryType.EXECUTABLE if is_executable else EntryType.FILE,
            size_bytes=entry_stat.st_size,
            mode=mode,
        )
        return node, None

    def _create_symlink_node(
        self, entry: "os.DirEntry[str]", parent: TreeNode, branch: Branch, link_mode: int
    ) -> Tuple[TreeNode, Optional[FileIdentifier]]:
        try:
            target = os.readlink(entry.path)
        except OSError as e:
            node = TreeNode(
                entry.name, parent=parent, fs_path=entry.path, entry_type=EntryType.ERROR, error=e.strerror or str(e)
            )
            return node, None

        # A dangling link has no target metadata; it is still a valid entry
        target_stat: Optional[os.stat_result]
        try:
            target_stat = os.stat(entry.path)
        except OSError:
            target_stat = None

        points_to_dir = target_stat is not None and stat.S_ISDIR(target_stat.st_mode)
        node = TreeNode(
            entry.name,
            parent=parent,
            fs_path=entry.path,
            entry_type=EntryType.SYMLINK,
            size_bytes=target_stat.st_size if target_stat is not None and not points_to_dir else None,
            mode=target_stat.st_mode if target_stat is not None else link_mode,
            symlink_target=target,
        )

        if not points_to_dir or target_stat is None:
            return node, None

        target_id = FileIdentifier.from_stat(target_stat)
        if target_id in branch:
            node.symlink_target = LOOP_MARKER
            return node, None

        node.is_dir = True
        return node, target_id

    def _passes_type_filter(self, node: TreeNode) -> bool:
        """Apply the symlinks-only and executables-only options to a non-directory."""
        if not (self.options.only_symlinks or self.options.only_executables):
            return True
        if self.options.only_symlinks and node.is_symlink:
            return True
        return self.options.only_executables and node.entry_type == EntryType.EXECUTABLE

    def _is_match(self, node: TreeNode) -> bool:
        """Whether a non-directory entry satisfies every filter that can hide it."""
        if node.is_error or not self._passes_type_filter(node):
            return False
        return self.content_filter.matches(node.name, size=node.size_bytes)

    def _annotate_matches(self, nodes: List[TreeNode]) -> None:
        # Reversed pre-order visits every node after all of its descendants
        for node in reversed(nodes):
            if not node.is_dir and self._is_match(node):
                node.subtree_has_match = True
            if node.subtree_has_match and node.parent is not None:
                node.parent.subtree_has_match = True

    def is_visible(self, node: TreeNode) -> bool:
        """Apply the visibility chain to a non-root node.

        The chain is: directories-only, error suppression, then for
        directories the subtree-match rule and for other entries the
        symlink/executable and content filters.
        """
        options = self.options
        if options.dirs_only and not node.is_dir:
            return False
        if node.is_error:
            return not options.has_any_filter
        if node.is_dir:
            return node.subtree_has_match if options.has_content_filter else True
        return self._is_match(node)

    def _prune(self, nodes: List[TreeNode]) -> TraversalStats:
        stats = TraversalStats()
        size_filter_active = self.options.size_range is not None
        max_depth = self.options.max_depth
        pruned: Set[int] = set()

        for node in nodes:
            if node.is_root:
                continue
            if id(node.parent) in pruned:
                pruned.add(id(node))
                continue
            too_deep = max_depth is not None and node.depth_level > max_depth
            if too_deep or not self.is_visible(node):
                pruned.add(id(node))
                node.parent = None
                continue
            stats.record(node, size_filter_active)

        return stats
