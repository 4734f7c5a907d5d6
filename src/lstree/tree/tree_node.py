"""Node representation for entries in the displayed tree."""

from typing import Any, Optional

from anytree import Node

from lstree.types import EntryType

LOOP_MARKER = "[loop detected]"


class TreeNode(Node):  # type: ignore
    """Node class representing one filesystem entry in the tree.

    Extends anytree.Node with the metadata needed to filter and render an
    entry: its category, size, permission bits and symlink target. Inherits
    parent/children bookkeeping and iteration from anytree.Node.

    Attributes:
        name (str): The entry's base name (the root holds the path as given).
        fs_path (str): Full path used to access the entry.
        entry_type (EntryType): Category of the entry.
        depth_level (int): 0 for the root, 1 for its children, and so on.
        size_bytes (Optional[int]): Size in bytes, or None if unknown. For symlinks
            this is the target's size.
        mode (Optional[int]): Permission bits (``st_mode``), or None if unknown.
        symlink_target (Optional[str]): Target of a symbolic link, if any.
        is_dir (bool): True if the entry is listed as a directory, including
            symlinks to directories that are descended.
        subtree_has_match (bool): True if this entry or something below it
            satisfies the active content filters.
        error (Optional[str]): Why metadata could not be read, if it couldn't.

    Example:
        >>> root = TreeNode("project", fs_path="project", entry_type=EntryType.DIRECTORY)
        >>> child = TreeNode("setup.py", parent=root, fs_path="project/setup.py", size_bytes=120)
        >>> child.depth_level
        1
        >>> child.is_dir
        False
    """

    def __init__(
        self,
        name: str,
        parent: Optional["TreeNode"] = None,
        fs_path: str = "",
        entry_type: EntryType = EntryType.FILE,
        size_bytes: Optional[int] = None,
        mode: Optional[int] = None,
        symlink_target: Optional[str] = None,
        error: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.fs_path = fs_path or name
        self.entry_type = entry_type
        self.size_bytes = size_bytes
        self.mode = mode
        self.symlink_target = symlink_target
        self.error = error
        self.is_dir = entry_type == EntryType.DIRECTORY
        self.subtree_has_match = False
        self.depth_level: int = 0 if parent is None else parent.depth_level + 1

    @property
    def is_symlink(self) -> bool:
        return self.entry_type == EntryType.SYMLINK

    @property
    def is_error(self) -> bool:
        return self.entry_type == EntryType.ERROR

    @property
    def is_loop(self) -> bool:
        return self.symlink_target == LOOP_MARKER
