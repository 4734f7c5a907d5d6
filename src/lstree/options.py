"""Immutable configuration for a single tree listing."""

from dataclasses import dataclass
from typing import Optional

from lstree.filters.pattern_filter import PatternMode
from lstree.filters.size_filter import SizeRange
from lstree.types import PathType


@dataclass(frozen=True)
class TreeOptions:
    """Display and filter options resolved once at startup.

    Attributes:
        root: Directory to list, as given by the user (string or path-like).
        show_hidden: Include entries whose names start with ".".
        dirs_only: Display directories only.
        use_color: Colorize entries by category.
        use_ascii: Draw branches with ASCII instead of box-drawing characters.
        show_size: Prefix non-directory entries with a human-readable size.
        show_permissions: Prefix entries with an ``rwxrwxrwx`` string.
        follow_symlinks: Set by -L. Recorded only; links to directories are always descended.
        only_symlinks: Display symbolic links only (directories are kept).
        only_executables: Display executable files only (directories are kept).
        pattern: Name pattern, or None when no pattern filter is active.
        pattern_mode: How ``pattern`` is matched when given explicitly.
        size_range: Inclusive byte range, or None when no size filter is active.
        max_depth: Deepest level displayed (1 is the root's children), or None.
    """

    root: PathType = "."
    show_hidden: bool = False
    dirs_only: bool = False
    use_color: bool = True
    use_ascii: bool = False
    show_size: bool = False
    show_permissions: bool = False
    follow_symlinks: bool = False
    only_symlinks: bool = False
    only_executables: bool = False
    pattern: Optional[str] = None
    pattern_mode: Optional[PatternMode] = None
    size_range: Optional[SizeRange] = None
    max_depth: Optional[int] = None

    @property
    def has_content_filter(self) -> bool:
        """True when a name pattern or size range decides directory visibility."""
        return self.pattern is not None or self.size_range is not None

    @property
    def has_any_filter(self) -> bool:
        """True when any filter that can hide files is active."""
        return self.has_content_filter or self.only_symlinks or self.only_executables
