from abc import ABC, abstractmethod
from typing import Optional


class BaseEntryFilter(ABC):
    """
    Abstract base class defining the interface for entry display filters.

    This class serves as a contract for implementing content filters (e.g., name
    patterns, size ranges) that decide whether a non-directory entry should be
    displayed. A filter answers for one entry at a time; deciding whether a
    directory is shown because something below it matched is the walker's job.

    Example:
        >>> from lstree.filters.pattern_filter import PatternFilter
        >>> name_filter = PatternFilter("*.py")
        >>> name_filter.matches("setup.py")
        True
        >>> name_filter.matches("setup.cfg")
        False
        >>>
        >>> from lstree.filters.size_filter import SizeRange, SizeRangeFilter
        >>> size_filter = SizeRangeFilter(SizeRange(0, 100))
        >>> size_filter.matches("big.bin", size=4096)
        False
        >>> size_filter.matches("docs", is_dir=True)
        True
    """

    @abstractmethod
    def matches(self, name: str, size: Optional[int] = None, is_dir: bool = False) -> bool:
        """
        Determine if an entry satisfies this filter.

        Args:
            name (str): The entry's base name (no directory components).
            size (Optional[int]): The entry's size in bytes, or None if unknown.
            is_dir (bool): Whether the entry is a directory.

        Returns:
            bool: True if the entry should be displayed, False otherwise.
        """
        pass

    def has_rules(self) -> bool:
        """
        Check whether this filter restricts anything.

        Returns:
            bool: True by default; composites override this to report emptiness.
        """
        return True
