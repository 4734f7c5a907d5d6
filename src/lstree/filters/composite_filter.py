"""Composite filter for combining multiple content filters."""

from typing import List, Optional, Sequence

from .base_filter import BaseEntryFilter


class CompositeEntryFilter(BaseEntryFilter):
    """Composite filter that requires every constituent filter to match.

    This follows the logical AND pattern: an entry is displayed only if all
    filters accept it. Combining a name pattern with a size range therefore
    shows files that have the right name *and* the right size.

    An empty composite accepts everything.

    Attributes:
        filters (List[BaseEntryFilter]): Constituent filters.

    Example:
        >>> from lstree.filters.pattern_filter import PatternFilter
        >>> from lstree.filters.size_filter import SizeRange, SizeRangeFilter
        >>> composite = CompositeEntryFilter([PatternFilter("*.log"), SizeRangeFilter(SizeRange(0, 1024))])
        >>> composite.matches("app.log", size=200)
        True
        >>> composite.matches("app.log", size=5000)
        False
        >>> composite.matches("app.txt", size=200)
        False
    """

    def __init__(self, filters: Sequence[BaseEntryFilter]):
        """Initialize the composite.

        Args:
            filters: Filters to combine. May be empty.
        """
        self.filters: List[BaseEntryFilter] = list(filters)

    def matches(self, name: str, size: Optional[int] = None, is_dir: bool = False) -> bool:
        return all(f.matches(name, size=size, is_dir=is_dir) for f in self.filters)

    def has_rules(self) -> bool:
        """Check whether any constituent filter restricts anything."""
        return any(f.has_rules() for f in self.filters)

    def add_filter(self, entry_filter: BaseEntryFilter) -> None:
        self.filters.append(entry_filter)

    def __len__(self) -> int:
        return len(self.filters)
