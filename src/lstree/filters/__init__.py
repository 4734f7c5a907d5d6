"""Content filters for deciding which entries are displayed."""

from .base_filter import BaseEntryFilter
from .composite_filter import CompositeEntryFilter
from .pattern_filter import PatternFilter, PatternMode
from .size_filter import SizeRange, SizeRangeFilter, parse_size_range

__all__ = [
    "BaseEntryFilter",
    "CompositeEntryFilter",
    "PatternFilter",
    "PatternMode",
    "SizeRange",
    "SizeRangeFilter",
    "parse_size_range",
]
