"""Size range filters and parsing of ranges such as ``36K:1M``."""

import sys
from dataclasses import dataclass
from typing import Optional, TextIO, Tuple

from humanfriendly import InvalidSize, parse_size

from lstree.exceptions import InvalidSizeError

from .base_filter import BaseEntryFilter

# Largest size a range can express; used for an open upper bound
MAX_SIZE = 2**64 - 1


@dataclass(frozen=True)
class SizeRange:
    """Inclusive byte range.

    Attributes:
        min_bytes: Smallest accepted size.
        max_bytes: Largest accepted size; MAX_SIZE when unbounded.

    Example:
        >>> size_range = SizeRange(10, 20)
        >>> size_range.contains(10), size_range.contains(21)
        (True, False)
    """

    min_bytes: int = 0
    max_bytes: int = MAX_SIZE

    @property
    def is_unbounded(self) -> bool:
        return self.max_bytes >= MAX_SIZE

    def contains(self, size: int) -> bool:
        return self.min_bytes <= size <= self.max_bytes


def parse_size_bound(token: str) -> int:
    """Parse one bound of a size range to bytes.

    Units ``B``, ``K``, ``M``, ``G`` and ``T`` (case-insensitive) are powers of
    1024; a bare number is a byte count.

    Args:
        token: Size string like '36K', '1M', '500' or '1.5G'.

    Returns:
        Size in bytes.

    Raises:
        InvalidSizeError: If the token is not a valid size.

    Example:
        >>> parse_size_bound("36K")
        36864
        >>> parse_size_bound("500")
        500
    """
    try:
        return int(parse_size(token.strip(), binary=True))
    except InvalidSize as e:
        raise InvalidSizeError(token, str(e))


def _parse_bound_lossy(token: str, default: int, error_stream: Optional[TextIO]) -> Tuple[int, bool]:
    if not token.strip():
        return default, True
    try:
        return parse_size_bound(token), True
    except InvalidSizeError as e:
        print(f"Error: {e}; using 0", file=error_stream or sys.stderr)
        return 0, False


def parse_size_range(text: str, error_stream: Optional[TextIO] = None) -> SizeRange:
    """Parse a human size range into an inclusive byte range.

    The grammar is ``[min][:[max]]``. An omitted min is 0 and an omitted max
    is unbounded; a value without a colon sets only the min. A bound that
    cannot be parsed is reported to ``error_stream`` and treated as 0.

    Args:
        text: Range such as '36K:1M', ':500K', '10K:' or '100'.
        error_stream: Where parse errors are reported. Defaults to sys.stderr.

    Returns:
        The parsed SizeRange.

    Example:
        >>> parse_size_range("36K:1M")
        SizeRange(min_bytes=36864, max_bytes=1048576)
        >>> parse_size_range(":500K").max_bytes
        512000
        >>> parse_size_range("10K:").is_unbounded
        True
    """
    size_range, _clean = parse_size_range_checked(text, error_stream)
    return size_range


def parse_size_range_checked(text: str, error_stream: Optional[TextIO] = None) -> Tuple[SizeRange, bool]:
    """Parse a size range like parse_size_range, also telling whether it was lossy.

    Returns:
        The parsed SizeRange, and True when every given bound parsed cleanly
        (False when one of them was reported and replaced by 0).

    Example:
        >>> import io
        >>> parse_size_range_checked("1K:2K")
        (SizeRange(min_bytes=1024, max_bytes=2048), True)
        >>> parse_size_range_checked("10K:abc", error_stream=io.StringIO())
        (SizeRange(min_bytes=10240, max_bytes=0), False)
    """
    min_token, _colon, max_token = text.partition(":")
    min_bytes, min_clean = _parse_bound_lossy(min_token, 0, error_stream)
    max_bytes, max_clean = _parse_bound_lossy(max_token, MAX_SIZE, error_stream)
    return SizeRange(min_bytes, max_bytes), min_clean and max_clean


class SizeRangeFilter(BaseEntryFilter):
    """Filter entries whose size lies within an inclusive range.

    Directories always pass, since a directory's own size says nothing about
    what it contains. Entries of unknown size never pass.

    Attributes:
        size_range (SizeRange): The accepted range.

    Example:
        >>> size_filter = SizeRangeFilter(parse_size_range("1K:2K"))
        >>> size_filter.matches("a.bin", size=1500)
        True
        >>> size_filter.matches("b.bin", size=100)
        False
    """

    def __init__(self, size_range: SizeRange):
        if size_range.min_bytes < 0:
            raise ValueError("Size cannot be negative")
        self.size_range = size_range

    def matches(self, name: str, size: Optional[int] = None, is_dir: bool = False) -> bool:
        if is_dir:
            return True
        if size is None:
            return False
        return self.size_range.contains(size)
