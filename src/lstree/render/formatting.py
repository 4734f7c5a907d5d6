"""Formatting helpers for entry sizes and permission bits."""

import stat
from typing import Optional

SIZE_UNITS = ("B", "K", "M", "G", "T")

_PERMISSION_BITS = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)


def format_size(size: int) -> str:
    """Format a byte count with a 1024-based unit.

    Sizes below 1024 are shown as whole bytes; larger sizes are scaled to the
    largest unit that keeps the value at or above 1 and shown with one decimal.

    Example:
        >>> format_size(0)
        '0B'
        >>> format_size(1023)
        '1023B'
        >>> format_size(1024)
        '1.0K'
        >>> format_size(1536)
        '1.5K'
        >>> format_size(1048576)
        '1.0M'
    """
    value = float(size)
    unit_index = 0
    while value >= 1024.0 and unit_index < len(SIZE_UNITS) - 1:
        value /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{size}{SIZE_UNITS[0]}"
    return f"{value:.1f}{SIZE_UNITS[unit_index]}"


def format_permissions(mode: Optional[int]) -> str:
    """Render owner/group/other permission bits as a 9-character string.

    Unknown modes render as all dashes.

    Example:
        >>> format_permissions(0o755)
        'rwxr-xr-x'
        >>> format_permissions(0o640)
        'rw-r-----'
        >>> format_permissions(None)
        '---------'
    """
    if mode is None:
        return "-" * len(_PERMISSION_BITS)
    return "".join(char if mode & bit else "-" for bit, char in _PERMISSION_BITS)
