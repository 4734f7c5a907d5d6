"""Name pattern filters using exact, glob or substring matching."""

import re
from enum import Enum
from typing import Optional, Pattern

from pathspec.patterns import GitWildMatchPattern  # type: ignore

from .base_filter import BaseEntryFilter

WILDCARD_CHARACTERS = ("*", "?")


class PatternMode(str, Enum):
    """How a name pattern is compared against entry names.

    Values:
        EXACT: The name must equal the pattern (case-sensitive)
        GLOB: Wildcard match, ``*`` for any run and ``?`` for one character (case-insensitive)
        SUBSTRING: The name must contain the pattern (case-sensitive)
    """

    EXACT = "exact"
    GLOB = "glob"
    SUBSTRING = "substring"


def detect_pattern_mode(pattern: str, exact: bool = False) -> PatternMode:
    """Choose the matching mode for a pattern.

    Args:
        pattern: The pattern as typed by the user.
        exact: Whether exact matching was explicitly requested.

    Returns:
        EXACT when requested, GLOB when the pattern holds a wildcard, SUBSTRING otherwise.

    Example:
        >>> detect_pattern_mode("*.txt").value
        'glob'
        >>> detect_pattern_mode("report").value
        'substring'
        >>> detect_pattern_mode("report", exact=True).value
        'exact'
    """
    if exact:
        return PatternMode.EXACT
    if any(char in pattern for char in WILDCARD_CHARACTERS):
        return PatternMode.GLOB
    return PatternMode.SUBSTRING


def compile_glob(pattern: str) -> Pattern[str]:
    """Compile a wildcard pattern into a case-insensitive regex for base names.

    The translation is delegated to pathspec's gitwildmatch compiler, so ``*``
    and ``?`` never cross a path separator. Every other character is literal:
    ``[``, ``]`` and ``\\`` are escaped before compiling, as is a leading ``!``
    or ``#``.

    Args:
        pattern: Wildcard pattern such as ``*.txt`` or ``data_??.csv``.

    Returns:
        A compiled regular expression.

    Raises:
        ValueError: If the pattern cannot be compiled.
    """
    escaped = pattern.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
    # A leading "!" or "#" has special meaning in gitwildmatch syntax
    if escaped[:1] in ("!", "#"):
        escaped = "\\" + escaped
    try:
        regex, _include = GitWildMatchPattern.pattern_to_regex(escaped)
    except ValueError as e:
        raise ValueError(f"Invalid pattern '{pattern}': {e}")
    if regex is None:
        raise ValueError(f"Invalid pattern '{pattern}': pattern matches nothing")
    return re.compile(regex, re.IGNORECASE)


class PatternFilter(BaseEntryFilter):
    """Filter entries by name.

    Three modes are supported:
    - EXACT: ``report`` matches only ``report``
    - GLOB: ``*.txt`` matches ``a.txt`` and ``B.TXT`` but not ``a.txtx``
    - SUBSTRING: ``report`` matches ``report.pdf`` and ``q3-report``

    When no mode is given it is derived from the pattern with
    :func:`detect_pattern_mode`.

    Attributes:
        pattern (str): The pattern as given.
        mode (PatternMode): The matching mode in effect.

    Example:
        >>> PatternFilter("*.txt").matches("notes.TXT")
        True
        >>> PatternFilter("*.txt").matches("notes.txtx")
        False
        >>> PatternFilter("report").matches("q3-report.pdf")
        True
        >>> PatternFilter("report", PatternMode.EXACT).matches("report.pdf")
        False
    """

    def __init__(self, pattern: str, mode: Optional[PatternMode] = None):
        """Initialize the pattern filter.

        Args:
            pattern: The name pattern.
            mode: Matching mode. Defaults to the mode detected from the pattern.

        Raises:
            ValueError: If the pattern is empty or is an invalid glob.
        """
        if not pattern:
            raise ValueError("Pattern cannot be empty")
        self.pattern = pattern
        self.mode = mode if mode is not None else detect_pattern_mode(pattern)
        self._regex: Optional[Pattern[str]] = compile_glob(pattern) if self.mode == PatternMode.GLOB else None

    def matches(self, name: str, size: Optional[int] = None, is_dir: bool = False) -> bool:
        """Check if a name satisfies the pattern.

        Args:
            name: Entry base name.
            size: Ignored.
            is_dir: Ignored; directories are matched by name like any entry.

        Returns:
            True if the name matches in the configured mode.
        """
        if self.mode == PatternMode.EXACT:
            return name == self.pattern
        if self._regex is not None:
            return self._regex.match(name) is not None
        return self.pattern in name
