"""Tests for size and permission formatting."""

import pytest

from lstree.render.formatting import format_permissions, format_size


@pytest.mark.parametrize(
    "size,expected",
    [
        (0, "0B"),
        (1, "1B"),
        (1023, "1023B"),
        (1024, "1.0K"),
        (1536, "1.5K"),
        (1048576, "1.0M"),
        (5 * 1024**3, "5.0G"),
        (2 * 1024**4, "2.0T"),
        (3 * 1024**5, "3072.0T"),
    ],
)
def test_format_size(size, expected):
    assert format_size(size) == expected


@pytest.mark.parametrize(
    "mode,expected",
    [
        (0o755, "rwxr-xr-x"),
        (0o644, "rw-r--r--"),
        (0o640, "rw-r-----"),
        (0o000, "---------"),
        (0o777, "rwxrwxrwx"),
        (0o100755, "rwxr-xr-x"),
        (0o40700, "rwx------"),
        (None, "---------"),
    ],
)
def test_format_permissions(mode, expected):
    assert format_permissions(mode) == expected
