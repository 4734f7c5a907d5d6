"""Tests for custom exceptions."""

import pytest

from lstree.exceptions import InvalidSizeError, RootPathError


class TestRootPathError:
    """Test RootPathError exception."""

    def test_message_and_attributes(self):
        error = RootPathError("/missing", "No such file or directory")

        assert error.path == "/missing"
        assert error.reason == "No such file or directory"
        assert str(error) == "/missing: No such file or directory"

    def test_is_plain_exception(self):
        assert isinstance(RootPathError("x", "y"), Exception)
        assert not isinstance(RootPathError("x", "y"), OSError)


class TestInvalidSizeError:
    """Test InvalidSizeError exception."""

    def test_message_and_token(self):
        error = InvalidSizeError("12Q", "unknown unit")

        assert error.token == "12Q"
        assert str(error) == "invalid size '12Q': unknown unit"

    def test_caught_as_value_error(self):
        with pytest.raises(ValueError):
            raise InvalidSizeError("abc", "not a number")
