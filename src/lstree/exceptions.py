class RootPathError(Exception):
    """
    Exception raised when the root of the tree cannot be displayed.

    This covers a root path that does not exist, is not a directory, or cannot
    be listed. Unlike failures further down the tree, which are reported and
    skipped, a root failure ends the run.

    Attributes:
        path (str): The root path that could not be used.

    Example:
        >>> error = RootPathError("/missing", "No such file or directory")
        >>> str(error)
        '/missing: No such file or directory'
    """

    def __init__(self, path: str, reason: str) -> None:
        """
        Initialize the exception with the offending path and a reason.

        Args:
            path (str): The root path that could not be used.
            reason (str): Human-readable explanation of the failure.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class InvalidSizeError(ValueError):
    """
    Exception raised when a size token such as "36K" cannot be parsed.

    Example:
        >>> error = InvalidSizeError("12Q", "unknown unit")
        >>> str(error)
        "invalid size '12Q': unknown unit"
    """

    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        super().__init__(f"invalid size '{token}': {reason}")
