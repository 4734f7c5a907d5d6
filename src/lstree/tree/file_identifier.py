"""Device/inode identity used to detect symlink loops."""

import os
from typing import Any, Optional


class FileIdentifier:
    """Identity of a directory on disk, as a (device, inode) pair.

    Two paths reaching the same directory, for example a directory and a
    symlink pointing at it, share one identifier. The walker keeps the
    identifiers of the directories on the current branch and refuses to
    descend into a followed symlink whose identifier is already among them.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.

    Example:
        >>> FileIdentifier(1, 42) == FileIdentifier(1, 42)
        True
        >>> FileIdentifier(1, 42) in {FileIdentifier(2, 42)}
        False
    """

    def __init__(self, device_id: int, inode_number: int):
        self.device_id = device_id
        self.inode_number = inode_number

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> "FileIdentifier":
        return cls(stat_result.st_dev, stat_result.st_ino)

    @classmethod
    def for_path(cls, path: str) -> Optional["FileIdentifier"]:
        """Identify the directory a path resolves to, following symlinks.

        Returns:
            The identifier, or None if the path cannot be stat'ed.
        """
        try:
            return cls.from_stat(os.stat(path))
        except OSError:
            return None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FileIdentifier):
            return False
        return self.device_id == other.device_id and self.inode_number == other.inode_number

    def __hash__(self) -> int:
        return hash((self.device_id, self.inode_number))

    def __repr__(self) -> str:
        return f"FileIdentifier(device_id={self.device_id}, inode_number={self.inode_number})"
