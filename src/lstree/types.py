from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryType(Enum):
    """Enumeration of entry types for categorizing items during traversal.

    This enum is used to differentiate between regular files, executables,
    directories, symlinks and entries whose metadata could not be read.

    Attributes:
        FILE: Regular (non-executable) file or other non-directory object
        EXECUTABLE: File with the owner execute bit set
        DIRECTORY: Directory
        SYMLINK: Symbolic link
        ERROR: Entry whose metadata could not be read
    """

    FILE = "file"
    EXECUTABLE = "executable"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    ERROR = "error"
