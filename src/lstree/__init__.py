"""Directory tree visualization utilities.

This package provides tools for listing a directory hierarchy as an indented
tree, annotated with entry types, sizes and permissions, and filtered by name
pattern, size range, symlinks or executables.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("lstree")
except PackageNotFoundError:
    __version__ = "unknown"
