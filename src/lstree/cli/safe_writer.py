"""Safe output writing utilities for the lstree CLI.

This module provides a writing interface for tree lines that handles
signals and closed pipes gracefully.
"""

import errno
import os
import types
from typing import Iterable, Optional, Type

from lstree.cli.signal_handler import signal_handler


class SafeWriter:
    """Line writer over a file descriptor with signal awareness.

    Lines are encoded as UTF-8 and written straight to the descriptor, so
    box-drawing glyphs are written the same way whatever the locale of the
    terminal. Writing stops with BrokenPipeError once SIGPIPE or SIGINT has
    been received or the reader has gone away.

    Attributes:
        fd: The file descriptor being written to.
        lines_written: Number of lines written so far.
    """

    def __init__(self, fd: int):
        """Initialize the safe writer.

        Args:
            fd: File descriptor for writing output, usually stdout's.
        """
        if not isinstance(fd, int):
            raise TypeError(f"Expected int file descriptor, got {type(fd).__name__}")
        self.fd = fd
        self.lines_written = 0
        self._closed = False

    def write(self, data: str) -> None:
        """Safely write data with signal checking.

        Args:
            data: String data to write.

        Raises:
            BrokenPipeError: If SIGPIPE/SIGINT was received or the pipe is broken.
            OSError: If another I/O error occurs during writing.
            ValueError: If attempting to write to a closed writer.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.interrupted:
            raise BrokenPipeError()

        encoded = data.encode("utf-8")
        try:
            # os.write may write fewer bytes than asked
            while encoded:
                written = os.write(self.fd, encoded)
                encoded = encoded[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise

    def write_lines(self, lines: Iterable[str]) -> None:
        """Write each line followed by a newline."""
        for line in lines:
            self.write(line + "\n")
            self.lines_written += 1

    def close(self) -> None:
        """Mark the writer closed. The descriptor is owned by the caller and stays open."""
        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        self.close()
