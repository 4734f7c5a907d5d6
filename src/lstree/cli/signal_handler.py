"""Signal handling for the lstree CLI.

A listing runs in two phases: the walk, which only reads the filesystem, and
the write, which streams lines to stdout. The handlers here record each signal
in an Event and let the running phase notice it:

- SIGINT (Ctrl+C) stops either phase. The walker polls ``stop_requested``
  between directories and the writer checks ``interrupted`` before each line.
- SIGPIPE (the reader closed stdout, e.g. ``lstree | head``) can only arrive
  while writing; the writer stops at the next line.

``exit_code`` turns whatever was received into the process exit status.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Optional

# SIGPIPE does not exist on Windows
SIGPIPE: Optional[int] = getattr(signal, "SIGPIPE", None)

EXIT_SIGINT = 130
EXIT_SIGPIPE = 141


class SignalHandler:
    """Records SIGPIPE and SIGINT for the walk and write phases of a listing.

    Each handler restores the original handler after the first signal, so a
    second Ctrl+C falls through to Python's default and raises
    KeyboardInterrupt wherever the program happens to be.

    Attributes:
        sigpipe_received: Event that is set when a SIGPIPE signal is received.
        sigint_received: Event that is set when a SIGINT signal is received.
        original_sigpipe_handler: Original SIGPIPE signal handler, if the platform has SIGPIPE.
        original_sigint_handler: Original SIGINT signal handler.

    Example:
        >>> handler = SignalHandler()
        >>> handler.stop_requested(), handler.exit_code is None
        (False, True)
        >>> handler.sigint_received.set()
        >>> handler.stop_requested(), handler.exit_code
        (True, 130)
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler: Any = signal.getsignal(SIGPIPE) if SIGPIPE is not None else None
        self.original_sigint_handler: Any = signal.getsignal(signal.SIGINT)

    def install(self) -> None:
        """Route SIGINT, and SIGPIPE where the platform has it, to this handler."""
        if SIGPIPE is not None:
            signal.signal(SIGPIPE, self.handle_sigpipe)
        signal.signal(signal.SIGINT, self.handle_sigint)

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        if SIGPIPE is not None:
            signal.signal(SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)

    def stop_requested(self) -> bool:
        """Whether a directory walk in progress should stop.

        Only SIGINT stops a walk; a closed pipe is noticed once output starts.
        """
        return self.sigint_received.is_set()

    @property
    def interrupted(self) -> bool:
        """Whether writing should stop."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    @property
    def exit_code(self) -> Optional[int]:
        """Exit status for the received signal, or None when none arrived.

        A broken pipe takes precedence, since nothing more can be reported.
        """
        if self.sigpipe_received.is_set():
            return EXIT_SIGPIPE
        if self.sigint_received.is_set():
            return EXIT_SIGINT
        return None


# Create a singleton instance for the application
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the singleton's handlers for SIGPIPE (where available) and SIGINT."""
    signal_handler.install()


def cleanup() -> None:
    """Cleanup function registered with atexit.

    Redirects stdout to the null device after SIGPIPE or SIGINT, so the
    interpreter's final flush of a closed or abandoned stdout prints nothing.
    """
    if signal_handler.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


# Register the cleanup function
atexit.register(cleanup)
