"""Command-line interface for lstree.

This module provides the command-line entry point for lstree. It parses
options, walks the requested directory, and writes the rendered tree and
summary to stdout, handling signals for graceful interruption.

Key Features:
    - Indented tree with Unicode or ASCII branches
    - Color per entry category, sizes and permission strings
    - Name pattern, size range, symlink-only and executable-only filters
    - Depth limit
    - Signal handling (SIGPIPE on Unix systems, SIGINT)

Exit Codes:
    0: Successful completion, including listings where nothing matched
    1: Invalid command line, or the root directory cannot be listed
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Current directory with sizes
    $ lstree -s

    # Only matching files, at most three levels deep
    $ lstree -P "*.md" -D 3 /path/to/dir
"""

import sys
from typing import Optional, Sequence

from lstree.cli.argparser import build_options, create_parser, validate_args
from lstree.cli.safe_writer import SafeWriter
from lstree.cli.signal_handler import EXIT_SIGINT, setup_signal_handling, signal_handler
from lstree.exceptions import RootPathError
from lstree.render.terminal import detect_capabilities, setup_console
from lstree.render.tree_renderer import TreeRenderer
from lstree.tree.tree_walker import TreeWalker


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the lstree command-line interface.

    Args:
        argv: Command-line arguments without the program name. Defaults to sys.argv[1:].

    Exit codes:
        0: Successful completion
        1: Invalid arguments or root directory failure
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    try:
        parser = create_parser()
        # argparse exits with 1 for argument errors, 0 for --help/--version
        args = parser.parse_args(argv)

        validate_args(args)
        options = build_options(args)

        capabilities = detect_capabilities(use_ascii=options.use_ascii, use_color=options.use_color)
        if capabilities.use_color:
            setup_console()

        result = TreeWalker(options, should_stop=signal_handler.stop_requested).walk()
        renderer = TreeRenderer(options, capabilities)

        with SafeWriter(sys.stdout.fileno()) as safe_writer:
            try:
                safe_writer.write_lines(renderer.render(result))
            except BrokenPipeError:
                pass  # Nothing more can be written; the exit code reflects the signal

    except KeyboardInterrupt:
        # Raised by a stopped walk, or by a second Ctrl+C
        sys.exit(EXIT_SIGINT)
    except RootPathError as e:
        print(f"Error: cannot list {e.path}: {e.reason}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    # Handle exit codes based on received signals
    exit_code = signal_handler.exit_code
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
