"""Command-line argument parsing for lstree.

This module defines the command-line interface for lstree, handling argument
parsing, validation, and conversion of the parsed arguments into TreeOptions.
"""

import argparse
import sys
from typing import NoReturn, Optional, TextIO

from lstree import __version__
from lstree.filters.pattern_filter import PatternFilter, detect_pattern_mode
from lstree.filters.size_filter import parse_size_range_checked
from lstree.options import TreeOptions

# Exit status for invalid command lines
EXIT_USAGE = 1


class TreeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors.

    argparse's default is 2; lstree reports every invalid command line with 1.
    """

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with lstree's options.
    """
    description = """
    lstree: list a directory hierarchy as an indented tree.

    Entries are annotated with their type (by color), and optionally their size
    and permissions. Filters narrow the listing to entries with a matching name,
    a size within a range, symbolic links, or executables; directories are kept
    whenever something inside them matches.
    """

    epilog = """
    Examples:
      # Current directory
      lstree

      # Hidden files, sizes and permissions, plain ASCII without colors
      lstree -aspin /path/to/project

      # Only Python files, anywhere below src
      lstree -P "*.py" src

      # Names containing "report", or exactly "report"
      lstree -f report docs
      lstree -f report --exact docs

      # Files between 36 KiB and 1 MiB; files of at least 10 MiB
      lstree -S 36K:1M
      lstree -S 10M:

      # Two levels deep, directories only
      lstree -d -D 2 /usr

      # Symbolic links / executables only
      lstree -l ~/bin
      lstree -e ~/bin
    """

    parser = TreeArgumentParser(
        prog="lstree",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"lstree {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to list (default: current directory).",
    )
    parser.add_argument("-a", "--all", dest="show_hidden", action="store_true", help="Include hidden entries.")
    parser.add_argument("-d", "--dirs-only", action="store_true", help="List directories only.")
    parser.add_argument("-n", "--no-color", action="store_true", help="Disable colored output.")
    parser.add_argument(
        "-i", "--ascii", action="store_true", help="Draw branches with ASCII instead of box-drawing characters."
    )
    parser.add_argument("-s", "--size", dest="show_size", action="store_true", help="Show file sizes.")
    parser.add_argument(
        "-p", "--permissions", dest="show_permissions", action="store_true", help="Show permission strings."
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help=(
            "Follow symbolic links. Accepted for compatibility: links to directories are always descended, "
            "and loops are detected and not followed."
        ),
    )
    parser.add_argument(
        "-l", "--only-symlinks", action="store_true", help="Show only symbolic links (and their directories)."
    )
    parser.add_argument(
        "-e", "--only-executables", action="store_true", help="Show only executable files (and their directories)."
    )
    parser.add_argument(
        "-P",
        "-f",
        "--pattern",
        metavar="PATTERN",
        help=(
            "Show only entries whose name matches PATTERN. With * or ? it is a case-insensitive wildcard "
            "pattern; otherwise names containing PATTERN match."
        ),
    )
    parser.add_argument("--exact", action="store_true", help="Match PATTERN against the whole name exactly.")
    parser.add_argument(
        "-S",
        "--size-range",
        metavar="MIN:MAX",
        help="Show only files whose size is within MIN:MAX, e.g. 36K:1M, :500K, 10M: (units B, K, M, G, T).",
    )
    parser.add_argument("-D", "--max-depth", type=int, metavar="N", help="Maximum display depth.")

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.max_depth is not None and args.max_depth < 0:
        raise ValueError("-D/--max-depth must be zero or greater")
    if args.pattern is not None and not args.pattern:
        raise ValueError("-P/--pattern cannot be empty")
    if args.exact and args.pattern is None:
        raise ValueError("--exact requires -P/--pattern")
    if args.pattern is not None:
        # Fails early on wildcard patterns that cannot be compiled
        PatternFilter(args.pattern, detect_pattern_mode(args.pattern, args.exact))


def build_options(args: argparse.Namespace, error_stream: Optional[TextIO] = None) -> TreeOptions:
    """Convert validated arguments into TreeOptions.

    Args:
        args: Parsed and validated command-line arguments.
        error_stream: Where size parsing errors are reported. Defaults to sys.stderr.

    Returns:
        The immutable options for this run.

    Raises:
        ValueError: If a cleanly parsed size range has its minimum above its maximum.
    """
    size_range = None
    if args.size_range is not None:
        size_range, clean = parse_size_range_checked(args.size_range, error_stream=error_stream)
        # A lossy range was already reported and is kept as parsed
        if clean and size_range.min_bytes > size_range.max_bytes:
            raise ValueError(f"-S/--size-range minimum exceeds maximum in '{args.size_range}'")

    return TreeOptions(
        root=args.directory,
        show_hidden=args.show_hidden,
        dirs_only=args.dirs_only,
        use_color=not args.no_color,
        use_ascii=args.ascii,
        show_size=args.show_size,
        show_permissions=args.show_permissions,
        follow_symlinks=args.follow_symlinks,
        only_symlinks=args.only_symlinks,
        only_executables=args.only_executables,
        pattern=args.pattern,
        pattern_mode=detect_pattern_mode(args.pattern, args.exact) if args.pattern is not None else None,
        size_range=size_range,
        max_depth=args.max_depth,
    )
