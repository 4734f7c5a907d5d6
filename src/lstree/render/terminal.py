"""Terminal capabilities: branch glyphs, colors and console setup.

Everything that depends on the platform or on the user's terminal is chosen
here once, before traversal starts, so that rendering code only deals with a
TerminalCapabilities value.
"""

import os
import sys
from dataclasses import dataclass
from typing import Mapping, NamedTuple, Optional

from lstree.types import EntryType


class TreeGlyphs(NamedTuple):
    """Characters used to draw tree branches."""

    vertical: str
    horizontal: str
    corner: str
    junction: str


UNICODE_GLYPHS = TreeGlyphs("│", "──", "└", "├")
ASCII_GLYPHS = TreeGlyphs("|", "--", "`", "|")
WINDOWS_ASCII_GLYPHS = TreeGlyphs("|", "--", "`", "+")


class ColorPalette(NamedTuple):
    """ANSI escape sequences per entry category."""

    directory: str
    file: str
    executable: str
    symlink: str
    error: str
    reset: str

    def code_for(self, entry_type: EntryType) -> str:
        return {
            EntryType.DIRECTORY: self.directory,
            EntryType.FILE: self.file,
            EntryType.EXECUTABLE: self.executable,
            EntryType.SYMLINK: self.symlink,
            EntryType.ERROR: self.error,
        }[entry_type]

    def paint(self, text: str, entry_type: EntryType) -> str:
        """Wrap text in the color for its category, if this palette has one.

        Example:
            >>> PLAIN_PALETTE.paint("src", EntryType.DIRECTORY)
            'src'
            >>> ANSI_PALETTE.paint("src", EntryType.DIRECTORY)
            '\\x1b[1;34msrc\\x1b[0m'
        """
        code = self.code_for(entry_type)
        if not code:
            return text
        return f"{code}{text}{self.reset}"


ANSI_PALETTE = ColorPalette(
    directory="\033[1;34m",
    file="\033[0;37m",
    executable="\033[1;32m",
    symlink="\033[1;36m",
    error="\033[1;31m",
    reset="\033[0m",
)
PLAIN_PALETTE = ColorPalette("", "", "", "", "", "")


@dataclass(frozen=True)
class TerminalCapabilities:
    """The glyph set and palette used for one run."""

    glyphs: TreeGlyphs = UNICODE_GLYPHS
    palette: ColorPalette = PLAIN_PALETTE

    @property
    def use_color(self) -> bool:
        return self.palette != PLAIN_PALETTE


def colors_enabled(use_color: bool, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Decide whether colors are used.

    Colors are on unless disabled by option or by a non-empty NO_COLOR
    environment variable (https://no-color.org).
    """
    environ = os.environ if environ is None else environ
    return use_color and not environ.get("NO_COLOR")


def detect_capabilities(
    use_ascii: bool = False,
    use_color: bool = True,
    platform: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> TerminalCapabilities:
    """Select glyphs and colors for the current platform and options.

    Args:
        use_ascii: Use ASCII branch characters instead of box drawing.
        use_color: Colors were not disabled on the command line.
        platform: Platform identifier. Defaults to sys.platform.
        environ: Environment mapping. Defaults to os.environ.

    Example:
        >>> caps = detect_capabilities(use_ascii=True, use_color=False, platform="linux")
        >>> caps.glyphs.junction, caps.use_color
        ('|', False)
        >>> detect_capabilities(use_ascii=True, use_color=False, platform="win32").glyphs.junction
        '+'
    """
    platform = sys.platform if platform is None else platform
    if use_ascii:
        glyphs = WINDOWS_ASCII_GLYPHS if platform == "win32" else ASCII_GLYPHS
    else:
        glyphs = UNICODE_GLYPHS
    palette = ANSI_PALETTE if colors_enabled(use_color, environ) else PLAIN_PALETTE
    return TerminalCapabilities(glyphs=glyphs, palette=palette)


def setup_console() -> None:
    """Enable ANSI escape processing on Windows consoles. No-op elsewhere."""
    if sys.platform != "win32":
        return

    import ctypes

    enable_virtual_terminal_processing = 0x0004
    kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
    handle = kernel32.GetStdHandle(-11)  # STD_OUTPUT_HANDLE
    mode = ctypes.c_uint32()
    if kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
        kernel32.SetConsoleMode(handle, mode.value | enable_virtual_terminal_processing)
