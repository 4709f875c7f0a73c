"""VT100 output sequences used by the renderer and terminal controller."""

from __future__ import annotations

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_SCREEN = "\x1b[2J"
CURSOR_HOME = "\x1b[H"
CLEAR_LINE = "\x1b[K"
INVERT_ON = "\x1b[7m"
INVERT_OFF = "\x1b[m"
CURSOR_FAR_BOTTOM_RIGHT = "\x1b[999C\x1b[999B"
QUERY_CURSOR_POSITION = "\x1b[6n"
LINE_END = "\r\n"


def cursor_position(row: int, col: int) -> str:
    """Move the cursor to 1-based ``row``/``col``."""
    return f"\x1b[{max(1, row)};{max(1, col)}H"
