"""Key tokens produced by the decoder.

Printable bytes and control codes are returned as one-character strings.
Special keys use the names below so they never collide with a literal byte.
"""

from __future__ import annotations

ESC = "\x1b"

ARROW_LEFT = "ARROW_LEFT"
ARROW_RIGHT = "ARROW_RIGHT"
ARROW_UP = "ARROW_UP"
ARROW_DOWN = "ARROW_DOWN"
DEL_KEY = "DEL"
HOME_KEY = "HOME"
END_KEY = "END"
PAGE_UP = "PAGE_UP"
PAGE_DOWN = "PAGE_DOWN"

ARROW_KEYS = frozenset({ARROW_LEFT, ARROW_RIGHT, ARROW_UP, ARROW_DOWN})


def ctrl_key(ch: str) -> str:
    """Return the control code a terminal sends for Ctrl+``ch``."""
    return chr(ord(ch) & 0x1F)


QUIT_KEY = ctrl_key("q")
