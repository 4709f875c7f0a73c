"""Frame composition.

Every frame is accumulated in one ``OutputBuffer`` and written with a single
``os.write`` so the terminal never shows a half-drawn screen.
"""

from __future__ import annotations

import os

from . import __version__, ansi
from .navigation import scroll
from .state import EditorState

FILLER = "~"
NO_NAME = "[No Name]"
STATUS_NAME_MAX = 20


class OutputBuffer:
    """Append-only byte accumulator flushed once per frame."""

    def __init__(self) -> None:
        self._data = bytearray()

    def append(self, chunk: str | bytes) -> None:
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8", errors="replace")
        self._data += chunk

    def getvalue(self) -> bytes:
        return bytes(self._data)

    def clear(self) -> None:
        self._data = bytearray()

    def flush(self, fd: int) -> int:
        """Write everything to ``fd`` and release the accumulated bytes."""
        data = bytes(self._data)
        self.clear()
        written = 0
        while written < len(data):
            written += os.write(fd, data[written:])
        return written

    def __len__(self) -> int:
        return len(self._data)


def welcome_line(screencols: int) -> str:
    welcome = f"picoview -- version {__version__}"[:screencols]
    padding = (screencols - len(welcome)) // 2
    if padding:
        return FILLER + " " * (padding - 1) + welcome
    return welcome


def draw_rows(state: EditorState, out: OutputBuffer) -> None:
    for y in range(state.screenrows):
        filerow = y + state.rowoff
        if filerow < state.numrows:
            render = state.rows[filerow].render
            out.append(render[state.coloff : state.coloff + state.screencols])
        elif state.numrows == 0:
            if filerow == state.screenrows // 3:
                out.append(welcome_line(state.screencols))
            else:
                out.append(FILLER)
        out.append(ansi.CLEAR_LINE)
        out.append(ansi.LINE_END)


def build_status_line(state: EditorState) -> str:
    """Left: name, line count and file type. Right: cursor row, right-aligned."""
    name = (state.filename or NO_NAME)[:STATUS_NAME_MAX]
    left = f"{name} - {state.numrows} lines"
    if state.filetype:
        left += f" - {state.filetype}"
    left = left[: state.screencols]
    right = f"{state.cy + 1}/{state.numrows}"

    gap = state.screencols - len(left)
    if gap <= 0:
        return left
    if gap >= len(right):
        return left + " " * (gap - len(right)) + right
    return left + " " * gap


def draw_status_bar(state: EditorState, out: OutputBuffer) -> None:
    out.append(ansi.INVERT_ON)
    out.append(build_status_line(state))
    out.append(ansi.INVERT_OFF)
    out.append(ansi.LINE_END)


def draw_message_bar(state: EditorState, out: OutputBuffer, now: float | None = None) -> None:
    out.append(ansi.CLEAR_LINE)
    if state.status_message_visible(now):
        out.append(state.status_message[: state.screencols])


def compose_frame(state: EditorState, now: float | None = None) -> OutputBuffer:
    """Scroll, then build the full frame without writing it."""
    scroll(state)

    out = OutputBuffer()
    out.append(ansi.HIDE_CURSOR)
    out.append(ansi.CURSOR_HOME)
    draw_rows(state, out)
    draw_status_bar(state, out)
    draw_message_bar(state, out, now)
    out.append(ansi.cursor_position(state.cy - state.rowoff + 1, state.rx - state.coloff + 1))
    out.append(ansi.SHOW_CURSOR)
    return out


def refresh_screen(state: EditorState, fd: int, now: float | None = None) -> int:
    return compose_frame(state, now).flush(fd)
