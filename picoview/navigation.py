"""Cursor movement and viewport scrolling.

Key handling only moves ``cx``/``cy``; ``scroll`` derives ``rx`` and the
scroll offsets once per frame, right before rendering.
"""

from __future__ import annotations

import structlog

from . import keys
from .state import EditorState

logger = structlog.get_logger()


def move_cursor(state: EditorState, key: str) -> None:
    """Move the cursor one step and clamp ``cx`` to the landing row."""
    on_row = state.cy < state.numrows

    if key == keys.ARROW_LEFT:
        if state.cx != 0:
            state.cx -= 1
        elif state.cy > 0:
            state.cy -= 1
            state.cx = state.rows[state.cy].size
    elif key == keys.ARROW_RIGHT:
        if on_row:
            size = state.rows[state.cy].size
            if state.cx < size:
                state.cx += 1
            elif state.cx == size:
                state.cy += 1
                state.cx = 0
    elif key == keys.ARROW_UP:
        if state.cy != 0:
            state.cy -= 1
    elif key == keys.ARROW_DOWN:
        if state.cy < state.numrows:
            state.cy += 1

    rowlen = state.current_row_size()
    if state.cx > rowlen:
        state.cx = rowlen


def page_move(state: EditorState, key: str) -> None:
    """Jump to the viewport edge, then replay one screen of single-line moves."""
    if key == keys.PAGE_UP:
        state.cy = state.rowoff
        step = keys.ARROW_UP
    else:
        # A zero-row viewport would otherwise put cy at -1.
        state.cy = max(0, min(state.rowoff + state.screenrows - 1, state.numrows))
        step = keys.ARROW_DOWN
    for _ in range(state.screenrows):
        move_cursor(state, step)


def process_key(state: EditorState, key: str) -> bool:
    """Apply one decoded key to ``state``.

    Returns ``False`` when the key asks to quit. Keys without a binding are
    ignored.
    """
    if key == keys.QUIT_KEY:
        logger.debug("quit_requested")
        return False

    if key == keys.HOME_KEY:
        state.cx = 0
    elif key == keys.END_KEY:
        if state.cy < state.numrows:
            state.cx = state.rows[state.cy].size
    elif key in (keys.PAGE_UP, keys.PAGE_DOWN):
        page_move(state, key)
    elif key in keys.ARROW_KEYS:
        move_cursor(state, key)
    return True


def scroll(state: EditorState) -> None:
    """Recompute ``rx`` and snap offsets so the cursor lies inside the viewport."""
    state.rx = 0
    if state.cy < state.numrows:
        state.rx = state.rows.cx_to_rx(state.cy, state.cx)

    if state.cy < state.rowoff:
        state.rowoff = state.cy
    if state.cy >= state.rowoff + state.screenrows:
        state.rowoff = state.cy - state.screenrows + 1
    if state.rx < state.coloff:
        state.coloff = state.rx
    if state.rx >= state.coloff + state.screencols:
        state.coloff = state.rx - state.screencols + 1
