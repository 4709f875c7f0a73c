"""Editor state shared by input handling and rendering.

One ``EditorState`` holds the cursor, the scroll offsets, the loaded rows and
the timed status message. Handlers receive it explicitly.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from .rows import RowBuffer

STATUS_MESSAGE_MAX = 79
STATUS_MESSAGE_SECONDS = 5.0
# Status and message bars.
RESERVED_SCREEN_ROWS = 2


@dataclass
class EditorState:
    """Single editor context: cursor, viewport, rows and status message."""

    screenrows: int
    screencols: int
    rows: RowBuffer = field(default_factory=RowBuffer)
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    filename: str | None = None
    filetype: str | None = None
    status_message: str = ""
    status_message_time: float = 0.0
    status_message_seconds: float = STATUS_MESSAGE_SECONDS

    @classmethod
    def for_terminal(cls, term_rows: int, term_cols: int, **kwargs) -> "EditorState":
        """Build state for a terminal of ``term_rows`` x ``term_cols`` cells."""
        return cls(
            screenrows=max(0, term_rows - RESERVED_SCREEN_ROWS),
            screencols=max(0, term_cols),
            **kwargs,
        )

    @property
    def numrows(self) -> int:
        return self.rows.numrows

    def current_row_size(self) -> int:
        """Length of the row under the cursor; 0 on the virtual line past the end."""
        if self.cy >= self.numrows:
            return 0
        return self.rows[self.cy].size

    def set_status_message(self, fmt: str, *args: object, now: float | None = None) -> None:
        message = fmt % args if args else fmt
        self.status_message = message[:STATUS_MESSAGE_MAX]
        self.status_message_time = time.time() if now is None else now

    def status_message_visible(self, now: float | None = None) -> bool:
        if not self.status_message:
            return False
        current = time.time() if now is None else now
        return current - self.status_message_time < self.status_message_seconds
