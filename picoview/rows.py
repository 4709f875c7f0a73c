"""Row model: logical line content plus its tab-expanded render.

Logical columns index ``Row.chars``; rendered columns index ``Row.render``.
``cx_to_rx`` and ``expand_tabs`` apply the same tab-stop rule, so
``cx_to_rx(row, row.size) == row.rsize`` for every row.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

TAB_STOP = 8


def expand_tabs(chars: str, tab_stop: int = TAB_STOP) -> str:
    """Replace each tab with spaces up to the next multiple of ``tab_stop``."""
    if "\t" not in chars:
        return chars
    out: list[str] = []
    col = 0
    for ch in chars:
        if ch == "\t":
            width = tab_stop - (col % tab_stop)
            out.append(" " * width)
            col += width
        else:
            out.append(ch)
            col += 1
    return "".join(out)


@dataclass(frozen=True)
class Row:
    chars: str
    render: str

    @classmethod
    def from_content(cls, content: str, tab_stop: int = TAB_STOP) -> "Row":
        return cls(chars=content, render=expand_tabs(content, tab_stop))

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)


def cx_to_rx(row: Row, cx: int, tab_stop: int = TAB_STOP) -> int:
    """Map logical column ``cx`` of ``row`` to its rendered column."""
    rx = 0
    for ch in row.chars[:cx]:
        if ch == "\t":
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx


@dataclass
class RowBuffer:
    """Ordered, append-only collection of rows loaded from one file."""

    tab_stop: int = TAB_STOP
    rows: list[Row] = field(default_factory=list)

    def append_row(self, content: str) -> Row:
        row = Row.from_content(content, self.tab_stop)
        self.rows.append(row)
        return row

    def cx_to_rx(self, cy: int, cx: int) -> int:
        return cx_to_rx(self.rows[cy], cx, self.tab_stop)

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)
