"""File type label shown in the status bar."""

from __future__ import annotations

from pathlib import Path

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound


def detect_filetype(filename: str | None) -> str | None:
    """Return the pygments lexer name for ``filename``, or ``None``.

    Only the file name is consulted; content is never read here.
    """
    if not filename:
        return None
    try:
        lexer = get_lexer_for_filename(Path(filename).name)
    except ClassNotFound:
        return None
    return lexer.name
