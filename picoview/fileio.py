"""File loading for the row model.

Reads the whole file, decodes it tolerantly, and feeds each line (without its
trailing CR/LF) to ``RowBuffer.append_row``.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import structlog

from .errors import FatalError
from .rows import RowBuffer

logger = structlog.get_logger()


def decode_text(data: bytes) -> str:
    """Decode bytes with UTF-8 (BOM tolerated), then latin-1 as fallback."""
    for encoding in ("utf-8-sig", "latin-1"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def iter_lines(text: str) -> Iterator[str]:
    """Yield newline-terminated lines with trailing CR/LF stripped.

    A final line without a newline is still yielded; an empty text yields
    nothing. Only ``\\n`` terminates a line.
    """
    if not text:
        return
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    for part in parts:
        yield part.rstrip("\r\n")


def load_file(path: Path, rows: RowBuffer) -> int:
    """Append every line of ``path`` to ``rows`` and return the line count."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.info("file_open_failed", path=str(path), error=str(exc))
        raise FatalError("open", exc) from exc

    count = 0
    for line in iter_lines(decode_text(data)):
        rows.append_row(line)
        count += 1
    logger.info("file_loaded", path=str(path), rows=count, size=len(data))
    return count
