"""Fatal error type shared by terminal control, geometry and file loading."""

from __future__ import annotations

import os


class FatalError(Exception):
    """Unrecoverable system failure.

    ``where`` names the failing operation (``"tcgetattr"``, ``"open"``...) and
    ``cause`` carries the underlying ``OSError`` when there is one. ``str()``
    mirrors ``perror``: ``"where: description"``.
    """

    def __init__(self, where: str, cause: OSError | None = None) -> None:
        self.where = where
        self.cause = cause
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.cause is None:
            return self.where
        errno = self.cause.errno
        if self.cause.strerror:
            detail = self.cause.strerror
        elif errno:
            detail = os.strerror(errno)
        else:
            detail = str(self.cause)
        return f"{self.where}: {detail}" if detail else self.where
