"""Terminal control for the viewer session.

Owns the raw-mode lifecycle: the original tty attributes are captured once
and reapplied on every exit path. Also answers the window-size query, with a
cursor-position fallback for terminals that do not report TIOCGWINSZ.
"""

from __future__ import annotations

import contextlib
import errno
import fcntl
import os
import re
import signal
import struct
import termios

import structlog

from . import ansi
from .errors import FatalError
from .input import fd_byte_reader

logger = structlog.get_logger()

CURSOR_REPLY_RE = re.compile(rb"\x1b\[(\d+);(\d+)R")
CURSOR_REPLY_MAX = 31
CURSOR_REPLY_TIMEOUT_MS = 1000
# Tenths of a second; read() returns after at most this long with no input.
READ_TIMEOUT_DECISECONDS = 1
RESTORE_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def _raise_system_exit(signum: int, _frame) -> None:
    raise SystemExit(128 + signum)


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state: list | None = None

    @property
    def raw_enabled(self) -> bool:
        return self._saved_tty_state is not None

    def enable_raw_mode(self) -> None:
        """Capture current attributes, then switch stdin to raw byte input."""
        try:
            saved = termios.tcgetattr(self.stdin_fd)
        except termios.error as exc:
            raise FatalError("tcgetattr", _as_oserror(exc)) from exc
        self._saved_tty_state = saved

        raw = [list(attr) if isinstance(attr, list) else attr for attr in saved]
        raw[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = READ_TIMEOUT_DECISECONDS
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, raw)
        except termios.error as exc:
            raise FatalError("tcsetattr", _as_oserror(exc)) from exc
        logger.debug("raw_mode_enabled", fd=self.stdin_fd)

    def disable_raw_mode(self) -> None:
        """Reapply the captured attributes; a no-op once already restored."""
        saved = self._saved_tty_state
        if saved is None:
            return
        self._saved_tty_state = None
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, saved)
        except termios.error as exc:
            raise FatalError("tcsetattr", _as_oserror(exc)) from exc
        logger.debug("raw_mode_disabled", fd=self.stdin_fd)

    @contextlib.contextmanager
    def raw_mode(self):
        """Bracket a session with raw mode; SIGTERM/SIGHUP unwind through it."""
        previous = {sig: signal.signal(sig, _raise_system_exit) for sig in RESTORE_SIGNALS}
        try:
            self.enable_raw_mode()
            yield self
        finally:
            try:
                self.disable_raw_mode()
            finally:
                for sig, handler in previous.items():
                    signal.signal(sig, signal.SIG_DFL if handler is None else handler)

    def write(self, data: str | bytes) -> int:
        if isinstance(data, str):
            data = data.encode("utf-8", errors="replace")
        return os.write(self.stdout_fd, data)

    def clear_screen(self) -> None:
        self.write(ansi.CLEAR_SCREEN + ansi.CURSOR_HOME)

    def get_cursor_position(self) -> tuple[int, int]:
        """Ask the terminal where the cursor is and parse the ``ESC[r;cR`` reply."""
        query = ansi.QUERY_CURSOR_POSITION.encode("ascii")
        if self.write(query) != len(query):
            raise OSError(errno.EIO, "cursor query write failed")

        read_byte = fd_byte_reader(self.stdin_fd)
        buf = bytearray()
        while len(buf) < CURSOR_REPLY_MAX:
            ch = read_byte(CURSOR_REPLY_TIMEOUT_MS)
            if ch is None:
                break
            buf += ch
            if ch == b"R":
                break

        match = CURSOR_REPLY_RE.match(bytes(buf))
        if not match:
            raise OSError(errno.EIO, "invalid cursor position reply")
        return int(match.group(1)), int(match.group(2))

    def get_window_size(self) -> tuple[int, int]:
        """Return ``(rows, cols)`` of the terminal window."""
        try:
            packed = fcntl.ioctl(self.stdout_fd, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
            rows, cols, _, _ = struct.unpack("HHHH", packed)
        except OSError:
            rows, cols = 0, 0
        if cols:
            logger.debug("window_size", rows=rows, cols=cols, source="ioctl")
            return rows, cols

        move = ansi.CURSOR_FAR_BOTTOM_RIGHT.encode("ascii")
        try:
            if self.write(move) != len(move):
                raise OSError(errno.EIO, "cursor move write failed")
            rows, cols = self.get_cursor_position()
        except OSError as exc:
            raise FatalError("get_window_size", exc) from exc
        logger.debug("window_size", rows=rows, cols=cols, source="cursor")
        return rows, cols


def _as_oserror(exc: termios.error) -> OSError:
    args = exc.args
    if len(args) >= 2 and isinstance(args[0], int):
        return OSError(args[0], args[1])
    return OSError(errno.EIO, str(exc))
