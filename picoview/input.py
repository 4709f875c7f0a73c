"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into key tokens.
Escape sequences are decoded by a small state machine; an incomplete or
unknown sequence always degrades to a bare ESC instead of blocking.
"""

from __future__ import annotations

import enum
import errno
import os
import select
from collections.abc import Callable

from . import keys
from .errors import FatalError

ESC_SEQUENCE_TIMEOUT_MS = 100
# Poll interval while waiting for the first byte of a key.
IDLE_POLL_MS = 100

ReadByte = Callable[[int], "bytes | None"]


class DecoderState(enum.Enum):
    NORMAL = "normal"
    SAW_ESC = "saw-esc"
    SAW_ESC_BRACKET = "saw-esc-bracket"
    SAW_ESC_BRACKET_DIGIT = "saw-esc-bracket-digit"
    SAW_ESC_O = "saw-esc-o"
    # ESC followed by an introducer with no mapping.
    SAW_ESC_UNKNOWN = "saw-esc-unknown"


BRACKET_LETTER_KEYS: dict[bytes, str] = {
    b"A": keys.ARROW_UP,
    b"B": keys.ARROW_DOWN,
    b"C": keys.ARROW_RIGHT,
    b"D": keys.ARROW_LEFT,
    b"H": keys.HOME_KEY,
    b"F": keys.END_KEY,
}

BRACKET_DIGIT_KEYS: dict[bytes, str] = {
    b"1": keys.HOME_KEY,
    b"7": keys.HOME_KEY,
    b"3": keys.DEL_KEY,
    b"4": keys.END_KEY,
    b"8": keys.END_KEY,
    b"5": keys.PAGE_UP,
    b"6": keys.PAGE_DOWN,
}

SS3_KEYS: dict[bytes, str] = {
    b"H": keys.HOME_KEY,
    b"F": keys.END_KEY,
}


class KeyDecoder:
    """Turn a byte source into key tokens.

    ``read_byte(timeout_ms)`` must return one byte, or ``None`` when nothing
    arrived within ``timeout_ms``. The first byte of a key is waited for
    indefinitely (in ``IDLE_POLL_MS`` slices); every lookahead byte of an
    escape sequence gets a single bounded wait.

    ``feed`` is the transition function: each call consumes one byte (or
    ``None`` for an expired lookahead wait) and returns a key once one is
    complete. ``self.state`` is ``NORMAL`` again whenever a key is returned.
    """

    def __init__(self, read_byte: ReadByte, escape_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> None:
        self._read_byte = read_byte
        self.escape_timeout_ms = escape_timeout_ms
        self.state = DecoderState.NORMAL
        self._digit: bytes | None = None

    def _emit(self, key: str) -> str:
        self.state = DecoderState.NORMAL
        self._digit = None
        return key

    def feed(self, ch: bytes | None) -> str | None:
        state = self.state

        if state is DecoderState.NORMAL:
            if ch is None:
                return None
            if ch == b"\x1b":
                self.state = DecoderState.SAW_ESC
                return None
            return ch.decode("latin-1")

        if ch is None:
            return self._emit(keys.ESC)

        if state is DecoderState.SAW_ESC:
            if ch == b"[":
                self.state = DecoderState.SAW_ESC_BRACKET
            elif ch == b"O":
                self.state = DecoderState.SAW_ESC_O
            else:
                self.state = DecoderState.SAW_ESC_UNKNOWN
            return None

        if state is DecoderState.SAW_ESC_BRACKET:
            if ch.isdigit():
                self._digit = ch
                self.state = DecoderState.SAW_ESC_BRACKET_DIGIT
                return None
            return self._emit(BRACKET_LETTER_KEYS.get(ch, keys.ESC))

        if state is DecoderState.SAW_ESC_BRACKET_DIGIT:
            if ch == b"~":
                return self._emit(BRACKET_DIGIT_KEYS.get(self._digit, keys.ESC))
            return self._emit(keys.ESC)

        if state is DecoderState.SAW_ESC_O:
            return self._emit(SS3_KEYS.get(ch, keys.ESC))

        # SAW_ESC_UNKNOWN: the second lookahead byte is dropped.
        return self._emit(keys.ESC)

    def read_key(self) -> str:
        while True:
            if self.state is DecoderState.NORMAL:
                ch = self._read_byte(IDLE_POLL_MS)
                if ch is None:
                    continue
            else:
                ch = self._read_byte(self.escape_timeout_ms)
            key = self.feed(ch)
            if key is not None:
                return key


def fd_byte_reader(fd: int) -> ReadByte:
    """Build a ``read_byte`` callable that waits on ``fd`` with ``select``."""

    def read_byte(timeout_ms: int) -> bytes | None:
        try:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        except InterruptedError:
            return None
        if not ready:
            return None
        try:
            ch = os.read(fd, 1)
        except (BlockingIOError, InterruptedError):
            return None
        except OSError as exc:
            if exc.errno == errno.EAGAIN:
                return None
            raise FatalError("read", exc) from exc
        if not ch:
            return None
        return ch

    return read_byte


def read_key(fd: int, escape_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> str:
    return KeyDecoder(fd_byte_reader(fd), escape_timeout_ms).read_key()
