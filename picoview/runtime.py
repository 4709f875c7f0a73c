"""Viewer session: raw mode, geometry, file load, then the key loop.

Each iteration renders one frame, blocks for one key, and applies it.
Nothing else mutates the editor state.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import structlog

from .config import ViewerConfig
from .errors import FatalError
from .fileio import load_file
from .filetype import detect_filetype
from .input import KeyDecoder, fd_byte_reader
from .navigation import process_key
from .render import refresh_screen
from .rows import RowBuffer
from .state import EditorState
from .terminal import TerminalController

logger = structlog.get_logger()

HELP_MESSAGE = "HELP: Ctrl-Q to quit"


def open_file(state: EditorState, path: Path) -> None:
    state.filename = str(path)
    state.filetype = detect_filetype(state.filename)
    load_file(path, state.rows)


def run_loop(state: EditorState, decoder: KeyDecoder, stdout_fd: int) -> None:
    while True:
        refresh_screen(state, stdout_fd)
        key = decoder.read_key()
        if not process_key(state, key):
            return


def run_viewer(
    path: Path | None,
    config: ViewerConfig | None = None,
    *,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> int:
    """Run one interactive session and return the exit status.

    ``FatalError`` propagates after the terminal has been restored and the
    screen cleared; the caller reports it.
    """
    config = config or ViewerConfig()
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    terminal = TerminalController(stdin_fd, stdout_fd)

    try:
        with terminal.raw_mode():
            term_rows, term_cols = terminal.get_window_size()
            state = EditorState.for_terminal(
                term_rows,
                term_cols,
                rows=RowBuffer(tab_stop=config.tab_stop),
                status_message_seconds=config.status_message_seconds,
            )
            if path is not None:
                open_file(state, path)
            state.set_status_message(HELP_MESSAGE)
            logger.info(
                "session_started",
                pid=os.getpid(),
                screenrows=state.screenrows,
                screencols=state.screencols,
                numrows=state.numrows,
            )

            decoder = KeyDecoder(fd_byte_reader(stdin_fd), config.escape_timeout_ms)
            run_loop(state, decoder, stdout_fd)
            terminal.clear_screen()
    except FatalError:
        terminal.clear_screen()
        raise

    logger.info("session_ended")
    return 0
