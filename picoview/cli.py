"""Command-line front door for picoview.

Parses the optional file argument, sets up logging and config, then runs the
interactive session. Fatal terminal or file errors exit with status 1.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

import structlog

from .config import load_viewer_config
from .errors import FatalError
from .logs import logging_session_from_env
from .runtime import run_viewer

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="picoview",
        description="View a text file in the terminal. Arrow keys move, Ctrl-Q quits.",
    )
    parser.add_argument("filename", nargs="?", default=None, help="File to open. Omit for an empty buffer.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments and run the viewer; returns the process exit status."""
    args = build_parser().parse_args(argv)
    with logging_session_from_env():
        config = load_viewer_config()
        path = Path(args.filename) if args.filename else None

        try:
            return run_viewer(path, config)
        except FatalError as exc:
            logger.info("fatal_error", where=exc.where, error=str(exc))
            print(exc, file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
