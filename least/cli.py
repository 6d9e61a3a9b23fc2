"""Command-line front door for least.

Parses CLI options, sets up logging, and dispatches into the interactive
pager runtime. Fatal pager errors are reported on stderr with exit status 1.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from . import __version__
from .app import run_pager
from .config import LOG_FILE_ENV, LOG_LEVEL_ENV, build_config
from .errors import PagerError
from .logging_setup import configure_logging
from .reader import DEFAULT_TAB_WIDTH

logger = logging.getLogger(__name__)

STDIN_FD = 0
STDOUT_FD = 1


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="least",
        description="A lightweight pager as a simpler alternative to `less`.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        metavar="FILE",
        help="File to page. Reads standard input when omitted.",
    )
    parser.add_argument(
        "--tab-width",
        type=_positive_int,
        default=DEFAULT_TAB_WIDTH,
        help=f"Columns between tab stops (default: {DEFAULT_TAB_WIDTH}).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"Log level for the log file (default: ${LOG_LEVEL_ENV} or WARNING).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help=f"Log file path (default: ${LOG_FILE_ENV} or the user log directory).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the pager on a file or standard input."""
    args = build_parser().parse_args(argv)
    if not args.files and os.isatty(STDIN_FD):
        raise SystemExit('least: missing filename ("least --help" for help)')
    config = build_config(
        list(args.files),
        tab_width=args.tab_width,
        log_level=args.log_level,
        log_file=args.log_file,
    )
    configure_logging(config.log_level, config.log_path)

    try:
        run_pager(config, STDIN_FD, STDOUT_FD)
    except PagerError as exc:
        logger.error("fatal: %s", exc)
        raise SystemExit(f"least: {exc}") from exc


if __name__ == "__main__":
    main()
