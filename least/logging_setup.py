"""Logging bootstrap for the pager runtime.

The terminal belongs to the pager while it runs, so records only go to a log
file. Configuration is idempotent: repeated calls keep the first setup.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "least"

_CONFIGURED_PATH: Path | None = None


def _parse_level(raw: str) -> int:
    level = logging.getLevelName(str(raw).strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level_name: str, log_path: Path) -> Path | None:
    """Attach a file handler to the ``least`` logger hierarchy.

    Returns the log path in use, or ``None`` when the log file could not be
    created, in which case records are discarded.
    """
    global _CONFIGURED_PATH
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return _CONFIGURED_PATH

    level = _parse_level(level_name)
    logger.setLevel(level)
    logger.propagate = False
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        logger.addHandler(logging.NullHandler())
        return None
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    logger.addHandler(handler)
    _CONFIGURED_PATH = log_path
    return log_path
