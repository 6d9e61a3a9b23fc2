"""Runtime configuration resolved from CLI arguments and the environment.

There is no configuration file. Environment variables supply defaults for the
logging options; explicit CLI flags win.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_log_dir

from .reader import DEFAULT_TAB_WIDTH, FLUSH_INTERVAL_SECONDS

APP_NAME = "least"
LOG_FILENAME = "least.log"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_ENV = "LEAST_LOG_LEVEL"
LOG_FILE_ENV = "LEAST_LOG_FILE"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


@dataclass(frozen=True)
class PagerConfig:
    paths: tuple[Path, ...] = ()
    tab_width: int = DEFAULT_TAB_WIDTH
    flush_interval: float = FLUSH_INTERVAL_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL
    log_path: Path = field(default_factory=default_log_path)


def _normalize_level(raw: str | None) -> str:
    normalized = str(raw or "").strip().upper()
    return normalized or DEFAULT_LOG_LEVEL


def build_config(
    paths: list[Path],
    *,
    tab_width: int = DEFAULT_TAB_WIDTH,
    log_level: str | None = None,
    log_file: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> PagerConfig:
    """Merge parsed CLI values with environment defaults into a ``PagerConfig``."""
    env = os.environ if environ is None else environ
    level = _normalize_level(log_level if log_level is not None else env.get(LOG_LEVEL_ENV))
    raw_log_file = log_file if log_file is not None else env.get(LOG_FILE_ENV)
    log_path = Path(raw_log_file).expanduser() if raw_log_file else default_log_path()
    return PagerConfig(
        paths=tuple(paths),
        tab_width=tab_width,
        log_level=level,
        log_path=log_path,
    )
