"""Logging setup built on loguru.

Library modules log through ``loguru.logger`` directly. The package disables
its own records on import; :func:`setup_logging` re-enables them and installs
sinks. Collector timing lines go through :func:`perf_log` and are only
emitted when perf logging is switched on (``REPOVIEW_PERF=1``).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from loguru import logger
from platformdirs import user_log_dir

APP_NAME = "repoview"
PERF_ENV_VAR = "REPOVIEW_PERF"

_perf_enabled = os.environ.get(PERF_ENV_VAR, "0") == "1"

_CONSOLE_FORMAT = "<level>{level: <8}</level> | <cyan>{name}:{function}:{line}</cyan> - <level>{message}</level>"
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {thread.name} | {name}:{function}:{line} - {message}"


def perf_enabled() -> bool:
    return _perf_enabled


def set_perf_enabled(enabled: bool) -> None:
    global _perf_enabled
    _perf_enabled = bool(enabled)


def perf_log(message: str) -> None:
    """Emit one collector timing line when perf logging is on."""
    if not _perf_enabled:
        return
    logger.bind(perf=True).opt(depth=1).debug(f"[perf] {message}")


def default_log_file() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / "repoview_{time:YYYY-MM-DD}.log"


def setup_logging(
    level: str = "WARNING",
    verbose: bool = False,
    log_file: Path | None = None,
    perf: bool | None = None,
) -> None:
    """Install console (and optional file) sinks and enable package logging.

    ``verbose`` forces DEBUG on the console. ``perf`` overrides the
    ``REPOVIEW_PERF`` environment switch when given.
    """
    console_level = "DEBUG" if verbose else level
    if perf is not None:
        set_perf_enabled(perf)
    if _perf_enabled:
        console_level = "DEBUG"

    logger.remove()
    logger.add(
        sys.stderr,
        level=console_level,
        format=_CONSOLE_FORMAT,
        colorize=True,
        enqueue=True,
    )

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            logger.add(
                str(log_file),
                level="DEBUG",
                format=_FILE_FORMAT,
                rotation="1 day",
                retention="7 days",
                enqueue=True,
                encoding="utf-8",
            )
        except OSError as exc:
            logger.error(f"Could not configure file logging to {log_file}: {exc}")

    logger.enable(APP_NAME)
    logger.debug(f"Logging initialized. Console level: {console_level}. Perf: {_perf_enabled}")


__all__ = [
    "default_log_file",
    "perf_enabled",
    "perf_log",
    "set_perf_enabled",
    "setup_logging",
]
