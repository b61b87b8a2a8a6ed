"""Logger that writes to a file in a log directory and to standard output."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOGGER_NAME = "walletapi"
LOG_FILE_NAME = "all.log"

_FORMAT = (
    "time=%(asctime)s level=%(levelname)s "
    "func=%(funcName)s() file=%(filename)s:%(lineno)d msg=%(message)s"
)


def _resolve_level(level: int | str) -> int:
    if isinstance(level, bool):
        raise TypeError("log level must be an int or a level name")
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = logging.getLevelName(level.strip().upper())
        if isinstance(value, int):
            return value
        raise ValueError(f"unknown log level: {level!r}")
    raise TypeError("log level must be an int or a level name")


def new_logger(log_dir: str | Path, level: int | str) -> logging.Logger:
    """Create the application logger, appending to ``log_dir/all.log`` and stdout."""
    resolved = _resolve_level(level)
    directory = Path(log_dir)
    directory.mkdir(mode=0o755, parents=True, exist_ok=True)
    log_path = directory / LOG_FILE_NAME
    log_path.touch(mode=0o640, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT)
    for handler in (
        logging.FileHandler(log_path, mode="a", encoding="utf-8"),
        logging.StreamHandler(sys.stdout),
    ):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(resolved)
    logger.propagate = False
    return logger