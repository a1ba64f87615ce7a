"""
Logging configuration for routegeo.

Library modules only ever call `logging.getLogger(__name__)`; nothing is printed until
an application (or `load_settings`) calls `configure_logging`. The kernel is often
embedded in a larger pipeline, so file output is optional and a later call can
change the level or add the file destination without duplicating handlers.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOGGER_NAME = "routegeo"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _swap_file_handler(logger: logging.Logger, log_path: Path, fmt: logging.Formatter) -> None:
    # One file destination at a time: keep a handler already writing to log_path, close any other.
    target = log_path.resolve()
    for handler in [h for h in logger.handlers if isinstance(h, logging.FileHandler)]:
        if Path(handler.baseFilename).resolve() == target:
            return
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)


def configure_logging(
    log_dir: Optional[Path] = None,
    level: str = "INFO",
    *,
    filename: str = "routegeo.log",
) -> logging.Logger:
    """
    Configure the `routegeo` logger and return it.

    Always logs to stderr; also logs to `log_dir / filename` when `log_dir` is given.
    Calling again updates the level of every attached handler. A different log file
    replaces the previous one; the same file is never attached twice.
    """
    # Accept "debug" as well as "DEBUG" from config files and environment variables.
    level_name = level.upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_name)
    # Records stay out of the host application's root handlers.
    logger.propagate = False

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    # FileHandler is a StreamHandler subclass, so look for a plain stream handler explicitly.
    if not any(type(handler) is logging.StreamHandler for handler in logger.handlers):
        stream = logging.StreamHandler()
        stream.setFormatter(fmt)
        logger.addHandler(stream)

    if log_dir is not None:
        # FileHandler does not create parent directories.
        log_dir.mkdir(parents=True, exist_ok=True)
        _swap_file_handler(logger, log_dir / filename, fmt)

    for handler in logger.handlers:
        handler.setLevel(level_name)

    return logger
