"""Logger setup for datagen runs."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

KERNEL_LOGGERS = ("recipekit",)


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def setup_logger(
    name: str = "modifier_datagen",
    *,
    level: int = logging.INFO,
    log_path: str | os.PathLike[str] | None = None,
    also: Iterable[str] = KERNEL_LOGGERS,
) -> logging.Logger:
    """Configure `name` to log to stderr (and to `log_path` at DEBUG, if given).

    The loggers named in `also` get the same handlers, so kernel modules such
    as `recipekit.sinks` end up in the same stream and log file.
    """

    logger = logging.getLogger(name)
    shared = [logging.getLogger(other) for other in also if other != name]
    for target in (logger, *shared):
        target.setLevel(logging.DEBUG)
        _reset_handlers(target)

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = []

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    if log_path is not None:
        os.makedirs(os.path.dirname(os.path.abspath(log_path)), exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for target in (logger, *shared):
        for handler in handlers:
            target.addHandler(handler)
        target.propagate = False

    if log_path is not None:
        logger.debug("Datagen log file: %s", log_path)
    return logger
