"""Shared console logging for the gateway and the uvicorn server it runs in."""

from __future__ import annotations

import logging
import sys
from typing import Any, Final

_LOGGER_NAME: Final = "companygate"
_HANDLER_NAME: Final = "companygate-console"

LOG_FORMAT: Final = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT: Final = "%H:%M:%S"


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    return handler


def setup_logger(level: int | None = None) -> logging.Logger:
    """Return the ``companygate`` logger with exactly one console handler.

    ``level`` is only applied when given, so module-level calls do not reset
    a level chosen by the CLI. Without an explicit level the logger starts at
    INFO.
    """

    logger = logging.getLogger(_LOGGER_NAME)
    if level is not None:
        logger.setLevel(level)
    elif logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)
    logger.propagate = False

    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        logger.addHandler(_console_handler())

    return logger


def uvicorn_log_config(level: int = logging.INFO) -> dict[str, Any]:
    """``logging.config`` dict for ``uvicorn.run`` using the gateway's format.

    Existing loggers are left alone so the ``companygate`` handler survives
    uvicorn applying this configuration.
    """

    level_name = logging.getLevelName(level)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "uvicorn": {"handlers": ["console"], "level": level_name, "propagate": False},
            "uvicorn.access": {
                "handlers": ["console"],
                "level": level_name,
                "propagate": False,
            },
        },
    }
