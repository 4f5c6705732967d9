"""Logging helpers shared by the library and the command line."""

from __future__ import annotations

import logging
import sys

_ROOT_LOGGER_NAME = "thumbvault"
_INSTALLED_HANDLERS: set[str] = set()


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it when *name* is given."""

    if not name:
        return logging.getLogger(_ROOT_LOGGER_NAME)
    if name == _ROOT_LOGGER_NAME or name.startswith(_ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")


def ensure_console_logger(
    logger: logging.Logger,
    handler_name: str,
    *,
    level: int = logging.INFO,
) -> None:
    """Attach a stdout handler named *handler_name* to *logger* once."""

    if handler_name in _INSTALLED_HANDLERS:
        logger.setLevel(level)
        return
    for handler in logger.handlers:
        if getattr(handler, "name", None) == handler_name:
            _INSTALLED_HANDLERS.add(handler_name)
            logger.setLevel(level)
            return
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.name = handler_name
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    _INSTALLED_HANDLERS.add(handler_name)
