"""Application-wide logging configuration."""
from __future__ import annotations

import logging
from typing import Iterable

_INSTALLED_HANDLERS: list[logging.Handler] = []

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DEFAULT_LOG_LEVEL = logging.INFO

# Loggers of the application packages share this configuration
APP_LOGGERS = ("core", "models", "ui", "main")


def configure_logging(level: int | str = DEFAULT_LOG_LEVEL,
                      extra_handlers: Iterable[logging.Handler] | None = None) -> logging.Logger:
    """Attach a console handler to the root logger and return it.

    Calling it again only changes the level of the application loggers.
    """
    root = logging.getLogger()
    root.setLevel(level)
    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(level)
    if _INSTALLED_HANDLERS:
        return root

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handlers: list[logging.Handler] = [handler]
    if extra_handlers:
        handlers.extend(extra_handlers)

    for h in handlers:
        root.addHandler(h)
        _INSTALLED_HANDLERS.append(h)

    logging.captureWarnings(True)
    root.info("Logging initialized (level=%s)", level)
    return root


def reset_logging() -> None:
    """Remove the handlers installed by configure_logging."""
    root = logging.getLogger()
    while _INSTALLED_HANDLERS:
        handler = _INSTALLED_HANDLERS.pop()
        try:
            handler.close()
        finally:
            root.removeHandler(handler)
