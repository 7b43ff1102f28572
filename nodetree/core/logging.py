"""
Logging configuration module.

The library only emits records through module loggers under the
``nodetree`` namespace; a NullHandler keeps it silent until the host
application configures logging. setup_logging() is a convenience for
hosts and scripts that want the default console/file handlers.
"""

import logging
import sys

from nodetree.core.config import settings

PACKAGE_LOGGER = "nodetree"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """
    Configure root logging from library settings.

    Replaces any handlers already on the root logger.

    Args:
        level: Level name overriding LOG_LEVEL
        log_file: File path overriding LOG_FILE
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper()))
    root.handlers.clear()

    formatter = logging.Formatter(settings.LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_file = log_file or settings.LOG_FILE
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # Validation internals stay quiet
    logging.getLogger("pydantic").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance configured for the module
    """
    return logging.getLogger(name)
