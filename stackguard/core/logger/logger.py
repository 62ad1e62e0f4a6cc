"""Logging for the stackguard package.

Handlers are attached to the ``stackguard`` logger rather than the root
logger, so embedding applications keep their own logging setup.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from stackguard.core.config.settings import LoggingSettings, get_settings

PACKAGE_LOGGER = "stackguard"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _replace_handlers(logger: logging.Logger, handlers: list[logging.Handler]) -> None:
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)


def setup_logging(settings: LoggingSettings | None = None) -> logging.Logger:
    """Configure the package logger.

    Diagnostics go to stderr so that stdout stays reserved for command
    output such as ``detect --json``.

    Args:
        settings: Logging settings. Uses global settings if not provided.

    Returns:
        The configured package logger.
    """
    if settings is None:
        settings = get_settings().logging

    level = getattr(logging, settings.level)
    handlers: list[logging.Handler] = []

    if settings.use_rich:
        handlers.append(
            RichHandler(
                console=Console(stderr=True),
                show_path=False,
                show_time=False,
                rich_tracebacks=True,
                markup=False,
            )
        )
    else:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(logging.Formatter(settings.format))
        handlers.append(stream)

    if settings.file:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.propagate = False
    _replace_handlers(package_logger, handlers)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the package namespace.

    The package logger is configured from global settings the first time a
    logger is requested and nothing has configured it yet.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    if not logging.getLogger(PACKAGE_LOGGER).handlers:
        setup_logging()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
