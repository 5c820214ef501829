"""Logging setup for the probe.

The probe logs through the standard library logging module. Context for a
message is passed with ``extra={...}`` so handlers and formatters can pick up
structured fields.
"""

import logging

PACKAGE_LOGGER = "healthprobe"

HANDLER_NAME = "healthprobe.console"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger, e.g. ``get_logger(__name__)`` from a probe module."""
    return logging.getLogger(name)


def configure_logging(
    level: int | str = logging.INFO, fmt: str = DEFAULT_FORMAT
) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling this more than once only updates the level; the handler is found
    again by name, so handlers installed by others are left alone.

    Args:
        level: Level name or number for the package logger.
        fmt: Format string for the stream handler.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
