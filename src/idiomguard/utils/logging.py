"""Logging setup for the idiomguard logger hierarchy."""

import logging
import sys
from typing import TextIO

from idiomguard.config.models import LoggingConfig

ROOT_LOGGER = "idiomguard"


def configure_logging(
    config: LoggingConfig | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure the ``idiomguard`` logger.

    The root logger is left alone. A single stream handler is attached
    on first use; later calls only update its level and format.

    Args:
        config: Logging settings (defaults to LoggingConfig())
        stream: Output stream (defaults to stderr)

    Returns:
        The configured package logger
    """
    config = config or LoggingConfig()
    level = getattr(logging, config.level.value)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    handler = next(
        (h for h in logger.handlers if getattr(h, "_idiomguard_handler", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler._idiomguard_handler = True
        logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(config.format))
    return logger
