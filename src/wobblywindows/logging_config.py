"""
Logging Configuration
Sets up the 'wobblywindows' logger for hosts that embed the effects library.

The library itself only emits records; nothing is printed until the host (or
the demo entry point) calls `setup_logging`.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "wobblywindows"


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[str] = None,
    console: bool = True,
) -> logging.Logger:
    """
    Configures the logger for the 'wobblywindows' namespace.

    Args:
        level: Logging level. Defaults to WARNING so an embedding compositor only
            hears about problems; pass logging.DEBUG to trace effect lifecycles.
        log_file: Optional path to save logs to a file.
        console: Whether to also log to stdout.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Calling this again replaces the previous handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized at level {logging.getLevelName(level)}.")
    return logger
