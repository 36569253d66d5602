"""Logging configuration for SDS Watch."""

import logging
import sys

# Create logger for SDS Watch
logger = logging.getLogger("sdswatch")


def setup_logger(level: int = logging.INFO) -> None:
    """Setup the SDS Watch logger with default configuration.

    Args:
        level: Logging level (default: INFO)
    """
    if logger.handlers:
        # Already configured, only adjust the level
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter("sdswatch: %(message)s")
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


# Initialize logger on import
setup_logger()
