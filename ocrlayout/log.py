"""Logging configuration for command-line use."""
import logging
import sys


def setup_logger(name: str = "ocrlayout", level: str = "WARNING") -> logging.Logger:
    """
    Set up a logger with a single console handler.

    Args:
        name: Logger name
        level: Level name, e.g. "DEBUG" or "INFO"

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(name)s: %(message)s'))
    logger.addHandler(console_handler)
    return logger
