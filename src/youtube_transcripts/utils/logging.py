import logging
import os
from typing import Dict, Optional

import colorlog

# Define log levels
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}

# Keep track of configured loggers
CONFIGURED_LOGGERS: Dict[str, logging.Logger] = {}


def setup_logger(name: str, log_level: str = "INFO") -> logging.Logger:
    """
    Set up a logger with colorful console output.

    Args:
        name: The name of the logger
        log_level: The log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        A configured logger instance
    """
    log_level = log_level.upper()
    logger = logging.getLogger(name)

    level = LOG_LEVELS.get(log_level, logging.INFO)
    logger.setLevel(level)
    if log_level not in LOG_LEVELS:
        logger.warning(f"Invalid log level: {log_level}. Using INFO instead.")

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors=LOG_COLORS
    ))
    logger.addHandler(console_handler)
    logger.propagate = False

    CONFIGURED_LOGGERS[name] = logger
    return logger


def get_log_level() -> str:
    """Get the log level from environment variable or use default."""
    return os.environ.get("LOG_LEVEL", "INFO").upper()


def get_logger(name: str, log_level: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the ``youtube_transcripts`` namespace.

    Args:
        name: Short name of the component (e.g. ``transcript_fetcher``)
        log_level: The log level; falls back to ``LOG_LEVEL`` from the environment

    Returns:
        A configured logger instance
    """
    full_name = name if name.startswith("youtube_transcripts") else f"youtube_transcripts.{name}"
    if full_name in CONFIGURED_LOGGERS and log_level is None:
        return CONFIGURED_LOGGERS[full_name]
    return setup_logger(full_name, log_level or get_log_level())


def set_log_level(log_level: str) -> None:
    """Change the level of every logger configured so far."""
    level = LOG_LEVELS.get(log_level.upper(), logging.INFO)
    for logger in CONFIGURED_LOGGERS.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
