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

PACKAGE_LOGGER_NAME = "lingotube"

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
    
    if log_level in LOG_LEVELS:
        logger.setLevel(LOG_LEVELS[log_level])
    else:
        logger.setLevel(logging.INFO)
        logger.warning(f"Invalid log level: {log_level}. Using INFO instead.")
    
    # Only the package root owns a console handler; children propagate to it
    if name == PACKAGE_LOGGER_NAME:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        
        console_handler = logging.StreamHandler()
        console_handler.setLevel(LOG_LEVELS.get(log_level, logging.INFO))
        console_handler.setFormatter(colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s [%(name)s] %(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors=LOG_COLORS
        ))
        logger.addHandler(console_handler)
    
    CONFIGURED_LOGGERS[name] = logger
    return logger


def get_log_level() -> str:
    """Get the log level from environment variable or use default."""
    return os.environ.get("LOG_LEVEL", "INFO").upper()


# Create a default logger for the package
default_logger = setup_logger(PACKAGE_LOGGER_NAME, get_log_level())


def get_logger(name: str, log_level: Optional[str] = None) -> logging.Logger:
    """
    Get a logger namespaced under the package logger.
    
    Args:
        name: Component name, e.g. "cache_repository"
        log_level: The log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        
    Returns:
        A configured logger instance
    """
    if log_level is None:
        log_level = get_log_level()
    
    if not name.startswith(PACKAGE_LOGGER_NAME):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    
    if name in CONFIGURED_LOGGERS:
        return CONFIGURED_LOGGERS[name]
    
    return setup_logger(name, log_level)
