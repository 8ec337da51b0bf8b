"""
Logging for netparams

Every module logs through get_logger(__name__). Loggers under the netparams namespace carry no handlers of their own;
records propagate to the package logger, which owns the single console handler (on stderr, leaving stdout to the CLI)
and the package-wide level.
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional

__all__ = ["get_logger", "set_log_level"]

ROOT_LOGGER_NAME = "netparams"
DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = '%(asctime)s [%(name)s] [%(levelname)s]: %(message)s'


def _to_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def _package_logger(format_string: Optional[str] = None) -> logging.Logger:
    package = logging.getLogger(ROOT_LOGGER_NAME)

    # Configure once
    if not package.handlers:
        console_handler = logging.StreamHandler(stream=sys.stderr)
        console_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
        package.addHandler(console_handler)
        package.setLevel(_to_level(DEFAULT_LEVEL))
    return package


def get_logger(name: str, log_level: Optional[str] = None, log_file: Optional[Path] = None,
               format_string: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the netparams namespace.

    Args:
        name: Logger name (typically __name__ from calling module)
        log_level: Optional level for this logger alone; otherwise the package level applies
        log_file: Optional path to a file that also receives this logger's records
        format_string: Optional format, used by the console handler when it is first created and by the file handler

    Returns:
        Configured logger instance
    """
    _package_logger(format_string)
    logger = logging.getLogger(name)

    if log_level is not None:
        logger.setLevel(_to_level(log_level))

    if log_file:
        target = os.path.abspath(log_file)
        if not any(isinstance(h, logging.FileHandler) and h.baseFilename == target for h in logger.handlers):
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
            logger.addHandler(file_handler)

    return logger


def set_log_level(log_level: str):
    """
    Set the level shared by every netparams logger that has no level of its own
    """
    _package_logger().setLevel(_to_level(log_level))
