"""Logging helper.

Wraps Python's standard logging module so every module of the package
prints messages with the same format.  Loggers are configured once;
later calls return the same logger untouched.
"""

import logging
from typing import Optional, Union

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Return a configured logger with the package format.

    Parameters
    ----------
    name : str
        Logger name, usually ``__name__``.
    level : int or str, optional
        Level to set on the logger (e.g. ``"DEBUG"``).  New loggers
        default to INFO.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    if level is not None:
        logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger


def set_package_level(level: Union[int, str], prefix: str = "src.") -> None:
    """Set the level of every already-created logger under `prefix`."""
    for name in list(logging.root.manager.loggerDict):
        if name.startswith(prefix):
            get_logger(name, level)
