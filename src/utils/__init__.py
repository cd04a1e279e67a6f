"""Utility functions shared by the grid square tools."""

from .logging import get_logger, set_package_level
from .config import load_config

__all__ = ["get_logger", "set_package_level", "load_config"]
