"""Unit tests for the logging helper."""

import logging

from src.utils.logging import get_logger, set_package_level


class TestGetLogger:
    """Test suite for get_logger."""

    def test_single_handler(self):
        """Test that repeated calls do not stack handlers."""
        logger = get_logger("src.tests.single")
        get_logger("src.tests.single")
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO

    def test_level(self):
        """Test setting the level by name."""
        logger = get_logger("src.tests.level", "debug")
        assert logger.level == logging.DEBUG

    def test_set_package_level(self):
        """Test that existing package loggers follow the package level."""
        first = get_logger("src.tests.pkg_a")
        second = get_logger("src.tests.pkg_b")
        other = get_logger("elsewhere.tests")
        set_package_level("WARNING", prefix="src.tests.pkg")
        assert first.level == logging.WARNING
        assert second.level == logging.WARNING
        assert other.level == logging.INFO
