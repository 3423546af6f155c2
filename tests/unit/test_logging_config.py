"""
Unit tests for logging setup.
"""

import logging

import pytest

from lexisearch.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_single_console_handler(self, restore_root_logger):
        setup_logging(logging.DEBUG)
        setup_logging(logging.DEBUG)

        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.level == logging.DEBUG

    def test_brief_format(self, restore_root_logger):
        setup_logging()

        handler = restore_root_logger.handlers[0]
        record = logging.LogRecord("lexisearch", logging.WARNING, __file__, 1, "skipped", None, None)
        assert handler.format(record) == "WARNING: skipped"
        assert handler.level == logging.WARNING
