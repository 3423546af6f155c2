"""Logging configuration for the command-line programs"""
import logging
import sys


def setup_logging(console_level: int = logging.WARNING) -> None:
    """
    Configure a single console handler with brief output.

    Library modules only create loggers; handlers are set up here, once,
    by the program entry point.

    Args:
        console_level: Console logging level (WARNING by default, DEBUG for
            index and snapshot statistics)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(console_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)
