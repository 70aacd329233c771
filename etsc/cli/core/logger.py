"""Logging setup for the command-line entry point."""

import logging
import sys

LOG_FORMAT = "[etsc] %(message)s"
DEBUG_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def log_level(silent=False, debug=False):
    """Silent mode keeps only errors; debug mode shows everything."""
    if silent:
        return logging.ERROR
    if debug:
        return logging.DEBUG
    return logging.INFO


def configure_logging(silent=False, debug=False, stream=None):
    """
    Route all ``etsc`` loggers to a single stream handler.

    Safe to call more than once; the latest call wins.

    Args:
        silent: Suppress everything below ERROR
        debug: Include debug records, timestamps and logger names
        stream: Output stream (default: standard error)
    """
    level = log_level(silent, debug)
    logging.basicConfig(
        level=logging.WARNING,
        format=DEBUG_LOG_FORMAT if debug else LOG_FORMAT,
        force=True,
        handlers=[logging.StreamHandler(stream or sys.stderr)],
    )
    logging.getLogger("etsc").setLevel(level)
    return level
