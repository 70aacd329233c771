"""Core CLI components for parsing and logging."""

from .logger import LOG_FORMAT, configure_logging, log_level
from .parser import CustomHelpFormatter, create_base_parser

__all__ = [
    "CustomHelpFormatter",
    "create_base_parser",
    "configure_logging",
    "log_level",
    "LOG_FORMAT",
]
