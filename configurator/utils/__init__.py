"""
Utility modules for the Queue Bot Configurator.
"""

from .logging import get_logger
from .theme import custom_style
from .validators import validate_is_int, parse_int_or_zero

__all__ = [
    "get_logger",
    "custom_style",
    "validate_is_int",
    "parse_int_or_zero",
]
