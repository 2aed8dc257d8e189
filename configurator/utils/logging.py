"""
Logging utilities for the Queue Bot Configurator.
"""

import logging
from typing import Optional

from ..config import LOG_LEVEL


_logger: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """Get the application logger, initializing if needed."""
    global _logger
    if _logger is None:
        logging.basicConfig(
            level=getattr(logging, LOG_LEVEL, logging.WARNING),
            format='%(asctime)s | %(levelname)-8s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        _logger = logging.getLogger("queue_configurator")
    return _logger


logger = get_logger()
