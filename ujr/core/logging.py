"""
Logging setup.

Modules log through ``logging.getLogger(__name__)``; this installs a
single console handler on the package logger so every ``ujr.*``
logger shares one format.
"""

import logging
import sys
from typing import Optional

from ujr.config import settings
from ujr.core.constants import LOG_DATE_FORMAT, LOG_FORMAT, ROOT_LOGGER_NAME


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name. Defaults to ``settings.log_level``.

    Returns:
        The configured ``ujr`` logger
    """
    level = (level or settings.log_level).upper()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
