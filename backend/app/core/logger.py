"""
Shared application logger.
"""

import logging
import sys

from app.core.config import get_settings

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """Return a stdout logger with the configured level."""
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(get_settings().LOG_LEVEL.upper())
    return log


logger = setup_logger("eq_chatbot")
