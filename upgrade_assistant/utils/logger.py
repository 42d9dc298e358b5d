"""Logging configuration."""

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "UPGRADE_ASSISTANT_LOG_LEVEL"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a configured logger instance."""
    logger = logging.getLogger(name or __name__)

    # Only configure if no handlers exist
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
        logger.setLevel(getattr(logging, level_name, logging.INFO))

    return logger
