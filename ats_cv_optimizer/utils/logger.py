"""Logging configuration for the ATS CV Optimizer."""

import logging
import sys
from typing import Optional, Union

from ats_cv_optimizer.config import LOG_LEVEL


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Get a configured logger instance. Level falls back to LOG_LEVEL on first setup."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        if level is None:
            level = LOG_LEVEL
    if level is not None:
        logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
