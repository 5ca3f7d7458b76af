"""Utility helpers for configuring logging across scraper runs."""

from __future__ import annotations

import logging
import os
from typing import Optional

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure root logging handlers.

    ``LOG_LEVEL`` and ``LOG_FORMAT`` environment variables take precedence over
    the values passed in, so a run can be made verbose without editing config.
    When handlers are already installed (for example by Hydra) only the levels
    are updated.
    """
    log_level_name = os.getenv("LOG_LEVEL", level or "INFO").upper()
    log_format = os.getenv("LOG_FORMAT", fmt or DEFAULT_LOG_FORMAT)

    level_value = getattr(logging, log_level_name, logging.INFO)
    root_logger = logging.getLogger()
    logging.captureWarnings(True)

    if not root_logger.handlers:
        logging.basicConfig(
            level=level_value, format=log_format, datefmt=DEFAULT_DATE_FORMAT
        )
    else:
        root_logger.setLevel(level_value)
        for handler in root_logger.handlers:
            handler.setLevel(level_value)


__all__ = ["configure_logging"]
