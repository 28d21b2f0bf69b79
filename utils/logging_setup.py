"""Logging configuration setup."""

import logging
from typing import Optional

from config.settings import config


def setup_logging(level: Optional[str] = None):
    """Configure root logging from settings (or an explicit level name)."""
    log_level = getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )
    # basicConfig is a no-op once handlers exist; keep the level in sync
    logging.getLogger().setLevel(log_level)
    return logging.getLogger(__name__)
