"""
Logging configuration for the journal frontend.

Usage:
    from utils.logging_config import setup_logging

    # Once, at the top of the Streamlit script:
    setup_logging()

    # In modules:
    logger = logging.getLogger(__name__)
"""

import logging
import sys
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Install a stdout handler on the root logger.

    Streamlit re-executes the script on every interaction, so this is a
    no-op once our handler is present.

    Args:
        level: Log level name. Defaults to ``settings.LOG_LEVEL``.
    """
    root = logging.getLogger()
    if any(getattr(h, "_mood_journal", False) for h in root.handlers):
        return

    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._mood_journal = True

    root.addHandler(handler)
    root.setLevel(log_level)

    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
