"""
Centralized logging configuration for the application.
"""

import logging
import sys

from app.shared.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config: Settings | None = None) -> None:
    """
    Configure the root logger once at startup.

    Args:
        config: Settings instance, uses the process settings if None
    """
    config = config or default_settings
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level,
                        format=LOG_FORMAT,
                        handlers=[logging.StreamHandler(sys.stdout)])
    logging.getLogger("app").setLevel(level)
