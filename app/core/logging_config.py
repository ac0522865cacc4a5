"""
Logging setup - standard library logging, configured once at startup.
"""

import logging

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure root logging from settings (idempotent)."""
    settings = get_settings()
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)
    # pymongo is chatty at DEBUG
    logging.getLogger("pymongo").setLevel(logging.WARNING)
