# massage_booking/utils/my_logging.py
"""Logging configuration"""
import logging
import sys
from massage_booking.config.settings import get_settings

NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "alembic",
    "httpx",
    "uvicorn.access",
)


def setup_logging(verbose=True):
    """Configure application logging; quiet mode keeps only errors from libraries"""
    settings = get_settings()

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO) if verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    if not verbose:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.ERROR)
