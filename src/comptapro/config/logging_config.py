"""Logging configuration for the API process."""

import logging
import sys
from logging.handlers import RotatingFileHandler

from comptapro.config.settings import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging() -> None:
    """
    Log to stdout and to a rotating file in the log directory.

    SQL statements are only logged in debug mode.
    """
    settings = get_settings()
    log_file = settings.get_log_dir() / "comptapro.log"

    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
        RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"),
    ]
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.debug else logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
