"""Logging configuration for the save decoder tools."""
import sys
from datetime import datetime
from typing import Optional

from loguru import logger

from ..utils.paths import get_writable_dir
from .settings import Settings, get_settings


SESSION_ID = datetime.now().strftime("%Y%m%d_%H%M%S")

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:{line} - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}"


def configure_logging(settings: Optional[Settings] = None, level: Optional[str] = None):
    """Configure Loguru logging.

    Args:
        settings: Settings to use (defaults to the environment settings)
        level: Overrides the stderr level from the settings
    """
    if settings is None:
        settings = get_settings()
    log_level = (level or settings.log_level).upper()

    logger.remove()

    if settings.log_filter:
        log_filter = settings.log_filter
        logger.add(
            sys.stderr,
            level=log_level,
            format=CONSOLE_FORMAT,
            filter=lambda record: log_filter in record["name"]
        )
    else:
        logger.add(
            sys.stderr,
            level=log_level,
            format=CONSOLE_FORMAT
        )

    if settings.log_to_file:
        log_dir = get_writable_dir("logs")
        logger.add(
            log_dir / f"vhsave_{SESSION_ID}.log",
            rotation="5 MB",
            retention=5,
            level="DEBUG",
            format=FILE_FORMAT
        )

    return logger
