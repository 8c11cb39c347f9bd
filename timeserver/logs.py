import logging
from logging.handlers import RotatingFileHandler
from typing import List

from .config import LoggingSettings

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

UNIT_BYTES = {
    "k": 1024,
    "M": 1024 * 1024,
}


def configure_logging(settings: LoggingSettings, level: int = logging.INFO) -> None:
    """
    Log to the console and to a size-rotated file.

    The file rotates at `size` units and keeps `files` backups. Expects
    settings that already passed validation.
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.file_name:
        handlers.append(
            RotatingFileHandler(
                settings.file_name,
                maxBytes=settings.size * UNIT_BYTES[settings.unit],
                backupCount=settings.files,
                encoding='utf-8',
            )
        )
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
