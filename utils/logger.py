"""
Logging for the upload service - one set of handlers, one child logger per module
"""

import logging
import sys
from logging.handlers import RotatingFileHandler

from config.settings import LOG_BACKUP_COUNT, LOG_FILE, LOG_LEVEL, LOG_MAX_BYTES

ROOT_LOGGER = "video_upload"


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name"""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if not color:
            return super().format(record)
        # Color a copy so the file handler keeps the plain level name
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _configure_root() -> logging.Logger:
    """Attach console and rotating file handlers to the service logger once"""
    root = logging.getLogger(ROOT_LOGGER)
    if root.handlers:
        return root

    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    root.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(ColoredFormatter('%(levelname)s | %(name)s | %(message)s'))
    root.addHandler(console_handler)

    # Rotated at LOG_MAX_BYTES
    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        LOG_FILE, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root.addHandler(file_handler)

    return root


def setup_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get the logger for a module of the upload service

    Args:
        name: Module name, e.g. "catalog" becomes "video_upload.catalog"

    Returns:
        Logger sharing the service's console and file handlers
    """
    root = _configure_root()
    if name == ROOT_LOGGER:
        return root
    return root.getChild(name)
