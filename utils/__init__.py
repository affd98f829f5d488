# utils/__init__.py
"""
Storage, naming, catalog and logging helpers
"""

from utils.logger import setup_logger
from utils.file_manager import StorageDirectory
from utils.filename import FilenameAssigner
from utils.catalog import VideoCatalog

__all__ = [
    'setup_logger',
    'StorageDirectory',
    'FilenameAssigner',
    'VideoCatalog'
]
