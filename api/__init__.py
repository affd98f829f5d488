"""
FastAPI backend for the video upload service
"""

from api.models import (
    VideoRecord,
    ErrorResponse,
    HealthStatus,
    UploadSettings
)

__all__ = [
    'VideoRecord',
    'ErrorResponse',
    'HealthStatus',
    'UploadSettings'
]

__version__ = "1.0.0"
