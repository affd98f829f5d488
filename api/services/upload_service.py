"""
Upload intake - validates an uploaded video, stores it and catalogs it
"""

from datetime import datetime, timezone
from typing import Optional, Tuple

from fastapi import UploadFile

from api.models import VideoRecord
from config.settings import ACCEPTED_MIME_PREFIX, MAX_NAME_ATTEMPTS, PUBLIC_UPLOAD_PREFIX
from utils.catalog import VideoCatalog
from utils.errors import (
    MissingFileError,
    PayloadTooLargeError,
    StorageError,
    UnsupportedMediaTypeError,
)
from utils.file_manager import StorageDirectory
from utils.filename import FilenameAssigner
from utils.logger import setup_logger

logger = setup_logger("upload_service")


def public_path(stored_filename: str) -> str:
    return f"{PUBLIC_UPLOAD_PREFIX}/{stored_filename}"


def iso_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2024-05-01T10:00:00.000Z"""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class UploadService:
    """Service layer for video uploads"""

    def __init__(
        self,
        storage: StorageDirectory,
        catalog: VideoCatalog,
        assigner: FilenameAssigner,
        max_upload_size: int,
    ):
        self.storage = storage
        self.catalog = catalog
        self.assigner = assigner
        self.max_upload_size = max_upload_size

    def check_file(self, file: Optional[UploadFile]) -> UploadFile:
        """Receiving, filtering and declared-size checks; nothing touches disk here"""
        if file is None or not file.filename:
            raise MissingFileError("No file uploaded")

        content_type = (file.content_type or "").lower()
        if not content_type.startswith(ACCEPTED_MIME_PREFIX):
            logger.warning(f"Rejected {file.filename}: content type {content_type or 'missing'}")
            raise UnsupportedMediaTypeError("Only video files are allowed")

        declared = getattr(file, "size", None)
        if declared is not None and declared > self.max_upload_size:
            logger.warning(f"Rejected {file.filename}: {declared} bytes exceeds limit")
            raise PayloadTooLargeError(
                f"File too large, limit is {self.max_upload_size} bytes"
            )
        return file

    async def store(self, file: UploadFile, title: Optional[str]) -> Tuple[str, int]:
        """
        Name and persist the upload

        Returns:
            Tuple of (stored filename, bytes written)
        """
        for _ in range(MAX_NAME_ATTEMPTS):
            stored_filename = self.assigner.assign(title, file.filename)
            try:
                size = await self.storage.write(stored_filename, file, self.max_upload_size)
            except FileExistsError:
                logger.warning(f"Stored name already taken, drawing a new one: {stored_filename}")
                await file.seek(0)
                continue
            except PayloadTooLargeError:
                logger.warning(f"Rejected {file.filename}: stream exceeds {self.max_upload_size} bytes")
                raise
            return stored_filename, size

        raise StorageError(f"Could not find a free file name after {MAX_NAME_ATTEMPTS} attempts")

    async def create_video(self, file: Optional[UploadFile], title: Optional[str] = None) -> VideoRecord:
        """
        Run one upload from receipt to catalog entry

        Args:
            file: Uploaded file from the video field
            title: Optional title from the form

        Returns:
            The catalogued record
        """
        file = self.check_file(file)
        stored_filename, size = await self.store(file, title)

        now = self.assigner.clock()
        record = VideoRecord(
            id=self.catalog.next_id(now),
            title=self.assigner.title_for(title, file.filename),
            filename=stored_filename,
            path=public_path(stored_filename),
            size=size,
            uploadDate=iso_timestamp(now),
        )
        self.catalog.append(record)

        logger.info(f"Uploaded video {record.id}: {record.title!r} -> {stored_filename} ({size} bytes)")
        return record
