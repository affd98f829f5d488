"""
In-memory video catalog - ordered, append-only, lives as long as the process
"""

from datetime import datetime
from typing import List, Optional

from api.models import VideoRecord
from utils.errors import VideoNotFoundError
from utils.filename import epoch_millis
from utils.logger import setup_logger

logger = setup_logger("catalog")


class VideoCatalog:
    """
    Ordered record store for uploaded videos

    Records are kept in insertion order and never updated or removed.
    Nothing is persisted: a restart empties the catalog while the files
    in the upload directory stay behind.
    """

    def __init__(self):
        self._records: List[VideoRecord] = []
        self._last_id: Optional[int] = None

    def __len__(self) -> int:
        return len(self._records)

    def next_id(self, now: datetime) -> str:
        """
        Issue a record id derived from the creation time in milliseconds

        Ids are strictly increasing; a second id in the same millisecond
        is bumped past the previous one.
        """
        candidate = epoch_millis(now)
        if self._last_id is not None and candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)

    def append(self, record: VideoRecord) -> None:
        self._records.append(record)
        logger.debug(f"Catalogued video {record.id} ({len(self._records)} total)")

    def list_all(self) -> List[VideoRecord]:
        """Snapshot of all records in insertion order"""
        return list(self._records)

    def find_by_id(self, video_id: str) -> VideoRecord:
        for record in self._records:
            if record.id == video_id:
                return record
        raise VideoNotFoundError(f"Video not found: {video_id}")
