"""
Storage directory management - creates the upload folder and writes files into it
"""

from pathlib import Path
from typing import Protocol, Union

from config.settings import CHUNK_SIZE
from utils.errors import PayloadTooLargeError, StorageError
from utils.logger import setup_logger

logger = setup_logger("file_manager")


class AsyncReadable(Protocol):
    async def read(self, size: int = -1) -> bytes:
        ...


class StorageDirectory:
    """Manages the directory uploaded videos are stored in"""

    def __init__(self, directory: Union[str, Path], chunk_size: int = CHUNK_SIZE):
        self.directory = Path(directory)
        self.chunk_size = chunk_size

    def ensure_ready(self) -> Path:
        """
        Create the storage directory if it does not exist yet

        Returns:
            The directory path

        Raises:
            StorageError: if the directory cannot be created
        """
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create storage directory {self.directory}: {e}")
            raise StorageError(f"Cannot create storage directory: {e.strerror or e}") from e
        return self.directory

    def path_for(self, stored_filename: str) -> Path:
        """Resolve a stored filename inside the directory, refusing anything outside it"""
        if not stored_filename or Path(stored_filename).name != stored_filename:
            raise StorageError(f"Invalid stored filename: {stored_filename!r}")
        if stored_filename in (".", ".."):
            raise StorageError(f"Invalid stored filename: {stored_filename!r}")
        return self.directory / stored_filename

    def discard(self, stored_filename: str) -> None:
        """Remove a (partial) file, ignoring files that are already gone"""
        path = self.path_for(stored_filename)
        try:
            path.unlink()
            logger.debug(f"Removed partial file: {path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove partial file {path}: {e}")

    async def write(self, stored_filename: str, source: AsyncReadable, max_bytes: int) -> int:
        """
        Copy an upload stream into a new file

        The file is created exclusively; an existing file raises
        FileExistsError and is left untouched. On any other failure the
        partial file is removed.

        Args:
            stored_filename: Name of the file to create
            source: Object with an async read(size) method
            max_bytes: Size ceiling for the stream

        Returns:
            Number of bytes written

        Raises:
            FileExistsError: if the name is already taken
            PayloadTooLargeError: if the stream exceeds max_bytes
            StorageError: if the file cannot be written
        """
        self.ensure_ready()
        path = self.path_for(stored_filename)

        try:
            handle = open(path, "xb")
        except FileExistsError:
            raise
        except OSError as e:
            logger.error(f"Cannot create {path}: {e}")
            raise StorageError(f"Failed to save file: {e.strerror or e}") from e

        written = 0
        try:
            with handle:
                while True:
                    chunk = await source.read(self.chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > max_bytes:
                        raise PayloadTooLargeError(
                            f"File too large, limit is {max_bytes} bytes"
                        )
                    handle.write(chunk)
        except PayloadTooLargeError:
            self.discard(stored_filename)
            raise
        except OSError as e:
            logger.error(f"Failed writing {path} after {written} bytes: {e}", exc_info=True)
            self.discard(stored_filename)
            raise StorageError(f"Failed to save file: {e.strerror or e}") from e
        except BaseException:
            # Cancelled or otherwise interrupted, nothing may stay behind
            self.discard(stored_filename)
            raise

        logger.debug(f"Wrote {written} bytes to {path}")
        return written
