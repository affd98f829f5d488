"""
Error kinds raised by the upload pipeline and catalog
"""


class VideoServiceError(Exception):
    """Base class for errors that are reported to the client"""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class MissingFileError(VideoServiceError):
    """No file was attached under the upload field"""

    status_code = 400
    message = "No file uploaded"


class UnsupportedMediaTypeError(VideoServiceError):
    """The upload declared a non-video MIME type"""

    status_code = 415
    message = "Only video files are allowed"


class PayloadTooLargeError(VideoServiceError):
    """The upload exceeded the size ceiling"""

    status_code = 413
    message = "File too large"


class StorageError(VideoServiceError):
    """The storage directory or a stored file could not be written"""

    status_code = 500
    message = "Failed to store file"


class VideoNotFoundError(VideoServiceError):
    """No catalog record has the requested id"""

    status_code = 404
    message = "Video not found"
