"""
Pydantic models for API request/response validation
"""

from pydantic import BaseModel, ConfigDict, Field


class VideoRecord(BaseModel):
    """A catalogued upload, immutable once created"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    stored_filename: str = Field(..., alias="filename")
    relative_path: str = Field(..., alias="path")
    size_bytes: int = Field(..., alias="size", ge=0)
    uploaded_at: str = Field(..., alias="uploadDate")


class ErrorResponse(BaseModel):
    """Error response"""
    error: str


class HealthStatus(BaseModel):
    status: str = "healthy"
    videos: int = 0


class UploadSettings(BaseModel):
    """Non-sensitive upload settings exposed to clients"""
    variant: str
    max_upload_size: int
    accepted_mime_prefix: str
    upload_field: str
    title_field: str
    public_prefix: str
    title_required: bool = False
    sanitized_filenames: bool = True

