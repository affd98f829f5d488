"""
Settings API routes
"""

from fastapi import APIRouter, Request

from api.models import UploadSettings
from config import settings

router = APIRouter()


@router.get("", response_model=UploadSettings)
async def get_settings(request: Request):
    """Get current upload settings (non-sensitive only)"""
    upload_service = request.app.state.upload_service
    variant = request.app.state.variant
    return UploadSettings(
        variant=variant,
        max_upload_size=upload_service.max_upload_size,
        accepted_mime_prefix=settings.ACCEPTED_MIME_PREFIX,
        upload_field=settings.UPLOAD_FIELD,
        title_field=settings.TITLE_FIELD,
        public_prefix=settings.PUBLIC_UPLOAD_PREFIX,
        title_required=variant == "progress",
        sanitized_filenames=upload_service.assigner.sanitize,
    )
