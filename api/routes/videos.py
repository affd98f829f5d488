"""
Video API routes
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from api.models import ErrorResponse, VideoRecord
from api.services.upload_service import UploadService
from utils.catalog import VideoCatalog

router = APIRouter()


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service


def get_catalog(request: Request) -> VideoCatalog:
    return request.app.state.catalog


@router.post(
    "/upload",
    response_model=VideoRecord,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        415: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def upload_video(
    video: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    upload_service: UploadService = Depends(get_upload_service),
):
    """
    Upload a video file

    Args:
        video: Video file (multipart field "video")
        title: Optional display title

    Returns:
        The catalogued video record
    """
    return await upload_service.create_video(video, title)


@router.get("/videos", response_model=List[VideoRecord])
async def list_videos(catalog: VideoCatalog = Depends(get_catalog)):
    """List all videos in upload order"""
    return catalog.list_all()


@router.get("/video/{video_id}", response_model=VideoRecord, responses={404: {"model": ErrorResponse}})
async def get_video(video_id: str, catalog: VideoCatalog = Depends(get_catalog)):
    """Get video by ID"""
    return catalog.find_by_id(video_id)
