"""
HTML upload page
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    variant = request.app.state.variant
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "progress": variant == "progress",
            "page_title": "Video Upload with Progress" if variant == "progress" else "Simple Video Upload",
            "max_upload_mb": request.app.state.upload_service.max_upload_size // (1024 * 1024),
        },
    )
