"""
FastAPI application for the video upload service
"""

import random
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api.middleware.error_handler import add_error_handlers
from api.models import HealthStatus
from api.routes import pages, settings as settings_routes, videos
from api.services.upload_service import UploadService
from config import settings
from utils.catalog import VideoCatalog
from utils.file_manager import StorageDirectory
from utils.filename import Clock, FilenameAssigner
from utils.logger import setup_logger

logger = setup_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info(f"Starting video upload API ({app.state.variant} variant)...")
    logger.info(f"Storing uploads in {app.state.storage.directory.resolve()}")

    yield

    # The catalog is memory only, files on disk stay behind
    logger.info(f"Shutting down API, dropping {len(app.state.catalog)} catalog records")


def create_app(
    upload_dir: Optional[Union[str, Path]] = None,
    max_upload_size: Optional[int] = None,
    variant: Optional[str] = None,
    clock: Optional[Clock] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """
    Build the application with its own storage directory and catalog

    Args:
        upload_dir: Directory for stored files (defaults to UPLOAD_DIR)
        max_upload_size: Size ceiling in bytes (defaults to MAX_UPLOAD_SIZE)
        variant: "basic" or "progress" (defaults to SERVICE_VARIANT)
        clock: Callable returning the current UTC datetime
        rng: Random source for filename suffixes

    Returns:
        Configured FastAPI app
    """
    variant = (variant or settings.SERVICE_VARIANT).lower()
    if variant not in settings.VARIANTS:
        raise ValueError(f"Unknown service variant: {variant}")

    storage = StorageDirectory(upload_dir or settings.UPLOAD_DIR)
    storage.ensure_ready()

    catalog = VideoCatalog()
    assigner = FilenameAssigner(sanitize=variant == "progress", clock=clock, rng=rng)
    upload_service = UploadService(
        storage=storage,
        catalog=catalog,
        assigner=assigner,
        max_upload_size=max_upload_size or settings.MAX_UPLOAD_SIZE,
    )

    app = FastAPI(
        title="Video Upload API",
        description="Upload videos, list them and play them back",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.variant = variant
    app.state.storage = storage
    app.state.catalog = catalog
    app.state.upload_service = upload_service

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add error handlers
    add_error_handlers(app)

    # Serve stored files
    app.mount(
        settings.PUBLIC_UPLOAD_PREFIX,
        StaticFiles(directory=str(storage.directory)),
        name="uploads",
    )

    # Include routers
    app.include_router(pages.router, tags=["Pages"])
    app.include_router(videos.router, tags=["Videos"])
    app.include_router(settings_routes.router, prefix="/api/settings", tags=["Settings"])

    @app.get("/health", response_model=HealthStatus)
    async def health_check(request: Request):
        """Health check endpoint"""
        return HealthStatus(videos=len(request.app.state.catalog))

    return app
