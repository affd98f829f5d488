"""
Configuration settings for the video upload service
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# ============================================================================
# PROJECT PATHS
# ============================================================================
BASE_DIR = Path(__file__).parent.parent
LOGS_DIR = BASE_DIR / "logs"

# Relative to the process working directory, created on first upload
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", "uploads"))

# ============================================================================
# SERVER
# ============================================================================
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# ============================================================================
# UPLOAD SETTINGS
# ============================================================================
MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", str(1024 * 1024 * 500)))  # 500MB
CHUNK_SIZE = 1024 * 1024  # Read uploads 1MB at a time
ACCEPTED_MIME_PREFIX = "video/"

UPLOAD_FIELD = "video"
TITLE_FIELD = "title"
PUBLIC_UPLOAD_PREFIX = "/uploads"

# ============================================================================
# FILENAME ASSIGNMENT
# ============================================================================
FALLBACK_BASENAME = "video"
RANDOM_SUFFIX_DIGITS = 4
MAX_BASENAME_BYTES = 200  # Name limit is 255 bytes, suffix and extension need the rest
MAX_EXTENSION_LENGTH = 16  # Bytes, longer "extensions" are dropped
MAX_NAME_ATTEMPTS = 5  # Fresh names drawn when a stored file already exists

# ============================================================================
# SERVICE VARIANT
# ============================================================================
# basic:    raw titles (hardened), full filename fallback, plain upload form
# progress: slugified titles, stem fallback, upload form with progress bar
VARIANTS = ("basic", "progress")
SERVICE_VARIANT = os.getenv("SERVICE_VARIANT", "progress").lower()

if SERVICE_VARIANT not in VARIANTS:
    raise ValueError(f"SERVICE_VARIANT must be one of {VARIANTS}, got {SERVICE_VARIANT!r}")

# ============================================================================
# LOGGING
# ============================================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()  # DEBUG, INFO, WARNING, ERROR
LOG_FILE = Path(os.getenv("LOG_FILE", str(LOGS_DIR / "video_upload.log")))
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))  # 5MB per file
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "3"))

# ============================================================================
# DEVELOPMENT MODE
# ============================================================================
DEBUG_MODE = os.getenv("DEBUG", "False").lower() == "true"

if DEBUG_MODE:
    print("⚠️  DEBUG MODE ENABLED")
    LOG_LEVEL = "DEBUG"
