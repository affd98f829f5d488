#!/usr/bin/env python3
"""
Video Upload Service - Main Entry Point
"""

import os
import sys
import argparse
from pathlib import Path

import uvicorn

from config import settings
from utils.logger import setup_logger

logger = setup_logger("main")


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="Upload, list and play back videos over HTTP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start on the default port (PORT or 3000)
  python main.py

  # Plain upload form with raw titles
  python main.py --variant basic --port 8080

  # Store uploads somewhere else
  python main.py --upload-dir /srv/videos
        """
    )

    parser.add_argument('--host', default=settings.HOST, help='Interface to bind')
    parser.add_argument('--port', type=int, default=settings.PORT, help='Port to listen on')
    parser.add_argument('--variant', choices=settings.VARIANTS, default=settings.SERVICE_VARIANT,
                        help='Service flavour: basic form or form with upload progress')
    parser.add_argument('--upload-dir', help='Directory for stored videos')
    parser.add_argument('--reload', action='store_true', help='Reload on code changes')

    args = parser.parse_args()

    # Environment for reloader subprocesses, module values for this one
    os.environ["SERVICE_VARIANT"] = settings.SERVICE_VARIANT = args.variant
    if args.upload_dir:
        os.environ["UPLOAD_DIR"] = args.upload_dir
        settings.UPLOAD_DIR = Path(args.upload_dir)

    logger.info(f"Server running at http://localhost:{args.port}")

    try:
        uvicorn.run(
            "api.main:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=settings.LOG_LEVEL.lower()
        )
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
