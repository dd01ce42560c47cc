#!/usr/bin/env python3
"""
Main entry point for the Telegram video download bot.
"""

import asyncio
import logging
import sys
from pathlib import Path

# Load environment variables from .env file (real environment wins)
from dotenv import load_dotenv

load_dotenv()

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from config import ConfigurationError, load_config, validate_config
from utils import cleanup_temp_dir, setup_logging
from blob_storage import BlobStorageService
from downloader import VideoDownloader
from bot import run_bot

logger = logging.getLogger(__name__)


async def main() -> None:
    """
    Main application entry point.
    """
    config = load_config()
    setup_logging(level=config.log_level, log_file=config.log_file)

    try:
        validate_config(config)
    except ConfigurationError as e:
        logger.error(f"❌ {e}")
        return

    storage = BlobStorageService(
        config.azure_connection_string, config.azure_container
    )

    try:
        logger.info("Starting Telegram video download bot...")
        cleanup_temp_dir(config.temp_dir)

        await storage.ensure_container()
        logger.info(f"Using blob service with container: {config.azure_container}")

        downloader = VideoDownloader(
            ytdlp_path=config.ytdlp_path,
            ffmpeg_path=config.ffmpeg_path,
            output_dir=config.temp_dir,
        )

        await run_bot(
            config.bot_token,
            downloader,
            storage,
            unique_blob_names=config.blob_unique_suffix,
        )

    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception as e:
        logger.error(f"Critical error: {e}")
        sys.exit(1)
    finally:
        await storage.close()


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")


if __name__ == "__main__":
    run()
