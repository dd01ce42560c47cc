"""
Utility functions for the bot.
Helper functions for common operations.
"""

import logging
import shutil
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

BLOB_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
DOWNLOAD_DIR_PREFIX = "download_"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Explicitly use stdout
            *(
                logging.FileHandler(log_file, encoding="utf-8")
                for log_file in [log_file]
                if log_file
            ),
        ],
        encoding="utf-8",  # Set UTF-8 encoding for all handlers
    )

    # aiogram logs every handled update at INFO
    logging.getLogger("aiogram.event").setLevel(logging.WARNING)


def make_blob_name(
    file_path: Union[str, Path],
    now: Optional[datetime] = None,
    unique_suffix: bool = False,
) -> str:
    """
    Build the storage object name for a downloaded file.

    The name is the UTC time formatted as YYYYMMDDHHMMSS followed by the
    original extension, e.g. ``20240101120000.mp4``.

    Args:
        file_path: Local path of the downloaded file
        now: Timestamp to use (defaults to the current UTC time)
        unique_suffix: Append a short random token after the timestamp

    Returns:
        Blob name
    """
    now = now or datetime.now(timezone.utc)
    stem = now.astimezone(timezone.utc).strftime(BLOB_TIMESTAMP_FORMAT)
    if unique_suffix:
        stem = f"{stem}-{uuid.uuid4().hex[:6]}"
    return f"{stem}{Path(file_path).suffix}"


def remove_file(file_path: Union[str, Path]) -> bool:
    """
    Delete a downloaded file and its download directory if left empty.

    Failures are logged and never raised.

    Returns:
        True if the file is gone afterwards
    """
    path = Path(file_path)
    logger.info(f"Cleaning up local file: {path}")
    try:
        path.unlink(missing_ok=True)
        logger.info("Local file deleted successfully")
    except OSError as e:
        logger.error(f"Failed to delete local file {path}: {e}")
        return False

    parent = path.parent
    if parent.name.startswith(DOWNLOAD_DIR_PREFIX):
        try:
            parent.rmdir()
        except OSError as e:
            logger.debug(f"Download directory {parent} not removed: {e}")
    return True


def cleanup_temp_dir(temp_dir: Path) -> None:
    """
    Remove download directories left behind by interrupted runs.

    Args:
        temp_dir: Directory holding per-download subdirectories
    """
    try:
        for entry in temp_dir.glob(f"{DOWNLOAD_DIR_PREFIX}*"):
            if entry.is_dir():
                shutil.rmtree(entry, ignore_errors=True)
                logger.info(f"Cleaned up leftover download dir: {entry}")
    except OSError as e:
        logger.error(f"Error cleaning temp dir {temp_dir}: {e}")
