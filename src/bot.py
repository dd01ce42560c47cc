"""
Telegram bot implementation using aiogram.
Downloads media with yt-dlp and shares it through Azure Blob Storage.
"""

import logging
from typing import Optional

from aiogram import Bot, Dispatcher, F, html, types
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from blob_storage import BlobStorageService, StorageError
from downloader import VideoDownloader
from utils import make_blob_name, remove_file

logger = logging.getLogger(__name__)

DOWNLOAD_COMMAND = "/download "

DOWNLOADING_TEXT = "⏳ Downloading..."
USAGE_TEXT = "Usage: /download &lt;url&gt;"
UPLOAD_FAILED_TEXT = "❌ Upload failed. Please try again later."

# Telegram rejects messages over 4096 characters
MAX_ERROR_LENGTH = 3500


def format_download_error(error_detail: str) -> str:
    """
    Build the failure reply from yt-dlp's error output.

    Only the tail is kept when the output is long; yt-dlp prints the
    ERROR line last.
    """
    tail = error_detail[-MAX_ERROR_LENGTH:]
    quoted = html.quote(tail)
    while len(quoted) > MAX_ERROR_LENGTH:
        tail = tail[len(quoted) - MAX_ERROR_LENGTH:]
        quoted = html.quote(tail)
    if len(tail) < len(error_detail):
        quoted = f"…{quoted}"
    return f"❌ Download failed:\n{quoted}"


def extract_download_url(text: str) -> Optional[str]:
    """
    Extract the target URL from a download command.

    Args:
        text: Message text

    Returns:
        The trimmed remainder after "/download ", or None if the text
        is not a download command
    """
    if not text.startswith(DOWNLOAD_COMMAND):
        return None
    return text[len(DOWNLOAD_COMMAND):].strip()


async def handle_download(
    message: types.Message,
    downloader: VideoDownloader,
    uploader: BlobStorageService,
    unique_blob_names: bool = False,
) -> None:
    """Handle incoming text messages, acting only on /download."""
    text = message.text
    if text is None:
        logger.debug("Ignoring non-text message")
        return

    url = extract_download_url(text)
    if url is None:
        logger.debug("Ignoring message that's not a download command")
        return

    chat_id = message.chat.id
    username = message.from_user.username if message.from_user else None
    logger.info(f"Received message from {username or 'unknown'} (ID: {chat_id}): '{text}'")

    try:
        if not url:
            await message.answer(USAGE_TEXT)
            return
        await process_download(message, url, downloader, uploader, unique_blob_names)
    except Exception as e:
        logger.exception(f"Error handling download for chat {chat_id}: {e}")


async def process_download(
    message: types.Message,
    url: str,
    downloader: VideoDownloader,
    uploader: BlobStorageService,
    unique_blob_names: bool = False,
) -> None:
    """Download, upload, reply and clean up for a single request."""
    chat_id = message.chat.id
    logger.info(f"Processing download request for URL: {url}")

    await message.answer(DOWNLOADING_TEXT)

    result = await downloader.download(url)
    if not result.success:
        await message.answer(format_download_error(result.error_detail or ""))
        logger.info(f"Sent error message to chat {chat_id}")
        return

    file_path = result.file_path
    try:
        blob_name = make_blob_name(file_path, unique_suffix=unique_blob_names)
        logger.info(f"Generated blob name: {blob_name}")

        try:
            link = await uploader.upload_file(file_path, blob_name)
        except StorageError as e:
            logger.error(f"❌ Upload failed for chat {chat_id}: {e}")
            await message.answer(UPLOAD_FAILED_TEXT)
            return

        await message.answer(f"✅ Here's your video: {html.quote(link)}")
        logger.info(f"Sent download link to chat {chat_id}")
    finally:
        remove_file(file_path)


async def error_handler(event: types.ErrorEvent) -> bool:
    """Log errors that escaped a handler."""
    logger.error(
        f"❌ Unhandled error while processing update: {event.exception}",
        exc_info=event.exception,
    )
    return True


def create_dispatcher(
    downloader: VideoDownloader,
    uploader: BlobStorageService,
    unique_blob_names: bool = False,
) -> Dispatcher:
    """
    Create the dispatcher with services injected into every handler call.
    """
    dp = Dispatcher(
        downloader=downloader,
        uploader=uploader,
        unique_blob_names=unique_blob_names,
    )
    dp.message.register(handle_download, F.text)
    dp.errors.register(error_handler)
    return dp


async def run_bot(
    token: str,
    downloader: VideoDownloader,
    uploader: BlobStorageService,
    unique_blob_names: bool = False,
) -> None:
    """Run the Telegram bot until SIGINT/SIGTERM."""
    logger.info("Starting bot...")
    bot = Bot(
        token=token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = create_dispatcher(downloader, uploader, unique_blob_names)

    me = await bot.get_me()
    logger.info(f"✅ Bot @{me.username} is up and running.")
    logger.info("Waiting for incoming messages...")

    # Updates are handled as separate tasks; polling errors are logged
    # and retried by aiogram itself
    try:
        await dp.start_polling(bot, allowed_updates=["message"])
    finally:
        logger.info("Bot has been stopped")
