"""
Video download module.
Runs the external yt-dlp binary and reports where the file ended up.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from utils import DOWNLOAD_DIR_PREFIX

logger = logging.getLogger(__name__)

# Best mp4 video muxed with the best m4a audio
VIDEO_FORMAT = "bestvideo[ext=mp4]+bestaudio[ext=m4a]"

OUTPUT_TEMPLATE = "%(title)s [%(id)s].%(ext)s"


@dataclass
class DownloadResult:
    """Outcome of a single yt-dlp run."""

    success: bool
    file_path: Optional[str] = None
    error_detail: Optional[str] = None

    @classmethod
    def ok(cls, file_path: str) -> "DownloadResult":
        return cls(success=True, file_path=file_path)

    @classmethod
    def failed(cls, error_detail: str) -> "DownloadResult":
        return cls(success=False, error_detail=error_detail)


class VideoDownloader:
    """
    Thin wrapper around the yt-dlp command line tool.
    """

    def __init__(
        self,
        ytdlp_path: str,
        ffmpeg_path: str,
        output_dir: Path,
        video_format: str = VIDEO_FORMAT,
    ):
        """
        Initialize downloader.

        Args:
            ytdlp_path: Path to the yt-dlp binary
            ffmpeg_path: Path to the ffmpeg binary used for muxing
            output_dir: Directory for temporary downloads
            video_format: yt-dlp format selector
        """
        self.ytdlp_path = ytdlp_path
        self.ffmpeg_path = ffmpeg_path
        self.output_dir = Path(output_dir)
        self.video_format = video_format
        logger.info(
            f"Setting up yt-dlp with paths: yt-dlp={ytdlp_path}, ffmpeg={ffmpeg_path}"
        )

    def _build_command(self, url: str, download_dir: Path) -> List[str]:
        """
        Build the yt-dlp command line.

        Args:
            url: Media URL, passed through unvalidated
            download_dir: Directory to save the file in

        Returns:
            Argument list for create_subprocess_exec
        """
        return [
            self.ytdlp_path,
            "--no-playlist",
            "--no-progress",
            "--restrict-filenames",  # Sanitize filenames
            "-f",
            self.video_format,
            "--ffmpeg-location",
            self.ffmpeg_path,
            "-o",
            str(download_dir / OUTPUT_TEMPLATE),
            # Final path after merging, one line on stdout
            "--print",
            "after_move:filepath",
            "--no-simulate",
            "--",
            url,
        ]

    async def download(self, url: str) -> DownloadResult:
        """
        Download media from URL.

        Cancelling the awaiting task kills the yt-dlp process.

        Args:
            url: Media URL to download

        Returns:
            DownloadResult with the local file path or yt-dlp's error output
        """
        logger.info(f"Starting video download from: {url}")

        download_dir = self.output_dir / f"{DOWNLOAD_DIR_PREFIX}{uuid.uuid4().hex[:8]}"
        cmd = self._build_command(url, download_dir)

        try:
            download_dir.mkdir(parents=True, exist_ok=True)
            process = await asyncio.create_subprocess_exec(
                *cmd, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            logger.error(f"Failed to start yt-dlp: {e}")
            _remove_empty_dir(download_dir)
            return DownloadResult.failed(f"Failed to start yt-dlp: {e}")

        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            logger.warning(f"Download cancelled, killing yt-dlp: {url}")
            if process.returncode is None:
                process.kill()
            # Reap the child so its transport closes before the loop does
            await asyncio.shield(process.wait())
            raise

        if process.returncode != 0:
            error_output = stderr.decode(errors="replace").strip()
            logger.error(f"❌ Download failed: {error_output}")
            _remove_empty_dir(download_dir)
            return DownloadResult.failed(
                error_output or f"yt-dlp exited with code {process.returncode}"
            )

        file_path = _last_line(stdout.decode(errors="replace"))
        if not file_path or not Path(file_path).is_file():
            logger.error(f"yt-dlp finished but no file was found (reported: {file_path!r})")
            _remove_empty_dir(download_dir)
            return DownloadResult.failed("yt-dlp finished but produced no file")

        logger.info(
            f"✅ Download completed successfully: {file_path} "
            f"({Path(file_path).stat().st_size} bytes)"
        )
        return DownloadResult.ok(file_path)


def _last_line(output: str) -> Optional[str]:
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    return lines[-1] if lines else None


def _remove_empty_dir(path: Path) -> None:
    try:
        path.rmdir()
    except OSError as e:
        # Partial files from a failed run keep the directory alive
        logger.debug(f"Download directory {path} not removed: {e}")
