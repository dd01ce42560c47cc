"""
Configuration management for the bot.
Handles environment variables and settings.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
TEMP_DIR = PROJECT_ROOT / "temp"

DEFAULT_YTDLP_PATH = "/usr/local/bin/yt-dlp"
DEFAULT_FFMPEG_PATH = "/usr/local/bin/ffmpeg"
DEFAULT_CONTAINER = "videos"


class ConfigurationError(ValueError):
    """Raised when a required setting is missing."""


@dataclass(frozen=True)
class Config:
    """Settings read once at startup."""

    bot_token: Optional[str]
    ytdlp_path: str = DEFAULT_YTDLP_PATH
    ffmpeg_path: str = DEFAULT_FFMPEG_PATH
    azure_connection_string: str = ""
    azure_container: str = DEFAULT_CONTAINER
    temp_dir: Path = TEMP_DIR
    log_level: str = "INFO"
    log_file: Optional[str] = "bot.log"
    blob_unique_suffix: bool = False


def _as_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Build the configuration record from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Config instance; call validate_config() before using it
    """
    env = os.environ if environ is None else environ

    return Config(
        bot_token=env.get("BOT_TOKEN"),
        ytdlp_path=env.get("YTDLP_PATH") or DEFAULT_YTDLP_PATH,
        ffmpeg_path=env.get("FFMPEG_PATH") or DEFAULT_FFMPEG_PATH,
        azure_connection_string=env.get("AZURE_CONNECTION_STRING", ""),
        azure_container=env.get("AZURE_CONTAINER") or DEFAULT_CONTAINER,
        temp_dir=Path(env.get("TEMP_DIR") or TEMP_DIR),
        log_level=env.get("LOG_LEVEL", "INFO"),
        log_file=env.get("LOG_FILE", "bot.log") or None,
        blob_unique_suffix=_as_bool(env.get("BLOB_UNIQUE_SUFFIX")),
    )


def validate_config(config: Config) -> None:
    """
    Validate required configuration parameters.
    Raises ConfigurationError if required parameters are missing.
    """
    if not config.bot_token or not config.bot_token.strip():
        raise ConfigurationError(
            "BOT_TOKEN is not set. Please configure it in .env or environment variables."
        )

    # Create temp directory if it doesn't exist
    config.temp_dir.mkdir(parents=True, exist_ok=True)
