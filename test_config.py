"""
Tests for configuration loading and validation.
"""

from pathlib import Path

import pytest

from config import (
    DEFAULT_CONTAINER,
    DEFAULT_FFMPEG_PATH,
    DEFAULT_YTDLP_PATH,
    ConfigurationError,
    load_config,
    validate_config,
)


def test_defaults():
    config = load_config({"BOT_TOKEN": "123:abc"})

    assert config.bot_token == "123:abc"
    assert config.ytdlp_path == DEFAULT_YTDLP_PATH
    assert config.ffmpeg_path == DEFAULT_FFMPEG_PATH
    assert config.azure_connection_string == ""
    assert config.azure_container == DEFAULT_CONTAINER == "videos"
    assert config.log_level == "INFO"
    assert config.blob_unique_suffix is False


def test_values_from_environment(tmp_path):
    config = load_config(
        {
            "BOT_TOKEN": "123:abc",
            "YTDLP_PATH": "/opt/bin/yt-dlp",
            "FFMPEG_PATH": "/opt/bin/ffmpeg",
            "AZURE_CONNECTION_STRING": "UseDevelopmentStorage=true",
            "AZURE_CONTAINER": "clips",
            "TEMP_DIR": str(tmp_path),
            "LOG_FILE": "",
            "BLOB_UNIQUE_SUFFIX": "true",
        }
    )

    assert config.ytdlp_path == "/opt/bin/yt-dlp"
    assert config.ffmpeg_path == "/opt/bin/ffmpeg"
    assert config.azure_connection_string == "UseDevelopmentStorage=true"
    assert config.azure_container == "clips"
    assert config.temp_dir == Path(tmp_path)
    assert config.log_file is None
    assert config.blob_unique_suffix is True


@pytest.mark.parametrize("env", [{}, {"BOT_TOKEN": ""}, {"BOT_TOKEN": "   "}])
def test_missing_token_is_rejected(env, tmp_path):
    config = load_config({**env, "TEMP_DIR": str(tmp_path / "temp")})

    with pytest.raises(ConfigurationError, match="BOT_TOKEN"):
        validate_config(config)


def test_validate_creates_temp_dir(tmp_path):
    temp_dir = tmp_path / "nested" / "temp"
    config = load_config({"BOT_TOKEN": "123:abc", "TEMP_DIR": str(temp_dir)})

    validate_config(config)

    assert temp_dir.is_dir()
