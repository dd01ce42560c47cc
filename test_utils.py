"""
Tests for helper functions.
"""

import re
from datetime import datetime, timezone

from utils import cleanup_temp_dir, make_blob_name, remove_file


def test_blob_name_is_utc_timestamp_plus_extension():
    now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    assert make_blob_name("/tmp/abc.mp4", now=now) == "20240101120000.mp4"
    assert make_blob_name("/tmp/no_extension", now=now) == "20240101120000"


def test_blob_name_unique_suffix():
    now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    first = make_blob_name("clip.mp4", now=now, unique_suffix=True)
    second = make_blob_name("clip.mp4", now=now, unique_suffix=True)

    assert re.fullmatch(r"20240101120000-[0-9a-f]{6}\.mp4", first)
    assert first != second


def test_remove_file_deletes_file_and_empty_download_dir(tmp_path):
    download_dir = tmp_path / "download_abcd1234"
    download_dir.mkdir()
    video = download_dir / "clip.mp4"
    video.write_bytes(b"data")

    assert remove_file(video) is True
    assert not video.exists()
    assert not download_dir.exists()


def test_remove_file_keeps_other_directories(tmp_path):
    video = tmp_path / "abc.mp4"
    video.write_bytes(b"data")

    assert remove_file(str(video)) is True
    assert tmp_path.exists()


def test_remove_missing_file_is_not_an_error(tmp_path):
    assert remove_file(tmp_path / "gone.mp4") is True


def test_remove_file_failure_is_swallowed(tmp_path):
    # unlink() on a directory fails
    directory = tmp_path / "clip.mp4"
    directory.mkdir()

    assert remove_file(directory) is False
    assert directory.exists()


def test_cleanup_temp_dir_removes_leftover_downloads(tmp_path):
    leftover = tmp_path / "download_deadbeef"
    leftover.mkdir()
    (leftover / "partial.mp4.part").write_bytes(b"x")
    keep = tmp_path / "other"
    keep.mkdir()

    cleanup_temp_dir(tmp_path)

    assert not leftover.exists()
    assert keep.exists()


def test_cleanup_missing_temp_dir(tmp_path):
    cleanup_temp_dir(tmp_path / "missing")
