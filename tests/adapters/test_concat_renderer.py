from __future__ import annotations

import subprocess
from datetime import timedelta
from pathlib import Path
from typing import Any

import pytest

from gopro_uploader.adapters.renderers.concat_files import (
    chapter_bounds_ms,
    escape_metadata_value,
    generate_chapter_metadata,
    generate_concat_list,
)
from gopro_uploader.adapters.renderers.ffmpeg_concat_renderer import FFmpegConcatRenderer
from gopro_uploader.infra.exceptions import RenderError


def test_concat_list_quotes_paths() -> None:
    content = generate_concat_list([Path("/trip/Day 1/GH010001.MP4"), Path("/trip/it's/b.mp4")])

    assert content.splitlines() == [
        "file '/trip/Day 1/GH010001.MP4'",
        "file '/trip/it'\\''s/b.mp4'",
    ]


def test_concat_list_requires_clips() -> None:
    with pytest.raises(ValueError):
        generate_concat_list([])


def test_chapter_bounds_are_cumulative_milliseconds() -> None:
    durations = [timedelta(seconds=1.2345), timedelta(seconds=2), timedelta(0)]

    assert chapter_bounds_ms(durations) == [(0, 1234), (1234, 3234), (3234, 3234)]


def test_chapter_metadata_document() -> None:
    doc = generate_chapter_metadata(
        "[Trip] Day 1 # Person 1",
        ["a.mp4", "b.mp4"],
        [timedelta(seconds=10), timedelta(seconds=5)],
    )

    assert doc.startswith(";FFMETADATA1\ntitle=[Trip] Day 1 \\# Person 1\n")
    assert doc.count("[CHAPTER]") == 2
    assert "START=10000\nEND=15000\ntitle=b.mp4" in doc


def test_escape_metadata_value() -> None:
    assert escape_metadata_value("a=b;c#d\\e") == "a\\=b\\;c\\#d\\\\e"


def _fake_ffmpeg(calls: list[list[str]], returncode: int = 0):
    def _run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        calls.append(cmd)
        if returncode == 0:
            Path(cmd[-1]).write_bytes(b"merged")
        return subprocess.CompletedProcess(cmd, returncode, stdout=None, stderr="boom")

    return _run


def test_render_writes_atomically(tmp_path: Path, monkeypatch: Any) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr("shutil.which", lambda name: "/usr/bin/ffmpeg")
    monkeypatch.setattr(subprocess, "run", _fake_ffmpeg(calls))
    output_dir = tmp_path / "out"

    result = FFmpegConcatRenderer().render(
        [tmp_path / "a.mp4", tmp_path / "b.mp4"],
        [timedelta(seconds=3), timedelta(seconds=4)],
        "[Trip] Day 1",
        output_dir,
    )

    assert result == output_dir / "[Trip] Day 1.mp4"
    assert result.read_bytes() == b"merged"
    assert not (output_dir / "[Trip] Day 1.mp4.partial").exists()
    cmd = calls[0]
    assert cmd[cmd.index("-c") + 1] == "copy"
    assert cmd[cmd.index("-f") + 1] == "concat"
    assert cmd[-1].endswith(".partial")


def test_render_failure_leaves_no_output(tmp_path: Path, monkeypatch: Any) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr("shutil.which", lambda name: "/usr/bin/ffmpeg")
    monkeypatch.setattr(subprocess, "run", _fake_ffmpeg(calls, returncode=1))

    with pytest.raises(RenderError, match="boom"):
        FFmpegConcatRenderer().render([tmp_path / "a.mp4"], [timedelta(seconds=1)], "t", tmp_path)

    assert list(tmp_path.iterdir()) == []


def test_render_without_ffmpeg(tmp_path: Path, monkeypatch: Any) -> None:
    monkeypatch.setattr("shutil.which", lambda name: None)

    with pytest.raises(RenderError, match="not found"):
        FFmpegConcatRenderer().render([tmp_path / "a.mp4"], [timedelta(seconds=1)], "t", tmp_path)
