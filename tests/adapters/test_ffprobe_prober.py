from __future__ import annotations

import subprocess
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from gopro_uploader.adapters.probers.ffprobe_prober import (
    FFprobeProber,
    parse_creation_time,
    parse_duration,
)
from gopro_uploader.infra.exceptions import MalformedInputError, ProbeError


def _ffprobe_document(**overrides: Any) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "format": {
            "duration": "531.531000",
            "format_name": "mov,mp4,m4a,3gp,3g2,mj2",
            "tags": {"creation_time": "2019-07-14T10:22:33.000000Z"},
        },
        "streams": [
            {
                "codec_type": "video",
                "codec_name": "h264",
                "width": 1920,
                "height": 1080,
                "coded_width": 1920,
                "coded_height": 1088,
                "avg_frame_rate": "60000/1001",
            },
            {"codec_type": "audio", "codec_name": "aac"},
        ],
    }
    doc.update(overrides)
    return doc


def _patch_run(monkeypatch: Any, doc: dict[str, Any]) -> None:
    def _fake_run_ffprobe(self: FFprobeProber, file_path: Path) -> dict[str, Any]:
        return doc

    monkeypatch.setattr(FFprobeProber, "_run_ffprobe", _fake_run_ffprobe, raising=True)


def test_probe_reads_first_stream_and_format(tmp_path: Path, monkeypatch: Any) -> None:
    _patch_run(monkeypatch, _ffprobe_document())

    result = FFprobeProber().probe(tmp_path / "GH010001.MP4")

    assert result.duration == timedelta(seconds=531.531)
    assert result.create_time == datetime(2019, 7, 14, 10, 22, 33, tzinfo=timezone.utc)
    # Coded size wins over display size
    assert (result.width, result.height) == (1920, 1088)
    assert result.codec == "h264"
    assert result.frame_rate_ratio == "60000/1001"


def test_probe_falls_back_to_display_size(tmp_path: Path, monkeypatch: Any) -> None:
    doc = _ffprobe_document()
    del doc["streams"][0]["coded_width"]
    doc["streams"][0]["coded_height"] = 0
    _patch_run(monkeypatch, doc)

    result = FFprobeProber().probe(tmp_path / "clip.mp4")

    assert (result.width, result.height) == (1920, 1080)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d["format"].pop("duration"),
        lambda d: d["format"].pop("tags"),
        lambda d: d["streams"][0].pop("codec_name"),
        lambda d: d["streams"][0].pop("avg_frame_rate"),
        lambda d: d.update(streams=[]),
    ],
)
def test_probe_missing_field_is_malformed(tmp_path: Path, monkeypatch: Any, mutate: Any) -> None:
    doc = _ffprobe_document()
    mutate(doc)
    _patch_run(monkeypatch, doc)

    with pytest.raises(MalformedInputError):
        FFprobeProber().probe(tmp_path / "clip.mp4")


def test_run_ffprobe_nonzero_exit_raises(tmp_path: Path, monkeypatch: Any) -> None:
    monkeypatch.setattr("shutil.which", lambda name: "/usr/bin/ffprobe")

    def _fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="moov atom not found")

    monkeypatch.setattr(subprocess, "run", _fake_run)

    with pytest.raises(ProbeError, match="moov atom not found"):
        FFprobeProber().probe(tmp_path / "broken.mp4")


def test_run_ffprobe_invalid_json_is_malformed(tmp_path: Path, monkeypatch: Any) -> None:
    monkeypatch.setattr("shutil.which", lambda name: "/usr/bin/ffprobe")

    def _fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(cmd, 0, stdout="{not json", stderr="")

    monkeypatch.setattr(subprocess, "run", _fake_run)

    with pytest.raises(MalformedInputError):
        FFprobeProber().probe(tmp_path / "clip.mp4")


def test_missing_executable_raises(tmp_path: Path, monkeypatch: Any) -> None:
    monkeypatch.setattr("shutil.which", lambda name: None)

    with pytest.raises(ProbeError, match="not found"):
        FFprobeProber().probe(tmp_path / "clip.mp4")


def test_parse_creation_time_requires_offset() -> None:
    assert parse_creation_time("2019-07-14T10:22:33.5+02:00").utcoffset() == timedelta(hours=2)
    with pytest.raises(MalformedInputError):
        parse_creation_time("2019-07-14T10:22:33")
    with pytest.raises(MalformedInputError):
        parse_creation_time("yesterday")


def test_parse_duration_rejects_garbage() -> None:
    assert parse_duration("1.5") == timedelta(seconds=1.5)
    with pytest.raises(MalformedInputError):
        parse_duration("N/A")
    with pytest.raises(MalformedInputError):
        parse_duration("-3")


@pytest.mark.parametrize("value", ["inf", "-inf", "nan", "1e20"])
def test_parse_duration_rejects_unrepresentable(value: str) -> None:
    with pytest.raises(MalformedInputError):
        parse_duration(value)
