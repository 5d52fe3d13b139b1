"""
Media test utilities for gopro-uploader tests.

Chapter and probe-result factories plus a fake prober, so tests never need
ffprobe or real footage.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

from gopro_uploader.adapters.probers.base import ProbeResult
from gopro_uploader.domain.entities import Chapter, Resolution
from gopro_uploader.infra.exceptions import ProbeError

BASE_TIME = datetime(2019, 7, 14, 10, 0, 0, tzinfo=timezone.utc)
FULL_HD = (1920, 1080, "h264")
HD = (1280, 720, "h264")


def make_chapter(
    file_name: str,
    minute: float = 0,
    seconds: float = 60.0,
    size: tuple[int, int, str] = FULL_HD,
    frame_rate: float = 59.94,
) -> Chapter:
    width, height, codec = size
    return Chapter(
        file_name=file_name,
        create_time=BASE_TIME + timedelta(minutes=minute),
        duration=timedelta(seconds=seconds),
        resolution=Resolution(width=width, height=height, codec=codec, frame_rate=frame_rate),
    )


def make_probe(
    minute: float = 0,
    seconds: float = 60.0,
    size: tuple[int, int, str] = FULL_HD,
    frame_rate_ratio: str = "60000/1001",
) -> ProbeResult:
    width, height, codec = size
    return ProbeResult(
        duration=timedelta(seconds=seconds),
        create_time=BASE_TIME + timedelta(minutes=minute),
        width=width,
        height=height,
        codec=codec,
        frame_rate_ratio=frame_rate_ratio,
    )


class FakeProber:
    """Prober returning canned results keyed by file name."""

    def __init__(self, results: dict[str, ProbeResult] | None = None):
        self.results = dict(results or {})
        self.calls: list[Path] = []

    def add(self, file_name: str, result: ProbeResult) -> None:
        self.results[file_name] = result

    def probe(self, file_path: Path) -> ProbeResult:
        self.calls.append(Path(file_path))
        name = Path(file_path).name
        if name not in self.results:
            raise ProbeError(f"FFprobe failed on {file_path}")
        return self.results[name]


def write_clips(directory: Path, prober: FakeProber, clips: dict[str, ProbeResult]) -> Path:
    """Create empty clip files and register their probe results."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, result in clips.items():
        (directory / name).write_bytes(b"\x00\x00")
        prober.add(name, result)
    return directory
