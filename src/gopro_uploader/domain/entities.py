"""
Domain entities for gopro-uploader.

These are plain immutable values. Nothing here is persisted: chapters and
plans are recomputed on every run, and only a plan's title survives as the
name of the rendered or uploaded artifact.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path


@dataclass(frozen=True)
class Resolution:
    """Technical parameters of a clip's first media stream."""

    width: int
    height: int
    codec: str
    frame_rate: float


@dataclass(frozen=True)
class Chapter:
    """
    One raw clip file plus its probed metadata.

    ``file_name`` is unique within its directory. ``create_time`` must be
    timezone-aware.
    """

    file_name: str
    create_time: datetime
    duration: timedelta
    resolution: Resolution

    def __post_init__(self) -> None:
        if not self.file_name:
            raise ValueError("file_name is required")
        if self.create_time.tzinfo is None or self.create_time.utcoffset() is None:
            raise ValueError("create_time must be timezone-aware")
        if self.duration < timedelta(0):
            raise ValueError("duration must be non-negative")


@dataclass(frozen=True)
class VideoPlan:
    """
    Planned identity of one output video.

    ``chapters`` is a non-empty, contiguous run of a directory's chapters in
    creation order. ``title`` is the equality key against existing outputs.
    """

    title: str
    path: Path
    chapters: tuple[Chapter, ...]

    def __post_init__(self) -> None:
        if not self.chapters:
            raise ValueError("a video plan needs at least one chapter")

    @property
    def clip_paths(self) -> list[Path]:
        return [self.path / chapter.file_name for chapter in self.chapters]

    @property
    def durations(self) -> list[timedelta]:
        return [chapter.duration for chapter in self.chapters]

    @property
    def create_time(self) -> datetime:
        """Recording time of the video, i.e. the first chapter's creation time."""
        return self.chapters[0].create_time

    @property
    def total_duration(self) -> timedelta:
        return sum(self.durations, timedelta(0))
