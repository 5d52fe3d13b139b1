"""
Filesystem importer for discovering chapters on a local disk.

The importer walks a library root depth-first and, for one directory at a
time, turns its clip files into an ordered list of Chapter records. It is not
recursive on its own: nested directories are reached through
``iter_directories``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from ...domain.entities import Chapter, Resolution
from ...infra.exceptions import MalformedInputError, ProbeError
from ...infra.logging import get_logger
from ..probers.base import MediaProber

logger = get_logger(__name__)

DEFAULT_VIDEO_EXTENSION = ".mp4"


def parse_frame_rate(ratio: str) -> float:
    """
    Parse a frame rate ratio like ``60/1`` or ``15360/256``.

    A zero denominator (FFprobe reports ``0/0`` when the rate is unknown)
    yields ``0.0``.

    Raises:
        MalformedInputError: If the ratio is not exactly two integers
    """
    parts = ratio.split("/")
    if len(parts) != 2:
        raise MalformedInputError(f"Error parsing frame rate: {ratio}")
    try:
        numerator = int(parts[0], 10)
        denominator = int(parts[1], 10)
    except ValueError:
        raise MalformedInputError(f"Error parsing frame rate: {ratio}") from None
    if denominator == 0:
        return 0.0
    return numerator / denominator


def is_chapter_file(name: str, extension: str = DEFAULT_VIDEO_EXTENSION) -> bool:
    """Return True for visible files carrying the video extension (any case)."""
    return name.lower().endswith(extension.lower()) and not name.startswith(".")


def list_chapter_files(dir_path: Path, extension: str = DEFAULT_VIDEO_EXTENSION) -> list[str]:
    """Return the chapter file names directly inside ``dir_path``, sorted by name."""
    with os.scandir(dir_path) as entries:
        names = [
            entry.name
            for entry in entries
            if entry.is_file() and is_chapter_file(entry.name, extension)
        ]
    return sorted(names)


def fetch_chapter(dir_path: Path, file_name: str, prober: MediaProber) -> Chapter:
    """Create a Chapter from a clip's probed metadata."""
    result = prober.probe(dir_path / file_name)
    return Chapter(
        file_name=file_name,
        create_time=result.create_time,
        duration=result.duration,
        resolution=Resolution(
            width=result.width,
            height=result.height,
            codec=result.codec,
            frame_rate=parse_frame_rate(result.frame_rate_ratio),
        ),
    )


def extract_chapters(
    dir_path: str | os.PathLike[str],
    prober: MediaProber,
    *,
    extension: str = DEFAULT_VIDEO_EXTENSION,
) -> list[Chapter]:
    """
    Return all chapters of a directory (non-recursive), oldest first.

    Chapters are sorted by creation time; ties keep file name order since the
    sort is stable. An empty list means there is nothing to do here.

    Raises:
        ProbeError: If any clip fails to probe. No partial listing is returned.
    """
    path = Path(dir_path)
    chapters: list[Chapter] = []
    for file_name in list_chapter_files(path, extension):
        try:
            chapters.append(fetch_chapter(path, file_name, prober))
        except ProbeError:
            logger.error("chapter_probe_failed", directory=str(path), file_name=file_name)
            raise
        except ValueError as e:
            raise MalformedInputError(f"Invalid metadata for {path / file_name}: {e}") from e

    chapters.sort(key=lambda chapter: chapter.create_time)
    return chapters


def iter_directories(root: str | os.PathLike[str]) -> Iterator[Path]:
    """
    Yield ``root`` and every directory below it exactly once.

    The walk is depth-first with children in name order, so repeated runs
    over an unchanged tree visit directories in the same sequence.
    """

    def _raise(error: OSError) -> None:
        raise error

    for dir_path, dir_names, _ in os.walk(root, onerror=_raise):
        dir_names.sort()
        yield Path(dir_path)
