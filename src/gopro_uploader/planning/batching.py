"""
Batch planning: split a directory's chapters into renderable videos.

Each batch is a maximal run of chapters where every chapter is compatible with
the one before it. A directory with a single batch yields one video carrying
the directory title; several batches yield ``"<title> pt 1"``, ``"<title> pt 2"``
and so on, so every part keeps a stable, distinct title across runs.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from ..adapters.importers.filesystem_importer import DEFAULT_VIDEO_EXTENSION, extract_chapters
from ..adapters.probers.base import MediaProber
from ..domain.entities import Chapter, VideoPlan
from .compatibility import are_compatible
from .titles import generate_title


def partition_chapters(chapters: Sequence[Chapter]) -> list[list[Chapter]]:
    """Split chapters into maximal runs of chain-compatible chapters."""
    batches: list[list[Chapter]] = []
    for ix, chapter in enumerate(chapters):
        if ix == 0 or not are_compatible(chapter, chapters[ix - 1]):
            batches.append([])
        batches[-1].append(chapter)
    return batches


def part_title(title: str, part: int) -> str:
    return f"{title} pt {part}"


def plan_videos(
    dir_path: str | os.PathLike[str], chapters: Sequence[Chapter], title: str
) -> list[VideoPlan]:
    """
    Turn one directory's ordered chapters into video plans.

    Returns an empty list when there are no chapters.
    """
    path = Path(dir_path)
    batches = partition_chapters(chapters)
    if len(batches) == 1:
        return [VideoPlan(title=title, path=path, chapters=tuple(batches[0]))]
    return [
        VideoPlan(title=part_title(title, ix + 1), path=path, chapters=tuple(batch))
        for ix, batch in enumerate(batches)
    ]


def plan_directory(
    dir_path: str | os.PathLike[str],
    root_path: str | os.PathLike[str],
    prefix: str,
    prober: MediaProber,
    *,
    extension: str = DEFAULT_VIDEO_EXTENSION,
) -> list[VideoPlan]:
    """Extract, title and batch the chapters of a single directory."""
    chapters = extract_chapters(dir_path, prober, extension=extension)
    if not chapters:
        return []
    return plan_videos(dir_path, chapters, generate_title(dir_path, root_path, prefix))
