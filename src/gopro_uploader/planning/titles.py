"""
Title and description generation for planned videos.

A title is the only identity a video keeps across runs, so it must be a pure
function of (directory, root, prefix). Paths are normalized before they are
compared so that trailing slashes or ``.`` segments never change a title.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from datetime import datetime, timedelta
from pathlib import PurePath

from ..domain.entities import Chapter

TITLE_SEPARATOR = " # "
CREATE_TIME_FORMAT = "%a, %d %b %Y %H:%M:%S"


def _title_parts(dir_path: str, root_path: str) -> tuple[str, ...]:
    directory = PurePath(os.path.normpath(dir_path))
    root = PurePath(os.path.normpath(root_path))
    try:
        relative = directory.relative_to(root)
    except ValueError:
        # Not below the root: every segment of the directory becomes a part.
        return tuple(part for part in directory.parts if part != directory.anchor)
    return tuple(part for part in relative.parts if part != ".")


def generate_title(
    dir_path: str | os.PathLike[str], root_path: str | os.PathLike[str], prefix: str
) -> str:
    """
    Generate a video title from a directory's position below the root.

    >>> generate_title("/media/Trip/Day 1/Person 1", "/media/Trip", "Trip")
    '[Trip] Day 1 # Person 1'
    >>> generate_title("/media/Trip/", "/media/Trip", "Trip")
    '[Trip] '
    """
    parts = _title_parts(os.fspath(dir_path), os.fspath(root_path))
    return f"[{prefix}] {TITLE_SEPARATOR.join(parts)}"


def format_duration(duration: timedelta) -> str:
    """Format a duration as ``H:MM:SS``, truncating sub-second precision."""
    total_seconds = int(duration.total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:01d}:{minutes:02d}:{seconds:02d}"


def format_create_time(create_time: datetime) -> str:
    """
    Format a creation time RFC 1123 style.

    Named zones print their abbreviation; bare offsets print as ``+0200``.
    """
    zone = create_time.tzname()
    if not zone or (zone.startswith("UTC") and zone != "UTC"):
        zone = create_time.strftime("%z")
    return f"{create_time.strftime(CREATE_TIME_FORMAT)} {zone}"


def describe_chapter(chapter: Chapter, start: timedelta) -> str:
    resolution = chapter.resolution
    return (
        f"{format_duration(start)} | {chapter.file_name} "
        f"[{resolution.width}x{resolution.height} @ {resolution.frame_rate:06.2f} "
        f"~ {format_create_time(chapter.create_time)}]"
    )


def generate_description(chapters: Sequence[Chapter]) -> str:
    """
    Generate a description with one line per chapter.

    Each line starts with the chapter's offset within the merged video, which
    doubles as a chapter marker on the hosting site.
    """
    lines = []
    start = timedelta(0)
    for chapter in chapters:
        lines.append(describe_chapter(chapter, start))
        start += chapter.duration
    return "\n".join(lines)
