"""
Concat list and chapter metadata files for FFmpeg.

The concat demuxer list names the clips in order; the FFMETADATA file carries
one chapter per clip so players can jump between the original recordings.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import timedelta
from pathlib import Path

_METADATA_SPECIAL = re.compile(r"([=;#\\\n])")


def quote_concat_path(path: Path | str) -> str:
    """Quote a path for a concat list line (``'`` becomes ``'\\''``)."""
    return "'" + str(path).replace("'", "'\\''") + "'"


def generate_concat_list(clip_paths: Sequence[Path | str]) -> str:
    """
    Build concat demuxer input for the given clips.

    Example:
        >>> generate_concat_list(["/a/GH010001.MP4", "/a/GH020001.MP4"])
        "file '/a/GH010001.MP4'\\nfile '/a/GH020001.MP4'"
    """
    if not clip_paths:
        raise ValueError("At least one clip is required")
    return "\n".join(f"file {quote_concat_path(path)}" for path in clip_paths)


def escape_metadata_value(value: str) -> str:
    """Escape ``=``, ``;``, ``#``, ``\\`` and newlines for FFMETADATA."""
    return _METADATA_SPECIAL.sub(r"\\\1", value)


def chapter_bounds_ms(durations: Sequence[timedelta]) -> list[tuple[int, int]]:
    """Return (start, end) in milliseconds for each chapter of a merged video."""
    bounds = []
    start = 0
    for duration in durations:
        length = int(duration / timedelta(milliseconds=1))
        bounds.append((start, start + length))
        start += length
    return bounds


def generate_chapter_metadata(
    title: str, chapter_titles: Sequence[str], durations: Sequence[timedelta]
) -> str:
    """Build an FFMETADATA1 document with one chapter per clip."""
    if len(chapter_titles) != len(durations):
        raise ValueError("chapter_titles and durations must have the same length")

    lines = [";FFMETADATA1", f"title={escape_metadata_value(title)}"]
    for chapter_title, (start, end) in zip(chapter_titles, chapter_bounds_ms(durations)):
        lines.extend(
            [
                "",
                "[CHAPTER]",
                "TIMEBASE=1/1000",
                f"START={start}",
                f"END={end}",
                f"title={escape_metadata_value(chapter_title)}",
            ]
        )
    return "\n".join(lines) + "\n"
