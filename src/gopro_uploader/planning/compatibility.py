"""Concat-demuxer compatibility between chapters."""

from __future__ import annotations

from ..domain.entities import Chapter


def are_compatible(x: Chapter, y: Chapter) -> bool:
    """
    Return True if two chapters can be joined by the ffmpeg concat demuxer.

    Width, height and codec must match exactly. Frame rate is not compared:
    a stream copy tolerates it, while a size or codec change would need a
    re-encode.
    """
    return (
        x.resolution.width == y.resolution.width
        and x.resolution.height == y.resolution.height
        and x.resolution.codec == y.resolution.codec
    )
