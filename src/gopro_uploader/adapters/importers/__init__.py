"""
Chapter importers.

Importers discover raw clips on disk and turn them into Chapter records.
"""

from .filesystem_importer import (
    DEFAULT_VIDEO_EXTENSION,
    extract_chapters,
    iter_directories,
    parse_frame_rate,
)

__all__ = [
    "DEFAULT_VIDEO_EXTENSION",
    "extract_chapters",
    "iter_directories",
    "parse_frame_rate",
]
