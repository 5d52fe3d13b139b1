"""
Video renderers.

Renderers turn an ordered list of clips into one output artifact.
"""

from .concat_files import generate_chapter_metadata, generate_concat_list
from .ffmpeg_concat_renderer import FFmpegConcatRenderer

__all__ = ["FFmpegConcatRenderer", "generate_chapter_metadata", "generate_concat_list"]
