"""
FFmpeg concat renderer.

Merges the chapters of a video plan into a single MP4 using the concat demuxer
with stream copy (no re-encode) and attaches one chapter marker per clip.

The output is written to ``<title>.mp4.partial`` and renamed into place once
FFmpeg succeeds, so the output directory only ever holds complete videos.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
from collections.abc import Sequence
from datetime import timedelta
from pathlib import Path

from ...infra.exceptions import RenderError
from ...infra.logging import get_logger
from .concat_files import generate_chapter_metadata, generate_concat_list

logger = get_logger(__name__)

PARTIAL_SUFFIX = ".partial"


class FFmpegConcatRenderer:
    """Lossless merge of ordered clips into one video file."""

    name = "ffmpeg-concat"

    def __init__(self, ffmpeg_path: str = "ffmpeg", extension: str = ".mp4"):
        """
        Initialize the renderer.

        Args:
            ffmpeg_path: Path to the ffmpeg executable
            extension: Extension of rendered files, including the dot
        """
        self.ffmpeg_path = ffmpeg_path
        self.extension = extension

    def output_path(self, output_dir: Path, title: str) -> Path:
        return Path(output_dir) / f"{title}{self.extension}"

    def build_command(self, concat_list: Path, metadata: Path, destination: Path) -> list[str]:
        return [
            self.ffmpeg_path,
            "-v",
            "warning",
            "-f",
            "concat",
            "-safe",
            "0",
            "-i",
            str(concat_list),
            "-i",
            str(metadata),
            "-map_metadata",
            "1",
            "-c",
            "copy",
            "-f",
            "mp4",
            "-y",
            "-stats",
            str(destination),
        ]

    def render(
        self,
        clip_paths: Sequence[Path],
        durations: Sequence[timedelta],
        title: str,
        output_dir: Path,
    ) -> Path:
        """
        Concatenate ``clip_paths`` into ``<output_dir>/<title><extension>``.

        Args:
            clip_paths: Absolute clip paths in playback order
            durations: Duration of each clip, used for chapter markers
            title: Video title; also the output file name
            output_dir: Directory receiving the rendered file

        Returns:
            Path of the rendered video

        Raises:
            RenderError: If FFmpeg is missing or fails
        """
        if not clip_paths:
            raise RenderError(f"Nothing to render for {title!r}")
        if len(clip_paths) != len(durations):
            raise RenderError("clip_paths and durations must have the same length")

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        destination = self.output_path(output_dir, title)
        partial = destination.with_name(destination.name + PARTIAL_SUFFIX)

        with tempfile.TemporaryDirectory(prefix="gopro-uploader-") as tmp_dir:
            concat_list = Path(tmp_dir) / "input.txt"
            concat_list.write_text(
                generate_concat_list([Path(p).absolute() for p in clip_paths]), encoding="utf-8"
            )
            metadata = Path(tmp_dir) / "chapters.txt"
            metadata.write_text(
                generate_chapter_metadata(title, [Path(p).name for p in clip_paths], durations),
                encoding="utf-8",
            )

            logger.info("render_started", output=str(destination), clips=len(clip_paths))
            self._run_ffmpeg(self.build_command(concat_list, metadata, partial), partial)

        os.replace(partial, destination)
        logger.info("render_completed", output=str(destination))
        return destination

    def _run_ffmpeg(self, cmd: list[str], partial: Path) -> None:
        if not shutil.which(self.ffmpeg_path):
            raise RenderError(
                "FFmpeg executable not found. Install ffmpeg and ensure it is on PATH, "
                "or set FFMPEG_PATH."
            )
        try:
            result = subprocess.run(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, text=True)
        except OSError as e:
            partial.unlink(missing_ok=True)
            raise RenderError(f"FFmpeg execution failed: {e}") from e

        if result.returncode != 0:
            partial.unlink(missing_ok=True)
            raise RenderError(f"FFmpeg failed for {partial.name}: {result.stderr.strip()}")
