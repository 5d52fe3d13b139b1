"""
FFprobe prober for extracting chapter metadata.

This prober uses FFprobe to extract the duration, creation time and first
stream parameters (coded size, codec, average frame rate) of a clip.
"""

from __future__ import annotations

import json
import math
import shutil
import subprocess
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, cast

from ...infra.exceptions import MalformedInputError, ProbeError
from .base import ProbeResult


class FFprobeProber:
    """
    Prober that reads technical metadata from media files using FFprobe.

    Only the first stream of a file is inspected. Recording devices put the
    video stream first; multi-stream inputs with a different layout are not
    supported.
    """

    name = "ffprobe"

    def __init__(self, ffprobe_path: str = "ffprobe", timeout: int = 60):
        """
        Initialize the FFprobe prober.

        Args:
            ffprobe_path: Path to the ffprobe executable
            timeout: Timeout in seconds for a single FFprobe run
        """
        if not isinstance(ffprobe_path, str) or not ffprobe_path.strip():
            raise ValueError("ffprobe_path must be a non-empty string")
        if timeout <= 0:
            raise ValueError("timeout must be a positive integer")
        self.ffprobe_path = ffprobe_path
        self.timeout = timeout

    def probe(self, file_path: Path) -> ProbeResult:
        """
        Probe a clip and return its metadata.

        Raises:
            ProbeError: If FFprobe cannot be run on the file
            MalformedInputError: If FFprobe output lacks or garbles a field
        """
        metadata = self._run_ffprobe(Path(file_path))
        return self._metadata_to_result(metadata, Path(file_path))

    def _run_ffprobe(self, file_path: Path) -> dict[str, Any]:
        """
        Run FFprobe on a file and return the parsed JSON document.

        Raises:
            ProbeError: If FFprobe fails
        """
        if not shutil.which(self.ffprobe_path):
            raise ProbeError(
                "FFprobe executable not found. Install ffprobe and ensure it is on PATH, "
                "or set FFPROBE_PATH."
            )

        cmd = [
            self.ffprobe_path,
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_format",
            "-show_streams",
            str(file_path),
        ]

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except FileNotFoundError:
            raise ProbeError(
                "FFprobe executable not found. Install ffprobe and ensure it is on PATH, "
                "or set FFPROBE_PATH."
            ) from None
        except subprocess.TimeoutExpired:
            raise ProbeError(f"FFprobe timed out on {file_path}") from None

        if result.returncode != 0:
            raise ProbeError(f"FFprobe failed on {file_path}: {result.stderr.strip()}")

        try:
            return cast(dict[str, Any], json.loads(result.stdout))
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Failed to parse FFprobe output for {file_path}: {e}") from e

    def _metadata_to_result(self, meta: dict[str, Any], file_path: Path) -> ProbeResult:
        """Convert raw ffprobe JSON into a ProbeResult."""
        fmt = meta.get("format") or {}
        streams = meta.get("streams") or []
        if not streams:
            raise MalformedInputError(f"No media streams in {file_path}")
        stream = streams[0]

        duration = parse_duration(_require(fmt, "duration", file_path))
        create_time = parse_creation_time(
            _require(fmt.get("tags") or {}, "creation_time", file_path)
        )

        # Coded size is what the concat demuxer cares about; fall back to
        # display size for streams that do not report it.
        width = stream.get("coded_width") or stream.get("width")
        height = stream.get("coded_height") or stream.get("height")
        if not isinstance(width, int) or not isinstance(height, int):
            raise MalformedInputError(f"Missing frame size in {file_path}")

        return ProbeResult(
            duration=duration,
            create_time=create_time,
            width=width,
            height=height,
            codec=str(_require(stream, "codec_name", file_path)),
            frame_rate_ratio=str(_require(stream, "avg_frame_rate", file_path)),
        )


def _require(block: dict[str, Any], key: str, file_path: Path) -> Any:
    value = block.get(key)
    if value is None or value == "":
        raise MalformedInputError(f"Missing '{key}' in FFprobe output for {file_path}")
    return value


def parse_duration(value: Any) -> timedelta:
    """Parse an FFprobe duration in seconds (e.g. ``"31.531000"``)."""
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise MalformedInputError(f"Error parsing duration: {value!r}") from None
    if seconds < 0 or not math.isfinite(seconds):
        raise MalformedInputError(f"Error parsing duration: {value!r}")
    try:
        return timedelta(seconds=seconds)
    except OverflowError:
        raise MalformedInputError(f"Duration out of range: {value!r}") from None


def parse_creation_time(value: Any) -> datetime:
    """Parse an RFC 3339 creation time; the offset is mandatory."""
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        raise MalformedInputError(f"Error parsing creation time: {value!r}") from None
    if parsed.tzinfo is None:
        raise MalformedInputError(f"Creation time has no UTC offset: {value!r}")
    return parsed
