"""
Base protocol for media probers.

A prober turns one clip file into the handful of technical fields the planner
needs. Probers must raise ProbeError (or a subclass) instead of returning
partial or guessed metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class ProbeResult:
    """Technical metadata extracted from a single clip."""

    duration: timedelta
    create_time: datetime
    width: int
    height: int
    codec: str
    frame_rate_ratio: str
    """Frame rate as reported by the prober, e.g. ``"60000/1001"``."""


class MediaProber(Protocol):
    """
    Contract for all probers.

    Rules:
    - Must be stateless: probe() reads the file and returns a ProbeResult.
    - Must raise ProbeError (or MalformedInputError) on any failure.
    """

    def probe(self, file_path: Path) -> ProbeResult:
        ...
