"""
Media probers.

Probers extract per-file technical metadata for the chapter extractor.
"""

from .base import MediaProber, ProbeResult
from .ffprobe_prober import FFprobeProber

__all__ = ["FFprobeProber", "MediaProber", "ProbeResult"]
