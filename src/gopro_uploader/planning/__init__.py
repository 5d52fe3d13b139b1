"""
Planning core: which chapters become which videos, under which titles.

Everything in this package is deterministic and free of side effects other
than probing clips through the injected prober.
"""

from .batching import partition_chapters, plan_directory, plan_videos
from .compatibility import are_compatible
from .idempotency import is_already_produced, list_rendered_titles, snapshot_titles
from .titles import format_duration, generate_description, generate_title

__all__ = [
    "are_compatible",
    "format_duration",
    "generate_description",
    "generate_title",
    "is_already_produced",
    "list_rendered_titles",
    "partition_chapters",
    "plan_directory",
    "plan_videos",
    "snapshot_titles",
]
