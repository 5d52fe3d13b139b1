"""
Idempotency checks against work that already exists.

The existing-title snapshot is taken once per run and handed around as an
immutable ``frozenset``; nothing updates it while the run is in progress.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from ..adapters.importers.filesystem_importer import DEFAULT_VIDEO_EXTENSION

ExistingTitles = frozenset[str]


def snapshot_titles(titles: Iterable[str]) -> ExistingTitles:
    return frozenset(titles)


def list_rendered_titles(
    output_dir: str | os.PathLike[str], extension: str = DEFAULT_VIDEO_EXTENSION
) -> ExistingTitles:
    """
    Return the titles of videos already rendered into ``output_dir``.

    A title is a file name with the video extension removed. A missing
    directory has rendered nothing yet.
    """
    path = Path(output_dir)
    if not path.is_dir():
        return frozenset()
    suffix = extension.lower()
    with os.scandir(path) as entries:
        return frozenset(
            entry.name[: -len(suffix)]
            for entry in entries
            if entry.is_file() and entry.name.lower().endswith(suffix)
        )


def is_already_produced(title: str, existing: ExistingTitles) -> bool:
    """Exact-match membership test; titles are normalized when generated."""
    return title in existing
