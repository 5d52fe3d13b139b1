"""
Run orchestrator for planning and dispatching videos.

This module walks a library root, plans each directory's videos, filters out
titles that already exist and hands the rest to a dispatcher one at a time.
Planning is a generator; dispatch is a plain loop, so a different dispatcher
(or a parallel one) can be plugged in without touching the planning core.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from ..adapters.catalogs.base import RemoteCatalog
from ..adapters.importers.filesystem_importer import DEFAULT_VIDEO_EXTENSION, iter_directories
from ..adapters.probers.base import MediaProber
from ..adapters.renderers.ffmpeg_concat_renderer import FFmpegConcatRenderer
from ..domain.entities import VideoPlan
from ..infra.exceptions import ConfigurationError
from ..infra.logging import get_logger
from ..planning.batching import plan_directory
from ..planning.idempotency import ExistingTitles, is_already_produced
from ..planning.titles import format_duration, generate_description
from ..runtime.quota import QuotaRetryPolicy

logger = get_logger(__name__)


class Dispatcher(Protocol):
    """Receives each new video plan; must block until the plan is done."""

    def dispatch(self, plan: VideoPlan) -> None:
        ...


@dataclass
class RunSummary:
    planned: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    dispatched: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)
    """New titles that were not dispatched because of a dry run."""

    def to_dict(self) -> dict[str, int]:
        return {
            "planned": len(self.planned),
            "skipped": len(self.skipped),
            "dispatched": len(self.dispatched),
            "pending": len(self.pending),
        }


def check_dependencies(*commands: str) -> None:
    """Fail fast if an external tool is not installed."""
    for command in commands:
        if shutil.which(command) is None:
            raise ConfigurationError(f"Could not find missing dependency {command}")


def validate_inputs(input_dir: str | os.PathLike[str] | None, prefix: str | None) -> Path:
    """Check required run inputs before any planning starts."""
    if not input_dir:
        raise ConfigurationError("--input-dir cannot be empty")
    if not prefix:
        raise ConfigurationError("--prefix cannot be empty")
    path = Path(input_dir)
    if not path.is_dir():
        raise ConfigurationError(f"Input directory does not exist: {path}")
    return path


def iter_plans(
    input_dir: str | os.PathLike[str],
    prefix: str,
    prober: MediaProber,
    *,
    extension: str = DEFAULT_VIDEO_EXTENSION,
) -> Iterator[VideoPlan]:
    """Yield the video plans of every directory below ``input_dir``, in walk order."""
    for directory in iter_directories(input_dir):
        plans = plan_directory(directory, input_dir, prefix, prober, extension=extension)
        if plans:
            logger.info(
                "directory_planned",
                directory=str(directory),
                videos=[plan.title for plan in plans],
            )
        yield from plans


def run(
    plans: Iterable[VideoPlan],
    existing: ExistingTitles,
    dispatcher: Dispatcher | None = None,
    *,
    dry_run: bool = False,
) -> RunSummary:
    """
    Dispatch every plan whose title is not in ``existing``.

    Already-produced plans are skipped, not treated as errors. Any exception
    raised by the dispatcher aborts the run; outputs that were completed
    before it stay valid and are skipped on the next run.
    """
    summary = RunSummary()
    for plan in plans:
        summary.planned.append(plan.title)
        logger.info(
            "video_planned",
            title=plan.title,
            chapters=len(plan.chapters),
            duration=format_duration(plan.total_duration),
            description=generate_description(plan.chapters),
        )
        if is_already_produced(plan.title, existing):
            logger.info("video_already_produced", title=plan.title)
            summary.skipped.append(plan.title)
            continue
        if dry_run or dispatcher is None:
            summary.pending.append(plan.title)
            continue
        dispatcher.dispatch(plan)
        summary.dispatched.append(plan.title)

    logger.info("run_completed", **summary.to_dict())
    return summary


class RenderDispatcher:
    """Render each plan into an output directory."""

    def __init__(self, renderer: FFmpegConcatRenderer, output_dir: Path):
        self.renderer = renderer
        self.output_dir = Path(output_dir)

    def dispatch(self, plan: VideoPlan) -> None:
        self.renderer.render(plan.clip_paths, plan.durations, plan.title, self.output_dir)


class UploadDispatcher:
    """
    Render each plan, upload it and file it into a playlist.

    All catalog calls go through the quota policy. A video already rendered
    into ``work_dir`` by an earlier, interrupted run is uploaded as is.
    """

    def __init__(
        self,
        renderer: FFmpegConcatRenderer,
        catalog: RemoteCatalog,
        playlist_id: str,
        policy: QuotaRetryPolicy,
        work_dir: Path,
        *,
        keep_rendered: bool = True,
    ):
        self.renderer = renderer
        self.catalog = catalog
        self.playlist_id = playlist_id
        self.policy = policy
        self.work_dir = Path(work_dir)
        self.keep_rendered = keep_rendered

    def dispatch(self, plan: VideoPlan) -> None:
        artifact = self.renderer.output_path(self.work_dir, plan.title)
        if artifact.is_file():
            logger.info("render_reused", output=str(artifact))
        else:
            artifact = self.renderer.render(
                plan.clip_paths, plan.durations, plan.title, self.work_dir
            )

        video_id = self.policy.call(
            self.catalog.upload,
            artifact,
            plan.title,
            generate_description(plan.chapters),
            plan.create_time,
        )
        self.policy.call(self.catalog.attach_to_collection, self.playlist_id, video_id)

        if not self.keep_rendered:
            artifact.unlink(missing_ok=True)
