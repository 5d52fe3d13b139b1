"""
Library CLI commands.

Plan and render videos from a directory tree of raw chapters.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from ...infra.exceptions import ConfigurationError, GoProUploaderError
from ...infra.settings import settings
from ...planning.idempotency import is_already_produced, list_rendered_titles
from ...planning.titles import format_duration, generate_description
from ...usecases.run_orchestrator import (
    RenderDispatcher,
    check_dependencies,
    iter_plans,
    run,
    validate_inputs,
)
from . import _ops

app = typer.Typer(name="library", help="Plan and render videos from raw chapters")


@app.command("plan")
def plan(
    input_dir: str = typer.Option(None, "--input-dir", "-i", help="Directory to traverse for video files"),
    prefix: str = typer.Option(None, "--prefix", "-p", help="Prefix to use in all video titles"),
    output_dir: str = typer.Option(
        None, "--output-dir", "-o", help="Rendered videos directory, used to mark existing titles"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Print every planned video with its description. Nothing is rendered."""
    try:
        root = validate_inputs(input_dir, prefix)
        check_dependencies(settings.ffprobe_path)
        existing = (
            list_rendered_titles(output_dir, settings.video_extension) if output_dir else frozenset()
        )

        videos = []
        for video in iter_plans(root, prefix, _ops.build_prober(), extension=settings.video_extension):
            videos.append(
                {
                    "title": video.title,
                    "path": str(video.path),
                    "chapters": [chapter.file_name for chapter in video.chapters],
                    "duration": format_duration(video.total_duration),
                    "description": generate_description(video.chapters),
                    "exists": is_already_produced(video.title, existing),
                }
            )
    except (GoProUploaderError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps({"videos": videos}, indent=2))
        return

    if not videos:
        typer.echo("No videos found")
        return
    for video in videos:
        status = "exists" if video["exists"] else "new"
        typer.echo(f"=== {video['title']} ({status})")
        typer.echo(video["description"])
        typer.echo()
    typer.echo(f"Total: {len(videos)} videos")


@app.command("render")
def render(
    input_dir: str = typer.Option(None, "--input-dir", "-i", help="Directory to traverse for video files"),
    output_dir: str = typer.Option(
        None, "--output-dir", "-o", help="Directory in which to output rendered video files"
    ),
    prefix: str = typer.Option(None, "--prefix", "-p", help="Prefix to use in all video titles"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Plan only; do not render videos"),
):
    """Render every new video into the output directory."""
    try:
        root = validate_inputs(input_dir, prefix)
        if not output_dir:
            raise ConfigurationError("--output-dir cannot be empty")
        check_dependencies(settings.ffprobe_path, settings.ffmpeg_path)

        target = Path(output_dir)
        target.mkdir(parents=True, exist_ok=True)
        existing = list_rendered_titles(target, settings.video_extension)

        summary = run(
            iter_plans(root, prefix, _ops.build_prober(), extension=settings.video_extension),
            existing,
            RenderDispatcher(_ops.build_renderer(), target),
            dry_run=dry_run,
        )
    except (GoProUploaderError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(
        f"Planned {len(summary.planned)} videos: {len(summary.dispatched)} rendered, "
        f"{len(summary.skipped)} already rendered, {len(summary.pending)} pending"
    )
