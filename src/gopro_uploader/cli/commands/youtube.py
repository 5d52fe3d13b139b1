"""
YouTube CLI commands.

Authorize against YouTube, inspect a playlist and upload new videos into it.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import typer

from ...infra.exceptions import ConfigurationError, GoProUploaderError
from ...infra.settings import settings
from ...usecases.run_orchestrator import (
    UploadDispatcher,
    check_dependencies,
    iter_plans,
    run,
    validate_inputs,
)
from . import _ops

app = typer.Typer(name="youtube", help="Upload rendered videos to a YouTube playlist")


@app.command("auth")
def auth():
    """Authorize access to YouTube and cache the token."""
    try:
        _ops.build_credentials().access_token()
    except GoProUploaderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo("Authorization complete")


@app.command("titles")
def titles(
    playlist_id: str = typer.Option(..., "--playlist-id", help="Playlist to list"),
):
    """List the titles already present in a playlist."""
    try:
        catalog = _ops.build_catalog()
        existing = _ops.build_policy().call(catalog.list_existing_titles, playlist_id)
    except GoProUploaderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for title in sorted(existing):
        typer.echo(title)
    typer.echo(f"Total: {len(existing)} videos")


@app.command("upload")
def upload(
    input_dir: str = typer.Option(None, "--input-dir", "-i", help="Directory to traverse for video files"),
    prefix: str = typer.Option(None, "--prefix", "-p", help="Prefix to use in all video titles"),
    playlist_id: str = typer.Option(None, "--playlist-id", help="Playlist receiving the uploads"),
    work_dir: str = typer.Option(
        None, "--work-dir", "-w", help="Where videos are rendered before upload (kept afterwards)"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Plan only; do not render or upload"),
):
    """Render and upload every video not yet in the playlist."""
    try:
        root = validate_inputs(input_dir, prefix)
        if not playlist_id:
            raise ConfigurationError("--playlist-id cannot be empty")
        check_dependencies(settings.ffprobe_path, settings.ffmpeg_path)

        catalog = _ops.build_catalog()
        policy = _ops.build_policy()
        existing = policy.call(catalog.list_existing_titles, playlist_id)

        with tempfile.TemporaryDirectory(prefix="gopro-uploader-") as tmp_dir:
            dispatcher = UploadDispatcher(
                _ops.build_renderer(),
                catalog,
                playlist_id,
                policy,
                Path(work_dir) if work_dir else Path(tmp_dir),
                keep_rendered=bool(work_dir),
            )
            summary = run(
                iter_plans(root, prefix, _ops.build_prober(), extension=settings.video_extension),
                existing,
                dispatcher,
                dry_run=dry_run,
            )
    except (GoProUploaderError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(
        f"Planned {len(summary.planned)} videos: {len(summary.dispatched)} uploaded, "
        f"{len(summary.skipped)} already in playlist, {len(summary.pending)} pending"
    )
