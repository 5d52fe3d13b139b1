"""
Main CLI application using Typer with router-based command dispatch.

All command groups are registered through the CliRouter.
"""

from __future__ import annotations

from typing import Optional

import typer

from ..infra.logging import configure_logging
from .commands import library, youtube
from .router import get_router

app = typer.Typer(help="Merge recording-device chapters into videos and upload them")

router = get_router(app)

router.register(
    "library",
    library.app,
    help_text="Plan and render videos from a directory tree of chapters",
)

router.register(
    "youtube",
    youtube.app,
    help_text="YouTube authorization, playlist listing and uploads",
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
    log_json: Optional[bool] = typer.Option(None, "--log-json/--no-log-json", help="Override LOG_JSON"),
):
    """Configure logging before any command runs."""
    configure_logging(level=log_level, json=log_json)


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
