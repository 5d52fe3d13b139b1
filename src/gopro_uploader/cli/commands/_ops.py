"""
Shared construction helpers for CLI commands.

Builds probers, renderers, catalogs and retry policies from settings so the
command modules stay thin. Tests patch these functions to inject fakes.
"""

from __future__ import annotations

import typer

from ...adapters.catalogs.youtube_catalog import YouTubeCatalog
from ...adapters.probers.ffprobe_prober import FFprobeProber
from ...adapters.renderers.ffmpeg_concat_renderer import FFmpegConcatRenderer
from ...infra.oauth import OAuthCredentials, credentials_from_settings
from ...infra.settings import settings
from ...runtime.quota import QuotaRetryPolicy


def build_prober() -> FFprobeProber:
    return FFprobeProber(ffprobe_path=settings.ffprobe_path, timeout=settings.probe_timeout)


def build_renderer() -> FFmpegConcatRenderer:
    return FFmpegConcatRenderer(ffmpeg_path=settings.ffmpeg_path, extension=settings.video_extension)


def build_policy() -> QuotaRetryPolicy:
    return QuotaRetryPolicy(
        cooldown_seconds=settings.quota_cooldown_seconds,
        max_retries=settings.quota_max_retries,
    )


def _prompt_for_code(url: str) -> str:
    typer.echo("Go to the following link in your browser then type the authorization code:")
    typer.echo(url)
    return typer.prompt("Code")


def build_credentials() -> OAuthCredentials:
    return credentials_from_settings(
        settings.client_secrets_path, settings.token_cache_dir, prompt=_prompt_for_code
    )


def build_catalog() -> YouTubeCatalog:
    return YouTubeCatalog(
        build_credentials(),
        category_id=settings.youtube_category_id,
        privacy_status=settings.youtube_privacy_status,
    )
