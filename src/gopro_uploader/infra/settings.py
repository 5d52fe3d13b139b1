"""
Application settings for gopro-uploader.

This module defines all configuration settings using Pydantic BaseSettings.
Values come from the environment and, when present, a ``.env`` file.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings using Pydantic BaseSettings."""

    env: str = Field(default="dev", alias="ENV")  # dev|prod|test
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    # Media tooling
    video_extension: str = Field(default=".mp4", alias="VIDEO_EXTENSION")
    ffprobe_path: str = Field(default="ffprobe", alias="FFPROBE_PATH")
    ffmpeg_path: str = Field(default="ffmpeg", alias="FFMPEG_PATH")
    probe_timeout: int = Field(default=60, alias="PROBE_TIMEOUT")

    # YouTube / OAuth2
    client_secrets_path: str = Field(default="client_secrets.json", alias="GOOGLE_CLIENT_SECRETS")
    token_cache_dir: str = Field(
        default_factory=lambda: str(Path.home() / ".credentials"), alias="TOKEN_CACHE_DIR"
    )
    youtube_category_id: str = Field(default="19", alias="YOUTUBE_CATEGORY_ID")
    youtube_privacy_status: str = Field(default="private", alias="YOUTUBE_PRIVACY_STATUS")

    # Quota handling; max_retries unset means retry forever
    quota_cooldown_seconds: float = Field(default=3600.0, alias="QUOTA_COOLDOWN_SECONDS")
    quota_max_retries: int | None = Field(default=None, alias="QUOTA_MAX_RETRIES")

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


def _resolve_env_file() -> str | None:
    # 1) Explicit override
    explicit = os.getenv("GOPRO_UPLOADER_ENV_FILE")
    if explicit and Path(explicit).is_file():
        return explicit

    # 2) CWD .env
    cwd_env = Path.cwd() / ".env"
    if cwd_env.is_file():
        return str(cwd_env)
    return None


# Global settings instance (load from best-effort .env discovery)
_env_file = _resolve_env_file()
settings = Settings(_env_file=_env_file) if _env_file else Settings()  # type: ignore[call-arg]
