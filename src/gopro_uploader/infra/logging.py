"""
Logging configuration for gopro-uploader.

This module configures structlog on top of the standard library logging
module. Output is JSON when requested, human-readable console lines otherwise.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

import structlog

from .settings import settings


def redact_secrets(_, __, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Redact sensitive information from log events."""
    # List of keys that contain secrets
    secret_keys = [
        "token",
        "access_token",
        "refresh_token",
        "client_secret",
        "password",
        "secret",
        "authorization",
    ]

    # Patterns to redact in string values
    secret_patterns = [
        r"access_token=[^&\s]+",
        r"refresh_token=[^&\s]+",
        r"client_secret=[^&\s]+",
        r"code=[^&\s]+",
    ]

    def redact_value(value: Any) -> Any:
        if isinstance(value, str):
            for pattern in secret_patterns:
                value = re.sub(pattern, lambda m: m.group(0).split("=")[0] + "=***", value)
            return value
        elif isinstance(value, dict):
            return {k: redact_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [redact_value(item) for item in value]
        return value

    # Redact based on key names
    for key in list(event_dict.keys()):
        if any(secret in key.lower() for secret in secret_keys):
            event_dict[key] = "***REDACTED***"
        else:
            event_dict[key] = redact_value(event_dict[key])

    return event_dict


def configure_logging(level: str | None = None, json: bool | None = None) -> None:
    """Configure structlog for the gopro-uploader CLI."""
    level_name = (level or settings.log_level).upper()
    use_json = settings.log_json if json is None else json

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level_name, logging.INFO),
        force=True,
    )

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            redact_secrets,  # Redact secrets before rendering
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger with service context."""
    return structlog.get_logger(name, service="gopro-uploader", env=settings.env)
