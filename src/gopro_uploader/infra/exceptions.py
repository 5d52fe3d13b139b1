"""
Custom exceptions for gopro-uploader operations.

This module provides custom exception classes for the different kinds of
failures that can occur while planning, rendering and uploading videos.
"""

from __future__ import annotations


class GoProUploaderError(Exception):
    """Base exception for all gopro-uploader errors."""

    pass


class ConfigurationError(GoProUploaderError):
    """Raised when required inputs or external tools are missing."""

    pass


class ProbeError(GoProUploaderError):
    """Raised when technical metadata cannot be extracted from a clip."""

    pass


class MalformedInputError(ProbeError):
    """Raised when probe output is present but cannot be parsed."""

    pass


class RenderError(GoProUploaderError):
    """Raised when merging chapters into a video fails."""

    pass


class AuthError(GoProUploaderError):
    """Raised when OAuth2 authorization fails."""

    pass


class CatalogError(GoProUploaderError):
    """Raised when a remote catalog operation fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        reasons: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reasons = list(reasons or [])


class QuotaExhaustedError(CatalogError):
    """Raised when a bounded quota policy runs out of retries."""

    pass
