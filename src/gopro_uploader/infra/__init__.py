"""
Infrastructure layer for gopro-uploader.

Settings, logging, error types and OAuth2 credentials.
"""

from .exceptions import GoProUploaderError
from .settings import Settings, settings

__all__ = ["GoProUploaderError", "Settings", "settings"]
