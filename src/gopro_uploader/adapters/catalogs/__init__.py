"""
Remote catalogs.

Catalogs hold uploaded videos and the collections they are filed under.
"""

from .base import RemoteCatalog
from .youtube_catalog import YouTubeCatalog

__all__ = ["RemoteCatalog", "YouTubeCatalog"]
