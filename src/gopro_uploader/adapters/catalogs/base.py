"""
Base protocol for remote video catalogs.

A catalog is the remote home of rendered videos: it lists what already exists
in a collection, accepts uploads and files them into collections. Every call
can hit a rate limit, so callers route them through a QuotaRetryPolicy.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Protocol


class RemoteCatalog(Protocol):
    """
    Contract for all catalogs.

    Rules:
    - Must raise CatalogError (or subclass) with the API's error reasons so
      quota conditions can be told apart from genuine request errors.
    - Must not retry quota errors itself.
    """

    name: str

    def list_existing_titles(self, collection_id: str) -> frozenset[str]:
        ...

    def upload(
        self, artifact_path: Path, title: str, description: str, create_time: datetime
    ) -> str:
        ...

    def attach_to_collection(self, collection_id: str, remote_id: str) -> None:
        ...
