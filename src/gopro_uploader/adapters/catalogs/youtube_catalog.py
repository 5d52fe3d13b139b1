"""
YouTube catalog backed by the YouTube Data API v3.

Playlists are the collections: existing titles are read from a playlist,
rendered videos are uploaded with a resumable upload and then inserted into
the playlist.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ...infra.exceptions import CatalogError
from ...infra.logging import get_logger

logger = get_logger(__name__)

API_BASE_URL = "https://www.googleapis.com/youtube/v3"
UPLOAD_URL = "https://www.googleapis.com/upload/youtube/v3/videos"
VIDEO_TAGS = ["GoPro"]


class TokenProvider(Protocol):
    def access_token(self) -> str:
        ...


def _error_from_response(response: requests.Response, action: str) -> CatalogError:
    """Build a CatalogError carrying the API's error reasons."""
    reasons: list[str] = []
    message = response.text
    try:
        error = response.json().get("error") or {}
        message = error.get("message") or message
        reasons = [e.get("reason") for e in error.get("errors") or [] if e.get("reason")]
    except (ValueError, AttributeError):
        pass
    detail = f" [{', '.join(reasons)}]" if reasons else ""
    return CatalogError(
        f"Error {action} ({response.status_code}){detail}: {message}",
        status_code=response.status_code,
        reasons=reasons,
    )


def format_recording_date(create_time: datetime) -> str:
    """Format a recording date the way the API expects (UTC, milliseconds)."""
    utc = create_time.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


class YouTubeCatalog:
    """YouTube Data API client for listing, uploading and filing videos."""

    name = "youtube"

    def __init__(
        self,
        credentials: TokenProvider,
        *,
        category_id: str = "19",
        privacy_status: str = "private",
        session: requests.Session | None = None,
        timeout: int = 60,
    ):
        """
        Initialize the catalog.

        Args:
            credentials: Source of OAuth2 access tokens
            category_id: YouTube category for uploads
            privacy_status: ``private``, ``unlisted`` or ``public``
            session: requests session (a retrying session is created if omitted)
            timeout: Timeout in seconds for metadata requests
        """
        self.credentials = credentials
        self.category_id = category_id
        self.privacy_status = privacy_status
        self.session = session or self._create_session()
        self.timeout = timeout

    def _create_session(self) -> requests.Session:
        """Create a requests session that retries transient server errors."""
        session = requests.Session()

        # 403/429 are quota responses; QuotaRetryPolicy handles those.
        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("https://", adapter)
        session.headers.update({"Accept": "application/json"})
        return session

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.credentials.access_token()}"}

    def _request(self, method: str, url: str, action: str, **kwargs: Any) -> requests.Response:
        headers = {**self._headers(), **kwargs.pop("headers", {})}
        try:
            response = self.session.request(method, url, headers=headers, **kwargs)
        except requests.RequestException as e:
            raise CatalogError(f"Error {action}: {e}") from e
        if not response.ok:
            raise _error_from_response(response, action)
        return response

    def list_existing_titles(self, collection_id: str) -> frozenset[str]:
        """Return the titles of every video in a playlist."""
        titles: set[str] = set()
        page_token = ""
        while True:
            params = {"part": "snippet", "playlistId": collection_id, "maxResults": 50}
            if page_token:
                params["pageToken"] = page_token
            response = self._request(
                "GET",
                f"{API_BASE_URL}/playlistItems",
                "listing playlist items",
                params=params,
                timeout=self.timeout,
            )
            data = response.json()
            for item in data.get("items") or []:
                title = (item.get("snippet") or {}).get("title")
                if title:
                    titles.add(title)
            page_token = data.get("nextPageToken") or ""
            if not page_token:
                break
        logger.info("playlist_titles_listed", playlist_id=collection_id, count=len(titles))
        return frozenset(titles)

    def video_resource(self, title: str, description: str, create_time: datetime) -> dict[str, Any]:
        return {
            "snippet": {
                "title": title,
                "description": description,
                "categoryId": self.category_id,
                "tags": VIDEO_TAGS,
            },
            "status": {"privacyStatus": self.privacy_status},
            "recordingDetails": {"recordingDate": format_recording_date(create_time)},
        }

    def upload(
        self, artifact_path: Path, title: str, description: str, create_time: datetime
    ) -> str:
        """Upload a rendered video; returns the new video id."""
        artifact_path = Path(artifact_path)
        try:
            size = artifact_path.stat().st_size
        except OSError as e:
            raise CatalogError(f"Error opening {artifact_path}: {e}") from e

        session_response = self._request(
            "POST",
            UPLOAD_URL,
            "starting upload",
            params={"uploadType": "resumable", "part": "snippet,status,recordingDetails"},
            json=self.video_resource(title, description, create_time),
            headers={
                "X-Upload-Content-Type": "video/mp4",
                "X-Upload-Content-Length": str(size),
            },
            timeout=self.timeout,
        )
        upload_url = session_response.headers.get("Location")
        if not upload_url:
            raise CatalogError("Error starting upload: no upload location returned")

        with artifact_path.open("rb") as f:
            response = self._request(
                "PUT",
                upload_url,
                "uploading video",
                data=f,
                headers={"Content-Type": "video/mp4", "Content-Length": str(size)},
            )
        video_id = response.json()["id"]
        logger.info("upload_completed", title=title, url=f"https://youtu.be/{video_id}")
        return video_id

    def attach_to_collection(self, collection_id: str, remote_id: str) -> None:
        """Insert an uploaded video into a playlist."""
        self._request(
            "POST",
            f"{API_BASE_URL}/playlistItems",
            "adding video to playlist",
            params={"part": "snippet"},
            json={
                "snippet": {
                    "playlistId": collection_id,
                    "resourceId": {"kind": "youtube#video", "videoId": remote_id},
                }
            },
            timeout=self.timeout,
        )
        logger.info("playlist_item_added", playlist_id=collection_id, video_id=remote_id)
