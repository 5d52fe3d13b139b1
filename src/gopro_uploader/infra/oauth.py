"""
OAuth2 credentials for the YouTube Data API.

Implements the installed-application flow: the user opens an authorization
URL, pastes back the code, and the resulting token (including its refresh
token) is cached on disk. Later runs refresh the access token silently.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable
from urllib.parse import urlencode

import requests

from .exceptions import AuthError
from .logging import get_logger

logger = get_logger(__name__)

YOUTUBE_SCOPES = (
    "https://www.googleapis.com/auth/youtube",
    "https://www.googleapis.com/auth/youtube.upload",
)
TOKEN_CACHE_FILE = "gopro-uploader.json"
DEFAULT_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"
OOB_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"

# Refresh slightly before the reported expiry.
EXPIRY_MARGIN = timedelta(seconds=60)


@dataclass(frozen=True)
class ClientSecrets:
    client_id: str
    client_secret: str
    auth_uri: str = DEFAULT_AUTH_URI
    token_uri: str = DEFAULT_TOKEN_URI
    redirect_uri: str = OOB_REDIRECT_URI


@dataclass
class OAuthToken:
    access_token: str
    refresh_token: str | None = None
    token_type: str = "Bearer"
    expiry: str | None = None
    """ISO 8601 expiry of ``access_token``; ``None`` means unknown."""

    def is_expired(self, now: datetime | None = None) -> bool:
        if not self.expiry:
            return False
        now = now or datetime.now(timezone.utc)
        return datetime.fromisoformat(self.expiry) - EXPIRY_MARGIN <= now


def load_client_secrets(path: str | os.PathLike[str]) -> ClientSecrets:
    """Read a Google client secrets JSON file (``installed`` or ``web`` app)."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise AuthError(
            f"Cannot read OAuth2 client secrets file (set GOOGLE_CLIENT_SECRETS to override path): {e}"
        ) from e
    except json.JSONDecodeError as e:
        raise AuthError(f"Cannot parse OAuth2 client secrets file: {e}") from e

    block = raw.get("installed") or raw.get("web") or {}
    if not block.get("client_id") or not block.get("client_secret"):
        raise AuthError("Cannot parse OAuth2 client secrets file: missing client_id/client_secret")
    redirect_uris = block.get("redirect_uris") or [OOB_REDIRECT_URI]
    return ClientSecrets(
        client_id=block["client_id"],
        client_secret=block["client_secret"],
        auth_uri=block.get("auth_uri", DEFAULT_AUTH_URI),
        token_uri=block.get("token_uri", DEFAULT_TOKEN_URI),
        redirect_uri=redirect_uris[0],
    )


def load_token(path: Path) -> OAuthToken | None:
    """Read a cached token, or None when there is no usable cache."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return OAuthToken(**data)
    except (OSError, json.JSONDecodeError, TypeError):
        return None


def save_token(path: Path, token: OAuthToken) -> None:
    """Write a token to ``path`` readable by the current user only."""
    path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    logger.info("token_cached", path=str(path))
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        json.dump(asdict(token), f)


class OAuthCredentials:
    """
    Access-token provider for Google APIs.

    Args:
        secrets: Parsed client secrets
        cache_path: Where the token is cached between runs
        prompt: Called with the authorization URL; returns the pasted code
        session: requests session used for token exchanges
    """

    def __init__(
        self,
        secrets: ClientSecrets,
        cache_path: Path,
        prompt: Callable[[str], str],
        session: requests.Session | None = None,
        scopes: tuple[str, ...] = YOUTUBE_SCOPES,
    ):
        self.secrets = secrets
        self.cache_path = Path(cache_path)
        self.prompt = prompt
        self.session = session or requests.Session()
        self.scopes = scopes
        self._token: OAuthToken | None = None

    def authorization_url(self) -> str:
        query = urlencode(
            {
                "client_id": self.secrets.client_id,
                "redirect_uri": self.secrets.redirect_uri,
                "response_type": "code",
                "scope": " ".join(self.scopes),
                "access_type": "offline",
                "state": "state-token",
            }
        )
        return f"{self.secrets.auth_uri}?{query}"

    def access_token(self) -> str:
        """Return a valid access token, refreshing or authorizing as needed."""
        token = self._token or load_token(self.cache_path)
        if token is None:
            token = self._token_from_web()
            save_token(self.cache_path, token)
        elif token.is_expired():
            if not token.refresh_token:
                token = self._token_from_web()
            else:
                token = self._refresh(token)
            save_token(self.cache_path, token)
        self._token = token
        return token.access_token

    def _token_from_web(self) -> OAuthToken:
        code = self.prompt(self.authorization_url()).strip()
        if not code:
            raise AuthError("Unable to read authorization code")
        return self._request_token(
            {
                "code": code,
                "redirect_uri": self.secrets.redirect_uri,
                "grant_type": "authorization_code",
            }
        )

    def _refresh(self, token: OAuthToken) -> OAuthToken:
        refreshed = self._request_token(
            {"refresh_token": token.refresh_token, "grant_type": "refresh_token"}
        )
        # Google omits the refresh token on refresh responses.
        if refreshed.refresh_token is None:
            refreshed.refresh_token = token.refresh_token
        return refreshed

    def _request_token(self, form: dict[str, str | None]) -> OAuthToken:
        payload = {
            "client_id": self.secrets.client_id,
            "client_secret": self.secrets.client_secret,
            **form,
        }
        try:
            response = self.session.post(self.secrets.token_uri, data=payload, timeout=30)
        except requests.RequestException as e:
            raise AuthError(f"Unable to retrieve token: {e}") from e
        if not response.ok:
            raise AuthError(f"Unable to retrieve token ({response.status_code}): {response.text}")

        data = response.json()
        expiry = None
        if data.get("expires_in"):
            expiry = (
                datetime.now(timezone.utc) + timedelta(seconds=int(data["expires_in"]))
            ).isoformat()
        return OAuthToken(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            token_type=data.get("token_type", "Bearer"),
            expiry=expiry,
        )


def credentials_from_settings(
    client_secrets_path: str, token_cache_dir: str, prompt: Callable[[str], str]
) -> OAuthCredentials:
    secrets = load_client_secrets(client_secrets_path)
    cache_path = Path(token_cache_dir).expanduser() / TOKEN_CACHE_FILE
    return OAuthCredentials(secrets=secrets, cache_path=cache_path, prompt=prompt)
