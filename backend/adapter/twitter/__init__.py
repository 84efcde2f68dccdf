"""
Twitter API client for Tweet Radar.

Performs application-only OAuth2 (client credentials) to obtain a bearer
token, then uses it to search for posts around a geographic point.
Uses the v1.1 Standard Search endpoint.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

import requests
from pydantic import BaseModel, ValidationError

from ..models import GeoQuery, Post
from .credentials import encode_secrets

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "https://api.twitter.com"
TOKEN_PATH = "/oauth2/token"
SEARCH_PATH = "/1.1/search/tweets.json"

SEARCH_TERM = "Android"
SEARCH_RADIUS_MILES = 30

DEFAULT_TIMEOUT_SECONDS = 15


class TwitterClientError(Exception):
    """Base exception for TwitterClient errors."""
    pass


class TransportError(TwitterClientError):
    """Raised when the HTTP exchange could not be completed (DNS, connect, timeout, I/O)."""
    pass


class MalformedResponseError(TwitterClientError):
    """Raised when a successful response does not have the expected JSON shape."""
    def __init__(self, message: str, status_code: int = None, response_text: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text


# Wire shapes. Unknown fields are ignored, missing required fields fail validation.

class _TokenResponse(BaseModel):
    access_token: str


class _User(BaseModel):
    name: str
    screen_name: str
    profile_image_url_https: str


class _Status(BaseModel):
    text: str
    user: _User


class _SearchResponse(BaseModel):
    statuses: List[_Status]


def _log_exchange(response: requests.Response, *args, **kwargs) -> None:
    """Session response hook: log every request/response pair at DEBUG."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    request = response.request
    logger.debug(f"--> {request.method} {request.url}")
    logger.debug(f"<-- {response.status_code} {response.url} ({len(response.content)} bytes)")
    if response.text:
        logger.debug(response.text)


def _is_successful(status_code: int) -> bool:
    return 200 <= status_code < 300


class TwitterClient:
    """
    Client for the Twitter application-only auth and search APIs.

    Owns a single requests.Session so connections are pooled across calls.
    Holds no other state between calls; tokens are returned to the caller
    and never cached here.

    Usage:
        client = TwitterClient()
        token = client.acquire_token(api_key, api_secret)
        posts = client.search_by_location(token, 38.9072, -77.0369)
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Union[float, Tuple[float, float]] = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize the client.

        Args:
            session: Optional preconfigured transport (e.g. a stub in tests)
            base_url: API root, overridable for testing
            timeout: Seconds for connect and read, or a (connect, read) tuple
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if isinstance(timeout, tuple) else (timeout, timeout)

        if session is None:
            session = requests.Session()
            session.hooks["response"].append(_log_exchange)
        self.session = session

    @property
    def token_url(self) -> str:
        return f"{self.base_url}{TOKEN_PATH}"

    @property
    def search_url(self) -> str:
        return f"{self.base_url}{SEARCH_PATH}"

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()

    def __enter__(self) -> "TwitterClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        """Issue a request, mapping transport-level failures to TransportError."""
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Twitter API request timed out: {method} {url}") from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Failed to connect to Twitter API: {method} {url}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Twitter API request failed: {e}") from e

    def acquire_token(self, api_key: str, api_secret: str) -> str:
        """
        Obtain an application-only bearer token.

        Args:
            api_key: Consumer API key
            api_secret: Consumer API secret

        Returns:
            The access token, or an empty string if the server answered with a
            non-2xx status or an empty body.

        Raises:
            TransportError: If the request could not be completed
            MalformedResponseError: If the body has no `access_token`
        """
        encoded_secrets = encode_secrets(api_key, api_secret)

        headers = {
            "Authorization": f"Basic {encoded_secrets}",
            "Content-Type": "application/x-www-form-urlencoded;charset=UTF-8",
        }

        response = self._send(
            "POST",
            self.token_url,
            headers=headers,
            data="grant_type=client_credentials",
        )
        body = response.text

        if not body or not _is_successful(response.status_code):
            logger.warning(f"Token request returned {response.status_code} with {len(body or '')} bytes; no token")
            return ""

        try:
            parsed = _TokenResponse.model_validate_json(body)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Token response missing access_token: {e.error_count()} error(s)",
                status_code=response.status_code,
                response_text=body,
            ) from e

        logger.info("Acquired application-only bearer token")
        return parsed.access_token

    def search_by_location(self, token: str, latitude: float, longitude: float) -> List[Post]:
        """
        Search for posts mentioning the fixed term around a point.

        Args:
            token: Bearer token from acquire_token, forwarded verbatim
            latitude: Centre latitude
            longitude: Centre longitude

        Returns:
            Posts in API order; empty if the server answered with a non-2xx
            status, an empty body, or no statuses.

        Raises:
            TransportError: If the request could not be completed
            MalformedResponseError: If any status lacks a required field
        """
        query = GeoQuery(
            term=SEARCH_TERM,
            latitude=latitude,
            longitude=longitude,
            radius_miles=SEARCH_RADIUS_MILES,
        )

        response = self._send(
            "GET",
            self.search_url,
            headers={"Authorization": f"Bearer {token}"},
            params=query.to_params(),
        )
        body = response.text

        if not body or not _is_successful(response.status_code):
            logger.warning(f"Search for '{query.term}' near {query.geocode} returned {response.status_code}; no posts")
            return []

        try:
            parsed = _SearchResponse.model_validate_json(body)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Search response has unexpected shape: {e.error_count()} error(s)",
                status_code=response.status_code,
                response_text=body,
            ) from e

        posts = [
            Post(
                author=status.user.name,
                handle=status.user.screen_name,
                body=status.text,
                avatar_url=status.user.profile_image_url_https,
            )
            for status in parsed.statuses
        ]

        logger.info(f"Fetched {len(posts)} posts for '{query.term}' near {query.geocode}")
        return posts


__all__ = [
    "TwitterClient",
    "TwitterClientError",
    "TransportError",
    "MalformedResponseError",
    "encode_secrets",
    "Post",  # Re-export for convenience
    "DEFAULT_BASE_URL",
    "SEARCH_TERM",
    "SEARCH_RADIUS_MILES",
    "DEFAULT_TIMEOUT_SECONDS",
]
