"""
Lightweight HTTP client for the Spotify Web API.

Wraps requests.Session and classifies every response into a tagged
RequestOutcome. The client never retries and never refreshes tokens;
callers dispatch on the outcome kind.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Dict, NoReturn, Optional

import requests

from .exceptions import (
    SpotifyAPIError,
    SpotifyNotFoundError,
    SpotifyRateLimitError,
    SpotifyTokenExpiredError,
)
from .settings import DEFAULT_API_ROOT, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class OutcomeKind(StrEnum):
    """Classification of one HTTP response."""
    SUCCESS = "success"
    AUTH_EXPIRED = "auth_expired"
    FAILURE = "failure"


@dataclass(frozen=True)
class RequestOutcome:
    """
    Result of a single HTTP request.

    ``data`` is set for SUCCESS; ``message`` and ``retry_after`` describe
    a FAILURE.
    """

    kind: OutcomeKind
    status: int
    data: Any = None
    message: Optional[str] = None
    retry_after: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    def raise_error(self, url: str) -> NoReturn:
        """Raise the exception matching this outcome."""
        if self.kind is OutcomeKind.AUTH_EXPIRED:
            raise SpotifyTokenExpiredError(
                f"Token expired or invalid: {url}", status=self.status
            )
        if self.status == 404:
            raise SpotifyNotFoundError(f"Resource not found: {url}")
        if self.status == 429:
            raise SpotifyRateLimitError(
                f"Rate limited: {url}", retry_after=self.retry_after
            )
        raise SpotifyAPIError(
            f"API error {self.status}: {self.message}", status=self.status
        )


def _error_message(response: requests.Response) -> str:
    """Pull the human-readable message out of a Spotify error body."""
    try:
        body = response.json()
        error = body.get("error", {})
        if isinstance(error, dict):
            return error.get("message", response.text)
        return body.get("error_description", str(error))
    except (ValueError, AttributeError):
        return response.text


def classify_response(response: requests.Response) -> RequestOutcome:
    """Turn a response into a RequestOutcome."""
    status = response.status_code

    if 200 <= status < 300:
        if status == 204 or not response.content:
            return RequestOutcome(OutcomeKind.SUCCESS, status)
        try:
            data = response.json()
        except ValueError:
            logger.warning(f"Undecodable {status} response body")
            return RequestOutcome(
                OutcomeKind.FAILURE, status, message=response.text or "Invalid JSON body"
            )
        return RequestOutcome(OutcomeKind.SUCCESS, status, data=data)

    if status == 401:
        return RequestOutcome(OutcomeKind.AUTH_EXPIRED, status)

    retry_after = None
    if status == 429:
        try:
            retry_after = int(response.headers.get("Retry-After", 1))
        except (TypeError, ValueError):
            retry_after = 1

    return RequestOutcome(
        OutcomeKind.FAILURE,
        status,
        message=_error_message(response),
        retry_after=retry_after,
    )


class SpotifyHTTPClient:
    """
    HTTP client for Spotify Web API requests.

    Adds the bearer token per request, so a single client can be shared
    across threads while the token changes underneath it.
    """

    def __init__(
        self,
        api_root: str = DEFAULT_API_ROOT,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            api_root: Base URL plus version prefix.
            timeout: Per-request timeout in seconds.
            session: Optional shared session. A session created here is
                closed by ``close()``; a supplied one is left open.
        """
        self._api_root = api_root.rstrip("/")
        self._timeout = timeout
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @property
    def session(self) -> requests.Session:
        return self._session

    @property
    def timeout(self) -> float:
        return self._timeout

    def close(self) -> None:
        """Close the underlying HTTP session if this client created it."""
        if self._owns_session:
            self._session.close()

    def url_for(self, path: str) -> str:
        return f"{self._api_root}{path}"

    def get(
        self, path: str, access_token: str, params: Optional[Dict] = None
    ) -> RequestOutcome:
        """Send a GET request."""
        return self.request("GET", path, access_token, params=params)

    def request(
        self,
        method: str,
        path: str,
        access_token: str,
        params: Optional[Dict] = None,
    ) -> RequestOutcome:
        """
        Execute one authenticated request.

        Transport errors (``requests.RequestException``) propagate unchanged.
        """
        url = self.url_for(path)
        response = self._session.request(
            method,
            url,
            params=params,
            headers={
                "Accept": "application/json",
                "Authorization": f"Bearer {access_token}",
            },
            timeout=self._timeout,
        )
        outcome = classify_response(response)
        logger.debug(f"{method} {path} -> {outcome.status} ({outcome.kind})")
        return outcome
