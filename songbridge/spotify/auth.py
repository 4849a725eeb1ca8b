"""
Spotify token state and refresh.

The access token is the only mutable shared state of a connection. It is
held as an immutable TokenState inside a lock-guarded TokenStore, and a
refresh produces a new TokenState that replaces the old one as a whole.
"""

import logging
import threading
from dataclasses import dataclass, replace
from typing import Optional

import requests

from .exceptions import SpotifyTokenError
from .settings import DEFAULT_REFRESH_URL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenState:
    """
    One consistent access/refresh token pair.

    ``generation`` increases by one on every refresh, which lets a caller
    tell whether the token it used has already been replaced.
    """

    access_token: str
    refresh_token: str
    generation: int = 0

    def __repr__(self) -> str:
        # Never leak tokens into logs or tracebacks.
        return f"TokenState(generation={self.generation})"

    def rotated(self, access_token: str) -> "TokenState":
        """Return the state that follows a successful refresh."""
        if not access_token:
            raise SpotifyTokenError("Refresh returned an empty access token")
        return replace(self, access_token=access_token, generation=self.generation + 1)


class TokenStore:
    """
    Single-writer holder of the current TokenState.

    Reads and writes go through a lock, so readers always observe a complete
    state. ``refresh_lock`` serializes refreshes so concurrent 401s on the
    same token trigger only one call to the refresh endpoint.
    """

    def __init__(self, state: TokenState):
        self._state = state
        self._lock = threading.Lock()
        self.refresh_lock = threading.Lock()

    @property
    def current(self) -> TokenState:
        with self._lock:
            return self._state

    def apply(self, state: TokenState) -> None:
        """Replace the stored state."""
        with self._lock:
            if state.refresh_token != self._state.refresh_token:
                raise SpotifyTokenError("Refresh token cannot change during a session")
            self._state = state


class TokenRefresher:
    """
    Client for the token refresh proxy endpoint.

    Calls ``GET <refresh_url>?refresh_token=<token>`` and expects
    ``{"access_token": "..."}`` with HTTP 200.
    """

    def __init__(
        self,
        refresh_url: str = DEFAULT_REFRESH_URL,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._refresh_url = refresh_url
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

    def refresh(self, state: TokenState) -> TokenState:
        """
        Exchange the refresh token for a new access token.

        Args:
            state: The current token state.

        Returns:
            The rotated TokenState.

        Raises:
            SpotifyTokenError: If the endpoint does not answer 200 with an
                access token. Carries the endpoint's status.
        """
        response = self._session.get(
            self._refresh_url,
            params={"refresh_token": state.refresh_token},
            timeout=self._timeout,
        )

        if response.status_code != 200:
            raise SpotifyTokenError(
                f"Token refresh failed with status {response.status_code}",
                status=response.status_code,
            )

        try:
            access_token = response.json().get("access_token")
        except ValueError:
            access_token = None
        if not access_token:
            raise SpotifyTokenError(
                "No access_token returned from refresh",
                status=response.status_code,
            )

        logger.info("Successfully refreshed access token")
        return state.rotated(access_token)
