"""
Authorized connection to a user's Spotify account.

Owns the token pair, hides token refresh from callers, and exposes typed
fetch operations. Large collections come back as lazy Paged containers;
audio features are fetched in concurrent, size-capped batches.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

import requests

from .auth import TokenRefresher, TokenState, TokenStore
from .batching import chunked, run_concurrently
from .exceptions import SpotifyAPIError
from .http_client import OutcomeKind, SpotifyHTTPClient
from .models import (
    AudioFeatures,
    FetchResult,
    Page,
    Playlist,
    PlaylistTrack,
    UserProfile,
)
from .paged import Paged
from .settings import ConnectionSettings
from .url_parser import extract_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionHooks:
    """
    Optional observers of a connection.

    Attributes:
        on_profile: Called once with the profile fetched at establishment.
        on_access_token_change: Called with the new access token every time
            a refresh replaces it, so the caller can persist it.
    """

    on_profile: Optional[Callable[[UserProfile], None]] = None
    on_access_token_change: Optional[Callable[[str], None]] = None


class SpotifyConnection:
    """
    An authorized connection to a user's Spotify account.

    Build one with ``establish`` or ``reestablish``; both verify the tokens
    by fetching the user profile and raise if that fails. Afterwards every
    request that receives a 401 triggers one refresh and one retry.

    Example:
        hooks = ConnectionHooks(on_access_token_change=save_token)
        connection = SpotifyConnection.establish(access, refresh, hooks)

        playlists = connection.fetch_user_playlists()
        playlists.fetch_next()

        tracks = connection.fetch_playlist_tracks(playlist_id).fetch_all()
        ids = [t.track.id for t in tracks if t.track and t.track.id]
        features = connection.fetch_audio_features(ids)
    """

    def __init__(
        self,
        access_token: str,
        refresh_token: str,
        hooks: Optional[ConnectionHooks] = None,
        settings: Optional[ConnectionSettings] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Create an unverified connection. Prefer ``establish``/``reestablish``.

        Args:
            access_token: Bearer token, may be empty before a refresh.
            refresh_token: Long-lived token for the refresh endpoint.
            hooks: Optional observers.
            settings: Endpoint and batching settings.
            session: Optional shared requests session.
        """
        if not refresh_token:
            raise ValueError("refresh_token is required")

        self._settings = settings or ConnectionSettings()
        self._hooks = hooks or ConnectionHooks()
        self._tokens = TokenStore(TokenState(access_token, refresh_token))
        self._http = SpotifyHTTPClient(
            self._settings.api_root, self._settings.timeout, session=session
        )
        self._refresher = TokenRefresher(
            self._settings.refresh_url,
            session=self._http.session,
            timeout=self._settings.timeout,
        )

    # =========================================================================
    # Establishment
    # =========================================================================

    @classmethod
    def establish(
        cls,
        access_token: str,
        refresh_token: str,
        hooks: Optional[ConnectionHooks] = None,
        settings: Optional[ConnectionSettings] = None,
        session: Optional[requests.Session] = None,
    ) -> "SpotifyConnection":
        """
        Connect with both tokens and verify them.

        An expired access token is refreshed once during verification.

        Returns:
            The verified connection.

        Raises:
            SpotifyTokenError: If the access token is rejected and the
                refresh fails.
            SpotifyError: For any other failure of the profile fetch.
        """
        connection = cls(access_token, refresh_token, hooks, settings, session)
        connection._verify()
        return connection

    @classmethod
    def reestablish(
        cls,
        refresh_token: str,
        hooks: Optional[ConnectionHooks] = None,
        settings: Optional[ConnectionSettings] = None,
        session: Optional[requests.Session] = None,
    ) -> "SpotifyConnection":
        """
        Resume a session from only a refresh token.

        Refreshes first, then verifies like ``establish``.
        """
        connection = cls("", refresh_token, hooks, settings, session)
        try:
            connection.refresh()
        except Exception:
            connection.close()
            raise
        connection._verify()
        return connection

    def _verify(self) -> UserProfile:
        try:
            profile = self.fetch_user_profile()
        except Exception:
            self.close()
            raise

        logger.info(f"Connection established for user {profile.id}")
        if self._hooks.on_profile is not None:
            self._hooks.on_profile(profile)
        return profile

    # =========================================================================
    # Tokens
    # =========================================================================

    @property
    def access_token(self) -> str:
        return self._tokens.current.access_token

    @property
    def refresh_token(self) -> str:
        return self._tokens.current.refresh_token

    @property
    def settings(self) -> ConnectionSettings:
        return self._settings

    def refresh(self) -> str:
        """
        Obtain a new access token from the refresh endpoint.

        Returns:
            The new access token.

        Raises:
            SpotifyTokenError: If the refresh endpoint does not succeed.
        """
        with self._tokens.refresh_lock:
            new_state = self._rotate(self._tokens.current)
        self._notify_token_change(new_state)
        return new_state.access_token

    def _refresh_after_expiry(self, stale: TokenState) -> TokenState:
        """
        Refresh because ``stale`` was rejected with 401.

        If another thread already replaced ``stale`` while this one waited
        for the refresh lock, its result is reused instead of refreshing
        again.
        """
        with self._tokens.refresh_lock:
            current = self._tokens.current
            if current.generation != stale.generation:
                logger.debug(
                    "Access token already refreshed "
                    f"(generation {current.generation}), reusing"
                )
                return current
            new_state = self._rotate(current)
        self._notify_token_change(new_state)
        return new_state

    def _rotate(self, current: TokenState) -> TokenState:
        # Caller holds refresh_lock.
        new_state = self._refresher.refresh(current)
        self._tokens.apply(new_state)
        return new_state

    def _notify_token_change(self, state: TokenState) -> None:
        # Runs with refresh_lock released.
        if self._hooks.on_access_token_change is not None:
            self._hooks.on_access_token_change(state.access_token)

    # =========================================================================
    # Requests
    # =========================================================================

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> FetchResult:
        """
        Authenticated GET against the Web API.

        A 401 triggers exactly one refresh and one retry. Any other non-2xx
        response, or a failed retry, is raised; transport errors from
        ``requests`` propagate unchanged.

        Args:
            path: API path such as ``/me``.
            params: Optional query parameters.

        Returns:
            FetchResult with the decoded body and the status.

        Raises:
            SpotifyTokenError: If the refresh fails.
            SpotifyTokenExpiredError: If the retry is still unauthorized.
            SpotifyAPIError: For other failure statuses.
        """
        state = self._tokens.current
        outcome = self._http.get(path, state.access_token, params=params)

        if outcome.kind is OutcomeKind.AUTH_EXPIRED:
            logger.info(f"401 received for {path}, attempting token refresh")
            state = self._refresh_after_expiry(state)
            outcome = self._http.get(path, state.access_token, params=params)

        if outcome.kind is not OutcomeKind.SUCCESS:
            outcome.raise_error(self._http.url_for(path))

        return FetchResult(data=outcome.data, status=outcome.status)

    def _get_ok(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET that only accepts HTTP 200."""
        result = self.get(path, params=params)
        if result.status != 200:
            raise SpotifyAPIError(
                f"Unexpected status {result.status} for {path}",
                status=result.status,
            )
        return result.data

    # =========================================================================
    # Operations
    # =========================================================================

    def fetch_user_profile(self) -> UserProfile:
        """
        Get the current user's profile.

        Raises:
            SpotifyError: Unless the request ends with status 200.
        """
        return UserProfile.model_validate(self._get_ok("/me"))

    def fetch_user_playlists(self, page_size: int = 50) -> Paged[Playlist]:
        """
        Get the user's playlists as a lazy container.

        Args:
            page_size: Items requested per page (Spotify allows up to 50).
        """
        def fetcher(limit: int, offset: int) -> Page[Playlist]:
            data = self._get_ok("/me/playlists", {"limit": limit, "offset": offset})
            return Page[Playlist].from_response(data, limit, offset)

        return Paged.create(page_size, fetcher)

    def fetch_playlist_tracks(
        self, playlist_id: str, page_size: int = 100
    ) -> Paged[PlaylistTrack]:
        """
        Get a playlist's tracks as a lazy container.

        Args:
            playlist_id: Playlist ID, URI or URL.
            page_size: Items requested per page (Spotify allows up to 100).
        """
        playlist_id = extract_id(playlist_id)
        path = f"/playlists/{playlist_id}/tracks"

        def fetcher(limit: int, offset: int) -> Page[PlaylistTrack]:
            data = self._get_ok(path, {"limit": limit, "offset": offset})
            return Page[PlaylistTrack].from_response(data, limit, offset)

        return Paged.create(page_size, fetcher)

    def fetch_audio_features(
        self, ids: Iterable[str]
    ) -> List[Optional[AudioFeatures]]:
        """
        Get audio features for any number of tracks.

        IDs are split into near-equal chunks within the per-request cap and
        the chunks are requested concurrently. Entries are ``None`` where
        Spotify has no features for an ID.

        Args:
            ids: Track IDs, URIs or URLs.

        Returns:
            Features in the same order as ``ids``.

        Raises:
            SpotifyError: If any chunk fails. No partial result is returned.
        """
        track_ids = [extract_id(track_id) for track_id in ids]
        if not track_ids:
            return []

        chunks = chunked(track_ids, self._settings.audio_features_cap)
        logger.debug(
            f"Fetching audio features for {len(track_ids)} tracks "
            f"in {len(chunks)} chunks"
        )

        def fetch_chunk(chunk: List[str]) -> List[Optional[AudioFeatures]]:
            data = self._get_ok("/audio-features", {"ids": ",".join(chunk)})
            features = (data or {}).get("audio_features") or []
            return [
                AudioFeatures.model_validate(feature) if feature else None
                for feature in features
            ]

        results = run_concurrently(chunks, fetch_chunk)
        return [feature for chunk_result in results for feature in chunk_result]

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close the HTTP session if the connection created it."""
        self._http.close()

    def __enter__(self) -> "SpotifyConnection":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"SpotifyConnection(api_root={self._settings.api_root!r})"
