"""
Spotify Web API gateway.

This module provides an authenticated connection with transparent token
refresh, lazy paginated collections, and batched bulk fetches.

Architecture:
    - settings.py: ConnectionSettings for endpoints and batching
    - auth.py: TokenState/TokenStore and the refresh endpoint client
    - http_client.py: SpotifyHTTPClient returning tagged RequestOutcomes
    - connection.py: SpotifyConnection, the caller-facing entry point
    - paged.py: Paged container over limit/offset collections
    - batching.py: Chunk partitioning and concurrent chunk execution
    - models.py: Response data shapes
    - exceptions.py: Exception hierarchy

Usage:
    from songbridge.spotify import ConnectionHooks, SpotifyConnection

    connection = SpotifyConnection.reestablish(
        refresh_token,
        hooks=ConnectionHooks(on_access_token_change=store_token),
    )
    playlists = connection.fetch_user_playlists()
    first_page = playlists.fetch_next()
"""

# Settings
from .settings import ConnectionSettings

# Auth (token state)
from .auth import TokenRefresher, TokenState, TokenStore

# Connection
from .connection import ConnectionHooks, SpotifyConnection

# Pagination and batching
from .paged import Paged, PageFetcher
from .batching import chunked, partition_sizes

# Models
from .models import (
    AudioFeatures,
    FetchResult,
    Page,
    Playlist,
    PlaylistTrack,
    Track,
    UserProfile,
)

# Exceptions
from .exceptions import (
    SpotifyError,
    SpotifyAuthError,
    SpotifyTokenError,
    SpotifyTokenExpiredError,
    SpotifyAPIError,
    SpotifyRateLimitError,
    SpotifyNotFoundError,
    SpotifyPaginationError,
)


__all__ = [
    # Settings
    'ConnectionSettings',

    # Auth
    'TokenRefresher',
    'TokenState',
    'TokenStore',

    # Connection
    'ConnectionHooks',
    'SpotifyConnection',

    # Pagination and batching
    'Paged',
    'PageFetcher',
    'chunked',
    'partition_sizes',

    # Models
    'AudioFeatures',
    'FetchResult',
    'Page',
    'Playlist',
    'PlaylistTrack',
    'Track',
    'UserProfile',

    # Exceptions
    'SpotifyError',
    'SpotifyAuthError',
    'SpotifyTokenError',
    'SpotifyTokenExpiredError',
    'SpotifyAPIError',
    'SpotifyRateLimitError',
    'SpotifyNotFoundError',
    'SpotifyPaginationError',
]
