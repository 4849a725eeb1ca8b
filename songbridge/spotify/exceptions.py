"""
Spotify module exceptions.

Provides a clean exception hierarchy for Spotify API operations.
Every error raised for an HTTP response carries the response status.
"""

from typing import Optional


class SpotifyError(Exception):
    """Base exception for all Spotify-related errors."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class SpotifyAuthError(SpotifyError):
    """Raised when authentication/authorization fails."""
    pass


class SpotifyTokenError(SpotifyAuthError):
    """Raised when the token refresh endpoint rejects a refresh."""
    pass


class SpotifyTokenExpiredError(SpotifyTokenError):
    """Raised when a request is still unauthorized after a refresh."""

    def __init__(self, message: str, status: Optional[int] = 401):
        super().__init__(message, status=status)


class SpotifyAPIError(SpotifyError):
    """Raised when a Spotify API call fails."""
    pass


class SpotifyRateLimitError(SpotifyAPIError):
    """Raised when rate limited by Spotify API."""

    def __init__(self, message: str, retry_after: int = None, status: int = 429):
        super().__init__(message, status=status)
        self.retry_after = retry_after


class SpotifyNotFoundError(SpotifyAPIError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str, status: int = 404):
        super().__init__(message, status=status)


class SpotifyPaginationError(SpotifyError):
    """Raised when a paged collection is misused or returns an inconsistent page."""
    pass
