"""
Connection settings for the Spotify gateway.

Provides a frozen dataclass describing where and how the connection talks
to the Web API and to the token refresh proxy.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping

DEFAULT_API_ROOT = "https://api.spotify.com/v1"
DEFAULT_REFRESH_URL = "http://localhost:8000/api/refresh"
DEFAULT_TIMEOUT = 30.0
# Spotify rejects more than 100 IDs per audio-features request.
AUDIO_FEATURES_CAP = 100


@dataclass(frozen=True)
class ConnectionSettings:
    """
    Immutable container for connection settings.

    Attributes:
        api_root: Base URL plus version prefix of the Web API.
        refresh_url: Full URL of the token refresh endpoint.
        timeout: Per-request timeout in seconds.
        audio_features_cap: Maximum IDs per audio-features request.

    Example:
        settings = ConnectionSettings.from_env()

        settings = ConnectionSettings(
            refresh_url='https://example.com/api/refresh',
            timeout=10,
        )
    """

    api_root: str = DEFAULT_API_ROOT
    refresh_url: str = DEFAULT_REFRESH_URL
    timeout: float = DEFAULT_TIMEOUT
    audio_features_cap: int = AUDIO_FEATURES_CAP

    def __post_init__(self):
        """Validate settings on creation."""
        if not self.api_root:
            raise ValueError("api_root is required")
        if not self.refresh_url:
            raise ValueError("refresh_url is required")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if not 0 < self.audio_features_cap <= AUDIO_FEATURES_CAP:
            raise ValueError(
                f"audio_features_cap must be between 1 and {AUDIO_FEATURES_CAP}"
            )
        # Paths are appended as "/me", "/playlists/..."
        object.__setattr__(self, "api_root", self.api_root.rstrip("/"))

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'ConnectionSettings':
        """
        Create settings from an application config mapping.

        Missing keys fall back to the defaults.

        Args:
            config: Mapping with SPOTIFY_* keys.

        Returns:
            ConnectionSettings instance.

        Raises:
            ValueError: If a value is invalid.
        """
        return cls(
            api_root=config.get('SPOTIFY_API_ROOT') or DEFAULT_API_ROOT,
            refresh_url=config.get('SPOTIFY_REFRESH_URL') or DEFAULT_REFRESH_URL,
            timeout=float(config.get('SPOTIFY_REQUEST_TIMEOUT', DEFAULT_TIMEOUT)),
            audio_features_cap=int(
                config.get('SPOTIFY_AUDIO_FEATURES_CAP', AUDIO_FEATURES_CAP)
            ),
        )

    @classmethod
    def from_env(cls) -> 'ConnectionSettings':
        """Create settings from environment variables."""
        return cls.from_config(os.environ)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'api_root': self.api_root,
            'refresh_url': self.refresh_url,
            'timeout': self.timeout,
            'audio_features_cap': self.audio_features_cap,
        }
