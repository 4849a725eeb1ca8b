"""
Data shapes returned by the Spotify Web API.

Models are lenient: unknown fields are kept, and fields Spotify documents
as nullable are optional.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Body and status of one successful authenticated request."""

    data: T
    status: int


class SpotifyModel(BaseModel):
    """Base for all response models."""

    model_config = {"extra": "allow"}


class Image(SpotifyModel):
    url: str
    width: Optional[int] = None
    height: Optional[int] = None


class Followers(SpotifyModel):
    href: Optional[str] = None
    total: int = 0


class UserProfile(SpotifyModel):
    """The current user's profile (``GET /me``)."""

    id: str
    display_name: Optional[str] = None
    external_urls: Dict[str, str] = Field(default_factory=dict)
    followers: Optional[Followers] = None
    href: Optional[str] = None
    images: List[Image] = Field(default_factory=list)
    type: str = "user"
    uri: Optional[str] = None
    email: Optional[str] = None
    country: Optional[str] = None
    product: Optional[str] = None


class PlaylistOwner(SpotifyModel):
    id: str
    display_name: Optional[str] = None
    uri: Optional[str] = None


class PlaylistTracksRef(SpotifyModel):
    """Link to a playlist's tracks plus their count."""

    href: Optional[str] = None
    total: int = 0


class Playlist(SpotifyModel):
    """Simplified playlist object as listed by ``GET /me/playlists``."""

    id: str
    name: str
    description: Optional[str] = None
    owner: Optional[PlaylistOwner] = None
    collaborative: bool = False
    public: Optional[bool] = None
    snapshot_id: Optional[str] = None
    images: Optional[List[Image]] = None
    tracks: Optional[PlaylistTracksRef] = None
    external_urls: Dict[str, str] = Field(default_factory=dict)
    href: Optional[str] = None
    uri: Optional[str] = None

    @property
    def total_tracks(self) -> Optional[int]:
        return self.tracks.total if self.tracks else None


class Artist(SpotifyModel):
    id: Optional[str] = None
    name: str
    uri: Optional[str] = None


class Album(SpotifyModel):
    id: Optional[str] = None
    name: str
    images: List[Image] = Field(default_factory=list)
    release_date: Optional[str] = None
    uri: Optional[str] = None


class Track(SpotifyModel):
    """Full track object. Local files have no ``id``."""

    id: Optional[str] = None
    name: str
    uri: Optional[str] = None
    duration_ms: Optional[int] = None
    explicit: bool = False
    is_local: bool = False
    popularity: Optional[int] = None
    artists: List[Artist] = Field(default_factory=list)
    album: Optional[Album] = None
    external_urls: Dict[str, str] = Field(default_factory=dict)


class PlaylistTrack(SpotifyModel):
    """One entry of ``GET /playlists/{id}/tracks``.

    ``track`` is null when the track was removed from the catalog.
    """

    added_at: Optional[str] = None
    is_local: bool = False
    track: Optional[Track] = None


class AudioFeatures(SpotifyModel):
    """Audio analysis summary for one track (``GET /audio-features``)."""

    id: str
    uri: Optional[str] = None
    acousticness: Optional[float] = None
    danceability: Optional[float] = None
    energy: Optional[float] = None
    instrumentalness: Optional[float] = None
    key: Optional[int] = None
    liveness: Optional[float] = None
    loudness: Optional[float] = None
    mode: Optional[int] = None
    speechiness: Optional[float] = None
    tempo: Optional[float] = None
    time_signature: Optional[int] = None
    valence: Optional[float] = None
    duration_ms: Optional[int] = None


class Page(SpotifyModel, Generic[T]):
    """
    One page of a limit/offset collection.

    ``limit`` and ``offset`` are the values used for the request; ``total``
    is the remote's count for the whole collection.
    """

    items: List[T] = Field(default_factory=list)
    total: int = Field(ge=0)
    limit: int = Field(gt=0)
    offset: int = Field(ge=0)
    next: Optional[str] = None
    previous: Optional[str] = None
    href: Optional[str] = None

    @classmethod
    def from_response(
        cls, data: Dict[str, Any], limit: int, offset: int
    ) -> "Page[T]":
        """
        Build a page from a response body, pinning the request's limit/offset.

        Args:
            data: Decoded JSON body with ``items`` and ``total``.
            limit: Limit sent with the request.
            offset: Offset sent with the request.
        """
        return cls.model_validate({**data, "limit": limit, "offset": offset})
