"""
Pytest configuration and shared fixtures for SongBridge tests.

This module provides common fixtures used across all test modules,
including sample Spotify payloads and settings.
"""

import pytest

from songbridge.spotify.settings import ConnectionSettings


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Connection settings pointing at test hosts."""
    return ConnectionSettings(
        api_root='https://api.test/v1',
        refresh_url='https://proxy.test/api/refresh',
        timeout=5,
    )


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def sample_user():
    """Sample Spotify user data."""
    return {
        'id': 'user123',
        'display_name': 'Test User',
        'email': 'test@example.com',
        'external_urls': {'spotify': 'https://open.spotify.com/user/user123'},
        'followers': {'href': None, 'total': 7},
        'href': 'https://api.spotify.com/v1/users/user123',
        'images': [{'url': 'https://example.com/avatar.jpg', 'width': 64, 'height': 64}],
        'type': 'user',
        'uri': 'spotify:user:user123',
        'country': 'US',
        'product': 'premium',
    }


def make_playlist(index):
    """Build one simplified playlist object."""
    return {
        'id': f'playlist{index}',
        'name': f'Playlist {index}',
        'description': '',
        'owner': {'id': 'user123', 'display_name': 'Test User'},
        'collaborative': False,
        'public': True,
        'images': [],
        'tracks': {'href': f'https://api.test/v1/playlists/playlist{index}/tracks', 'total': index},
        'uri': f'spotify:playlist:playlist{index}',
    }


def make_playlist_track(index):
    """Build one playlist track entry."""
    return {
        'added_at': '2024-01-01T00:00:00Z',
        'is_local': False,
        'track': {
            'id': f'track{index}',
            'name': f'Track {index}',
            'uri': f'spotify:track:track{index}',
            'duration_ms': 180000 + index,
            'artists': [{'id': 'artist1', 'name': 'Artist'}],
            'album': {'id': 'album1', 'name': 'Album', 'images': []},
        },
    }


def make_audio_features(track_id):
    """Build one audio features object."""
    return {
        'id': track_id,
        'uri': f'spotify:track:{track_id}',
        'danceability': 0.5,
        'energy': 0.7,
        'tempo': 120.0,
        'key': 5,
        'mode': 1,
        'valence': 0.4,
        'duration_ms': 200000,
        'time_signature': 4,
    }


@pytest.fixture
def playlist_factory():
    return make_playlist


@pytest.fixture
def playlist_track_factory():
    return make_playlist_track


@pytest.fixture
def audio_features_factory():
    return make_audio_features
