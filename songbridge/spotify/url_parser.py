"""
Spotify URL and URI parser utility.

Extracts resource IDs from various Spotify URL and URI formats.
Supports web URLs, app URIs, and bare IDs.
"""

import re
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Spotify ID format: 22 alphanumeric characters
SPOTIFY_ID_PATTERN = re.compile(r"^[a-zA-Z0-9]{22}$")

_RESOURCE_TYPES = "track|playlist|album|artist|episode|show|user"

# Patterns for extracting an ID from various URL formats
_URL_PATTERNS = [
    # https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC?si=abc123
    # open.spotify.com/intl-de/playlist/37i9dQZF1DXcBWIGoYBM5M
    re.compile(
        r"(?:https?://)?open\.spotify\.com/(?:intl-[a-z]{2}/)?"
        rf"(?:{_RESOURCE_TYPES})/([a-zA-Z0-9]+)(?:\?.*)?$"
    ),
    # spotify:track:4uLU6hMCjMI75M1A2tKUQC
    re.compile(rf"^spotify:(?:{_RESOURCE_TYPES}):([a-zA-Z0-9]+)$"),
]


def parse_spotify_id(input_string: str) -> Optional[str]:
    """
    Extract a Spotify ID from a URL, URI, or bare ID.

    Supports these formats:
        - https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC
        - https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M?si=abc123
        - open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC
        - spotify:track:4uLU6hMCjMI75M1A2tKUQC
        - 4uLU6hMCjMI75M1A2tKUQC  (bare ID)

    Args:
        input_string: The URL, URI, or ID to parse.

    Returns:
        The ID, or None if the input does not match any known format.
    """
    if not input_string or not isinstance(input_string, str):
        return None

    cleaned = input_string.strip()
    if not cleaned:
        return None

    if SPOTIFY_ID_PATTERN.match(cleaned):
        return cleaned

    for pattern in _URL_PATTERNS:
        match = pattern.match(cleaned)
        if match:
            return match.group(1)

    logger.debug(f"Could not parse Spotify ID from: {cleaned!r}")
    return None


def extract_id(value: str) -> str:
    """
    Normalize a URL, URI or ID to the bare ID sent to the Web API.

    Opaque IDs that match no known format are passed through stripped,
    so the remote stays the authority on what is valid.

    Raises:
        ValueError: If the value is empty.
    """
    parsed = parse_spotify_id(value)
    if parsed:
        return parsed

    cleaned = value.strip() if isinstance(value, str) else ""
    if not cleaned:
        raise ValueError(f"Invalid Spotify ID: {value!r}")
    return cleaned
