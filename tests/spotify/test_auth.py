"""
Tests for token state and the refresh endpoint client.
"""

import threading

import pytest
from unittest.mock import MagicMock

from songbridge.spotify.auth import TokenRefresher, TokenState, TokenStore
from songbridge.spotify.exceptions import SpotifyTokenError

REFRESH_URL = "https://proxy.test/api/refresh"


def _mock_response(status_code=200, json_data=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = json_data if json_data is not None else {}
    return resp


class TestTokenState:
    """Tests for TokenState."""

    def test_rotated_replaces_access_token(self):
        state = TokenState("old", "refresh")

        new_state = state.rotated("new")

        assert new_state.access_token == "new"
        assert new_state.refresh_token == "refresh"
        assert new_state.generation == 1
        assert state.access_token == "old"

    def test_rotated_rejects_empty_token(self):
        with pytest.raises(SpotifyTokenError):
            TokenState("old", "refresh").rotated("")

    def test_is_immutable(self):
        state = TokenState("old", "refresh")
        with pytest.raises(AttributeError):
            state.access_token = "new"

    def test_repr_hides_tokens(self):
        text = repr(TokenState("secret-access", "secret-refresh"))
        assert "secret" not in text


class TestTokenStore:
    """Tests for TokenStore."""

    def test_apply_replaces_state(self):
        store = TokenStore(TokenState("old", "refresh"))
        store.apply(store.current.rotated("new"))

        assert store.current.access_token == "new"
        assert store.current.generation == 1

    def test_refresh_token_is_fixed(self):
        store = TokenStore(TokenState("old", "refresh"))

        with pytest.raises(SpotifyTokenError):
            store.apply(TokenState("new", "other-refresh"))

        assert store.current.access_token == "old"

    def test_readers_see_whole_states(self):
        store = TokenStore(TokenState("token-0", "refresh"))
        seen = []

        def writer():
            for i in range(1, 200):
                store.apply(store.current.rotated(f"token-{i}"))

        def reader():
            for _ in range(200):
                state = store.current
                seen.append((state.generation, state.access_token))

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert all(token == f"token-{gen}" for gen, token in seen)


class TestTokenRefresher:
    """Tests for TokenRefresher."""

    def test_successful_refresh(self):
        session = MagicMock()
        session.get.return_value = _mock_response(200, {"access_token": "new"})
        refresher = TokenRefresher(REFRESH_URL, session=session, timeout=9)

        state = refresher.refresh(TokenState("old", "refresh-123"))

        session.get.assert_called_once_with(
            REFRESH_URL, params={"refresh_token": "refresh-123"}, timeout=9,
        )
        assert state.access_token == "new"
        assert state.generation == 1

    def test_failure_status_raises_with_status(self):
        session = MagicMock()
        session.get.return_value = _mock_response(400, {"error": "invalid_grant"})
        refresher = TokenRefresher(REFRESH_URL, session=session)

        with pytest.raises(SpotifyTokenError) as exc_info:
            refresher.refresh(TokenState("old", "refresh"))

        assert exc_info.value.status == 400

    def test_missing_access_token_raises(self):
        session = MagicMock()
        session.get.return_value = _mock_response(200, {})
        refresher = TokenRefresher(REFRESH_URL, session=session)

        with pytest.raises(SpotifyTokenError, match="No access_token"):
            refresher.refresh(TokenState("old", "refresh"))

    def test_non_json_body_raises(self):
        session = MagicMock()
        resp = _mock_response(200)
        resp.json.side_effect = ValueError("not json")
        session.get.return_value = resp
        refresher = TokenRefresher(REFRESH_URL, session=session)

        with pytest.raises(SpotifyTokenError):
            refresher.refresh(TokenState("old", "refresh"))
