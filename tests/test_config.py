"""
Tests for configuration module.

Tests cover Config classes, environment variable handling,
and building connection settings from a named configuration.
"""

import logging
import os

import pytest
from unittest.mock import patch


class TestConfigClass:
    """Test base Config class."""

    @pytest.fixture(autouse=True)
    def restore_config(self):
        """Reload config from the real environment after each test."""
        yield
        import importlib
        import config
        importlib.reload(config)

    def test_config_has_required_attributes(self):
        """Config should have all required attributes."""
        from config import Config

        assert hasattr(Config, 'SPOTIFY_API_ROOT')
        assert hasattr(Config, 'SPOTIFY_REFRESH_URL')
        assert hasattr(Config, 'SPOTIFY_REQUEST_TIMEOUT')
        assert hasattr(Config, 'SPOTIFY_AUDIO_FEATURES_CAP')
        assert hasattr(Config, 'LOG_LEVEL')

    def test_defaults(self):
        """Defaults apply when the environment is empty."""
        with patch.dict(os.environ, {}, clear=True):
            import importlib
            import config
            importlib.reload(config)

            assert config.Config.SPOTIFY_API_ROOT == 'https://api.spotify.com/v1'
            assert config.Config.SPOTIFY_AUDIO_FEATURES_CAP == 100
            assert config.Config.SPOTIFY_REQUEST_TIMEOUT == 30.0

    def test_environment_overrides(self):
        """Environment variables override defaults."""
        with patch.dict(os.environ, {
            'SPOTIFY_REFRESH_URL': 'https://proxy.example/api/refresh',
            'SPOTIFY_AUDIO_FEATURES_CAP': '50',
        }, clear=True):
            import importlib
            import config
            importlib.reload(config)

            assert config.Config.SPOTIFY_REFRESH_URL == 'https://proxy.example/api/refresh'
            assert config.Config.SPOTIFY_AUDIO_FEATURES_CAP == 50


class TestConfigDict:
    """Test config dictionary for easy selection."""

    def test_config_dict_has_environments(self):
        """config dict should have all environments."""
        from config import config

        assert set(config) == {'development', 'production', 'testing', 'default'}

    def test_config_dict_values(self):
        """config dict should map to correct classes."""
        from config import config, DevelopmentConfig, ProductionConfig, TestingConfig

        assert config['development'] is DevelopmentConfig
        assert config['production'] is ProductionConfig
        assert config['testing'] is TestingConfig
        assert config['default'] is DevelopmentConfig

    def test_testing_flags(self):
        from config import TestingConfig

        assert TestingConfig.TESTING is True
        assert TestingConfig.LOG_LEVEL == 'DEBUG'


class TestGetSettings:
    """Test songbridge.get_settings()."""

    def test_named_configuration(self):
        from songbridge import get_settings

        settings = get_settings('testing')

        assert settings.refresh_url == 'http://testserver/api/refresh'
        assert settings.audio_features_cap == 100

    def test_environment_selects_configuration(self):
        from songbridge import get_settings

        with patch.dict(os.environ, {'SONGBRIDGE_ENV': 'testing'}):
            settings = get_settings()

        assert settings.refresh_url == 'http://testserver/api/refresh'

    def test_unknown_configuration_raises(self):
        from songbridge import get_settings

        with pytest.raises(ValueError, match='Unknown configuration'):
            get_settings('staging')


class TestSetupLogging:
    """Test songbridge.setup_logging()."""

    def test_explicit_level(self):
        from songbridge import setup_logging

        with patch('songbridge.logging.basicConfig') as mock_basic:
            setup_logging('debug')

        assert mock_basic.call_args.kwargs['level'] == logging.DEBUG

    def test_level_from_environment(self):
        from songbridge import setup_logging

        with patch.dict(os.environ, {'LOG_LEVEL': 'WARNING'}):
            with patch('songbridge.logging.basicConfig') as mock_basic:
                setup_logging()

        assert mock_basic.call_args.kwargs['level'] == logging.WARNING
