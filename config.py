import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Base configuration."""
    # Remote API
    SPOTIFY_API_ROOT = os.getenv('SPOTIFY_API_ROOT', 'https://api.spotify.com/v1')
    SPOTIFY_REFRESH_URL = os.getenv(
        'SPOTIFY_REFRESH_URL', 'http://localhost:8000/api/refresh'
    )
    SPOTIFY_REQUEST_TIMEOUT = float(os.getenv('SPOTIFY_REQUEST_TIMEOUT', 30))

    # Bulk fetching
    SPOTIFY_AUDIO_FEATURES_CAP = int(os.getenv('SPOTIFY_AUDIO_FEATURES_CAP', 100))

    # Application settings
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

class ProductionConfig(Config):
    """Production configuration."""
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING')

class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = 'DEBUG'

class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    LOG_LEVEL = 'DEBUG'
    SPOTIFY_REFRESH_URL = 'http://testserver/api/refresh'

# Dictionary for easy config selection
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
