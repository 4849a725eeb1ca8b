import os
import logging
from typing import Optional

from config import config
from songbridge.spotify import ConnectionSettings

logger = logging.getLogger(__name__)


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging.

    Args:
        level: Level name. Defaults to the LOG_LEVEL environment variable,
            then INFO.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_settings(config_name: Optional[str] = None) -> ConnectionSettings:
    """
    Build connection settings from a named configuration.

    Args:
        config_name: One of the keys of ``config.config``. Defaults to the
            SONGBRIDGE_ENV environment variable, then 'default'.

    Returns:
        ConnectionSettings instance.
    """
    if config_name is None:
        config_name = os.getenv("SONGBRIDGE_ENV", "default")

    config_class = config.get(config_name)
    if config_class is None:
        raise ValueError(f"Unknown configuration: {config_name!r}")

    values = {key: getattr(config_class, key) for key in dir(config_class) if key.isupper()}
    logger.debug(f"Loading settings from {config_class.__name__}")
    return ConnectionSettings.from_config(values)
