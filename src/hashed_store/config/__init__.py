"""Configuration for hashed-store.

Settings are read from the environment (``HASHED_STORE_*``) or a ``.env`` file.
"""

from .settings import HashedStoreSettings, get_settings
from .logging_config import LoggingConfig, LogFormat, setup_logging

__all__ = [
    "HashedStoreSettings",
    "get_settings",
    "LoggingConfig",
    "LogFormat",
    "setup_logging",
]
