"""Centralized logging configuration for hashed-store.

Provides consistent logging for the store, the notification channel and the
GitLab backends, with environment-based control over level and format.
"""

import logging
import logging.config
from enum import Enum
from typing import Any, Dict, Optional

from .settings import HashedStoreSettings, get_settings


class LogFormat(str, Enum):
    """Log format options."""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


FORMAT_STRINGS = {
    LogFormat.SIMPLE: "%(asctime)s - %(levelname)s - %(message)s",
    LogFormat.DETAILED: "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
    LogFormat.JSON: '{"time":"%(asctime)s","level":"%(levelname)s","module":"%(name)s","message":"%(message)s"}',
}


class LoggingConfig:
    """Centralized logging configuration manager."""

    # Modules that should only log errors
    ERROR_ONLY_MODULES = [
        "httpx",
        "httpcore",
        "asyncio",
    ]

    @classmethod
    def build(
        cls,
        log_level: str = "INFO",
        log_format: str = LogFormat.SIMPLE.value
    ) -> Dict[str, Any]:
        """Build a dictConfig mapping.

        Args:
            log_level: Root log level name
            log_format: One of ``simple``, ``detailed`` or ``json``

        Returns:
            Configuration suitable for ``logging.config.dictConfig``
        """
        level = log_level.upper()
        format_string = FORMAT_STRINGS[LogFormat(log_format.lower())]

        logging_config: Dict[str, Any] = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": format_string,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "default",
                    "stream": "ext://sys.stderr",
                },
            },
            "root": {
                "level": level,
                "handlers": ["console"],
            },
            "loggers": {},
        }

        for module in cls.ERROR_ONLY_MODULES:
            logging_config["loggers"][module] = {
                "level": "ERROR",
                "handlers": ["console"],
                "propagate": False,
            }

        return logging_config

    @classmethod
    def configure(cls, settings: Optional[HashedStoreSettings] = None) -> None:
        """Configure logging from settings (environment by default)."""
        settings = settings or get_settings()
        logging.config.dictConfig(cls.build(settings.log_level, settings.log_format))

        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={settings.log_level}, format={settings.log_format}")

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Set log level for a specific module.

        Args:
            module_name: Name of the module
            level: Log level to set
        """
        logging.getLogger(module_name).setLevel(getattr(logging, level.upper()))


def setup_logging(settings: Optional[HashedStoreSettings] = None) -> None:
    """Setup logging configuration.

    Entry points call this once at startup; importing the library never
    touches the logging configuration.
    """
    LoggingConfig.configure(settings)
