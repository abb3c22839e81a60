"""
Configuration Holder

Process-wide reference to the current SecDownloadConfig.
"""

import logging
import threading
from typing import Any, Mapping

from secdownload.config.secdownload_config import SecDownloadConfig

logger = logging.getLogger(__name__)


class ConfigurationHolder:
    """
    Holds the active configuration and swaps it atomically.

    Configurations are immutable; reconfiguring builds a new instance and
    replaces the reference, so a reader that took `current` keeps a
    consistent snapshot for the rest of its request.
    """

    def __init__(self, config: SecDownloadConfig):
        self._config = config
        self._lock = threading.Lock()

    @property
    def current(self) -> SecDownloadConfig:
        return self._config

    def replace(self, config: SecDownloadConfig) -> SecDownloadConfig:
        """Install a new configuration wholesale."""
        with self._lock:
            self._config = config
        logger.info(f"Configuration replaced: {config.to_public_dict()}")
        return config

    def merge(self, options: Mapping[str, Any]) -> SecDownloadConfig:
        """
        Override only the supplied options.

        Args:
            options: Option name to value; see SecDownloadConfig.merged()

        Returns:
            The newly active configuration

        Raises:
            InvalidConfigurationError: If an option is unknown or invalid;
                the active configuration is left unchanged
        """
        with self._lock:
            config = self._config.merged(options)
            self._config = config
        logger.info(f"Configuration updated: {sorted(options)}")
        return config
