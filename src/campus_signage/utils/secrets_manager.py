"""
Secrets manager for sensitive credentials.

Supported sources:
- Environment variables
- .env files (development)
"""
import os
import logging
from typing import Optional, Dict, Any
from enum import Enum
from functools import lru_cache

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


class SecretSource(Enum):
    """Supported secret sources"""
    ENV = "env"
    DOTENV = "dotenv"


class SecretsManager:
    """Resolves admin credentials, the session secret and API keys."""

    def __init__(self,
                 source: SecretSource = SecretSource.ENV,
                 dotenv_path: str = ".env",
                 config_defaults: Dict[str, Any] = None):
        """
        Initializes the secrets manager.

        Args:
            source: Secret source to use
            dotenv_path: Path to the .env file (when using DOTENV)
            config_defaults: Fallback values, usually taken from the YAML config
        """
        self.source = source
        self.dotenv_path = dotenv_path
        self.config_defaults = config_defaults or {}
        self._dotenv_values: Dict[str, Optional[str]] = {}

        self._init_source()

    def _init_source(self):
        if self.source == SecretSource.DOTENV:
            if os.path.exists(self.dotenv_path):
                self._dotenv_values = dotenv_values(self.dotenv_path)
            else:
                logger.warning(f".env file not found at {self.dotenv_path}. Using system environment variables.")
                self.source = SecretSource.ENV

    @lru_cache(maxsize=128)
    def get_secret(self, key: str, default: str = None) -> Optional[str]:
        """
        Returns a secret from the configured source.

        Environment variables always win so production deployments can
        override anything else.

        Args:
            key: Secret name
            default: Value returned when the secret is not found

        Returns:
            The secret value or ``default``
        """
        env_value = os.environ.get(key)
        if env_value is not None:
            return env_value

        if self.source == SecretSource.DOTENV:
            value = self._dotenv_values.get(key)
            if value is not None:
                return value

        if key in self.config_defaults:
            return self.config_defaults.get(key)

        return default

    def get_admin_credentials(self) -> Dict[str, str]:
        """
        Returns the admin username/password pair.

        Returns:
            Dictionary with ``username`` and ``password`` (empty when unset)
        """
        return {
            "username": self.get_secret("ADMIN_USER", ""),
            "password": self.get_secret("ADMIN_PASS", ""),
        }

    def get_session_secret(self) -> str:
        """Returns the session signing secret, or an empty string."""
        return self.get_secret("SESSION_SECRET") or self.get_secret("NEXTAUTH_SECRET", "")

    def get_weather_api_key(self) -> str:
        return self.get_secret("OPENWEATHER_API_KEY", "")
