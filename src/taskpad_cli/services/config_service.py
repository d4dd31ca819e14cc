"""Configuration service for managing taskpad configuration.

This module provides the ConfigService class, the single source of truth
for configuration in taskpad. It handles:

- Loading and saving config.json
- Dot-separated get/set/reset of individual keys
- Environment overrides for the API base URL and identity API key
- Credential storage for the signed-in user
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel

from taskpad_cli.models.config_models import AppConfig

API_BASE_URL_ENV = "TASKPAD_API_BASE_URL"
AUTH_API_KEY_ENV = "TASKPAD_AUTH_API_KEY"


class ConfigService:
    """Service for managing application configuration and credentials."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("taskpad_cli"))
        self.config_path = self.config_dir / "config.json"
        self.credentials_path = self.config_dir / "credentials.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def api_endpoint(self) -> str:
        """Base URL of the task API, honouring the environment override."""
        env_url = os.getenv(API_BASE_URL_ENV)
        if env_url:
            return env_url.rstrip("/")
        return self.config.api.endpoint

    @property
    def auth_api_key(self) -> str:
        """Identity provider API key, honouring the environment override."""
        return os.getenv(AUTH_API_KEY_ENV) or self.config.auth.api_key

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self):
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return _lookup(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name an existing setting
            pydantic.ValidationError: If the value is rejected by the model
        """
        if _lookup(self.config, key) is None:
            raise KeyError(key)

        keys = key.split(".")
        config_dict = self.config.model_dump()
        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        self._config = AppConfig.model_validate(config_dict)
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset the whole configuration, or a single key, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
            return

        default_value = _lookup(AppConfig(), key)
        if default_value is None:
            raise KeyError(key)
        self.set(key, default_value)

    def load_credentials(self) -> dict | None:
        """Load stored credentials for the signed-in user, if any."""
        if not self.credentials_path.exists():
            return None

        try:
            with open(self.credentials_path, encoding="utf-8") as f:
                return json.load(f)
        except JSONDecodeError:
            return None

    def save_credentials(self, credentials: dict) -> None:
        """Persist credentials with owner-only permissions."""
        self.credentials_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.credentials_path, "w", encoding="utf-8") as f:
            json.dump(credentials, f, indent=2)

        self.credentials_path.chmod(0o600)

    def clear_credentials(self) -> None:
        """Remove stored credentials."""
        if self.credentials_path.exists():
            self.credentials_path.unlink()


def _lookup(config: BaseModel, key: str) -> Any:
    value: Any = config
    for k in key.split("."):
        if isinstance(value, BaseModel):
            value = getattr(value, k, None)
        else:
            return None
    return value


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
