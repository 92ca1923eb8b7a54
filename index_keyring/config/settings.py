"""
Configuration system using Pydantic for type-safe settings management.

Settings come from a YAML file (with ``${VAR}`` interpolation) and from
``INDEX_KEYRING_*`` environment variables.

Example YAML::

    keyring_provider: subprocess
    keyring_command: keyring
    indexes:
      - name: internal
        url: https://pypi.internal.example.com/simple
      - name: mirror
        url: ${MIRROR_URL:-https://mirror.example.com/simple}
"""

from __future__ import annotations

import os
import re
from pathlib import Path

import httpx
import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from index_keyring.credentials import KeyringProvider
from index_keyring.enums import KeyringProviderType
from index_keyring.exceptions import ConfigurationError

APP_DIR_NAME = "index-keyring"
AUTH_CONFIG_FILENAME = "auth.yaml"


def default_auth_config_path() -> Path:
    """Location of the auth config file when none is configured.

    Uses ``$XDG_CONFIG_HOME/index-keyring/auth.yaml``, falling back to
    ``~/.config/index-keyring/auth.yaml``.
    """
    config_home = os.getenv("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / APP_DIR_NAME / AUTH_CONFIG_FILENAME


class IndexConfig(BaseModel):
    """A named package index."""

    name: str = Field(..., min_length=1, description="Index name used on the command line")
    url: str = Field(..., description="Index URL (e.g. https://pypi.example.com/simple)")

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise ValueError(f"Invalid index URL {value!r}: {e}") from e
        if url.scheme not in ("http", "https"):
            raise ValueError(f"Index URL must start with http:// or https://, got: {value}")
        if not url.host:
            raise ValueError(f"Index URL must include a host, got: {value}")
        if url.password:
            raise ValueError("Index URL must not embed a password; store it in the keyring instead")
        return value


class KeyringSettings(BaseSettings):
    """Main index-keyring settings."""

    model_config = SettingsConfigDict(
        env_prefix="INDEX_KEYRING_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    keyring_provider: KeyringProviderType = Field(
        default=KeyringProviderType.SUBPROCESS,
        description="Keyring lookup strategy (subprocess or disabled)",
    )
    keyring_command: str = Field(default="keyring", min_length=1, description="Keyring agent executable")
    keyring_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds to wait for the keyring agent (None waits indefinitely)",
    )
    auth_config_path: Path | None = Field(
        default=None,
        description="Path of the auth config file mapping index names to usernames",
    )
    indexes: list[IndexConfig] = Field(default_factory=list, description="Configured package indexes")

    @field_validator("indexes")
    @classmethod
    def validate_unique_names(cls, value: list[IndexConfig]) -> list[IndexConfig]:
        seen: set[str] = set()
        for index in value:
            if index.name in seen:
                raise ValueError(f"Duplicate index name: {index.name}")
            seen.add(index.name)
        return value

    @property
    def auth_config_file(self) -> Path:
        """Auth config location, falling back to the per-user default."""
        return self.auth_config_path or default_auth_config_path()

    def keyring(self) -> KeyringProvider | None:
        """Build the configured keyring provider (None when disabled)."""
        return self.keyring_provider.to_provider(command=self.keyring_command, timeout=self.keyring_timeout)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> KeyringSettings:
        """Load settings from YAML file with environment variable interpolation.

        Supports ${VAR_NAME} syntax for environment variable substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            KeyringSettings instance

        Raises:
            ConfigurationError: If config file is invalid or missing required fields
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            yaml_content = config_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**config_dict)
        except Exception as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        Supports two syntaxes:
        - ${VAR_NAME} - Required environment variable (raises if not set)
        - ${VAR_NAME:-default} - Optional with default value

        YAML comment lines are left unchanged.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        def process_line(line: str) -> str:
            if line.lstrip().startswith("#"):
                return line
            return pattern.sub(replace_var, line)

        return "\n".join(process_line(line) for line in content.split("\n"))
