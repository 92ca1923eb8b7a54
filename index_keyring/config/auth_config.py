"""Persisted mapping of index names to the usernames they authenticate with.

Passwords are never written here; they live in the keyring. The file is
YAML::

    indexes:
      internal:
        username: alice
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError

from index_keyring.exceptions import AuthConfigError

log = structlog.get_logger(__name__)


class AuthIndex(BaseModel):
    """Authentication settings for one index."""

    username: str = Field(..., min_length=1)


class AuthConfig(BaseModel):
    """Index name to username associations."""

    indexes: dict[str, AuthIndex] = Field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> AuthConfig:
        """Load the auth config, returning an empty one if the file does not exist.

        Raises:
            AuthConfigError: If the file cannot be read or is malformed
        """
        if not path.exists():
            log.debug("auth_config_missing", path=str(path))
            return cls()

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise AuthConfigError(f"Cannot read auth config: {e}", path=str(path)) from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise AuthConfigError(f"Invalid YAML in auth config: {e}", path=str(path)) from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise AuthConfigError("Auth config must be a YAML object", path=str(path))

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise AuthConfigError(f"Invalid auth config: {e}", path=str(path)) from e

    def add_entry(self, name: str, username: str) -> None:
        """Record that index ``name`` authenticates as ``username``."""
        self.indexes[name] = AuthIndex(username=username)

    def delete_entry(self, name: str) -> bool:
        """Forget index ``name``.

        Returns:
            True if an entry was removed, False if there was none
        """
        return self.indexes.pop(name, None) is not None

    def store(self, path: Path) -> None:
        """Write the auth config, creating parent directories as needed.

        Raises:
            AuthConfigError: If the file cannot be written
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(yaml.safe_dump(self.model_dump(), sort_keys=True), encoding="utf-8")
        except OSError as e:
            raise AuthConfigError(f"Cannot write auth config: {e}", path=str(path)) from e
        log.debug("auth_config_stored", path=str(path), indexes=len(self.indexes))
