"""Configuration for index-keyring.

Key Components:
    - KeyringSettings: Main settings with YAML loading support
    - IndexConfig / Index: Named package indexes
    - AuthConfig: Persisted index name to username mapping

Example:
    >>> from index_keyring.config import KeyringSettings
    >>> settings = KeyringSettings.from_yaml("index-keyring.yaml")
    >>> provider = settings.keyring()
"""

from .auth_config import AuthConfig, AuthIndex
from .indexes import Index, find_index
from .settings import IndexConfig, KeyringSettings, default_auth_config_path

__all__ = [
    "AuthConfig",
    "AuthIndex",
    "Index",
    "IndexConfig",
    "KeyringSettings",
    "default_auth_config_path",
    "find_index",
]
