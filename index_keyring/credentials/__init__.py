"""Credential resolution for package indexes.

Resolves username/password pairs for index URLs through a keyring backend:
either the external ``keyring`` agent (``SubprocessBackend``) or an in-memory
mapping (``InMemoryBackend``) used by tests.

Example:
    >>> from index_keyring.credentials import KeyringProvider
    >>> provider = KeyringProvider.subprocess()
    >>> creds = await provider.fetch("https://pypi.example.com/simple", "user")
"""

from .backend import KeyringBackend
from .memory_backend import InMemoryBackend
from .models import Credentials
from .provider import KeyringProvider
from .subprocess_backend import SubprocessBackend

__all__ = [
    "Credentials",
    "KeyringBackend",
    "KeyringProvider",
    "InMemoryBackend",
    "SubprocessBackend",
]
