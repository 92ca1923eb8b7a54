"""Backend protocol for keyring lookups."""

from typing import Protocol


class KeyringBackend(Protocol):
    """Protocol defining the interface for keyring backends.

    A backend addresses entries by ``(service_name, username)``, where
    ``service_name`` is either a full index URL or a ``host[:port]`` string.
    All operations are best-effort: failures are reported as ``None`` (or
    simply swallowed for writes) and never raised.
    """

    async def fetch(self, service_name: str, username: str) -> str | None:
        """Retrieve a password.

        Args:
            service_name: Full URL or ``host[:port]`` key
            username: Username the entry is stored under

        Returns:
            The password, or None if there is no entry or the lookup failed
        """
        ...

    async def store(self, service_name: str, username: str, password: str) -> None:
        """Store a password, overwriting any existing entry.

        Args:
            service_name: Full URL or ``host[:port]`` key
            username: Username to store the entry under
            password: Password to store
        """
        ...

    async def delete(self, service_name: str, username: str) -> None:
        """Delete an entry if it exists.

        Args:
            service_name: Full URL or ``host[:port]`` key
            username: Username the entry is stored under
        """
        ...
