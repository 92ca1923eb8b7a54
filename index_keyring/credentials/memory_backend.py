"""In-memory keyring backend for tests."""

from collections.abc import Iterable, Mapping


class InMemoryBackend:
    """Keyring backend holding entries in a plain dictionary.

    Stands in for the external agent in tests: it never spawns a process,
    and its ``entries`` mapping can be inspected directly in assertions.

    Example:
        >>> backend = InMemoryBackend({("example.com", "user"): "password"})
        >>> await backend.fetch("example.com", "user")
        'password'
    """

    def __init__(
        self,
        entries: Mapping[tuple[str, str], str] | Iterable[tuple[tuple[str, str], str]] | None = None,
    ) -> None:
        self.entries: dict[tuple[str, str], str] = dict(entries or {})

    async def fetch(self, service_name: str, username: str) -> str | None:
        return self.entries.get((service_name, username))

    async def store(self, service_name: str, username: str, password: str) -> None:
        self.entries[(service_name, username)] = password

    async def delete(self, service_name: str, username: str) -> None:
        self.entries.pop((service_name, username), None)
