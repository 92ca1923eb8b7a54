"""Resolve index credentials through a keyring backend.

Lookup order for ``fetch`` follows pip's keyring integration: the full index
URL is tried first, then the bare ``host[:port]``. A URL-scoped entry
therefore wins over a host-scoped one for the same username.

The full-URL service name never carries userinfo, and a URL without a path
is looked up with a trailing slash (``https://example.com/``).

Writes (``set``) and deletions (``unset``) only ever address the host-scoped
entry. ``set`` keeps a non-default port in the key while ``unset`` uses the
host alone.

Request preconditions (URL has a host, URL carries no password, username is
non-empty) are checked with ``assert``. Running under ``python -O`` strips
the checks and a violating request then resolves to no credentials.
"""

import httpx
import structlog

from .backend import KeyringBackend
from .memory_backend import InMemoryBackend
from .models import Credentials
from .subprocess_backend import DEFAULT_KEYRING_COMMAND, SubprocessBackend

log = structlog.get_logger(__name__)

URLTypes = httpx.URL | str


class KeyringProvider:
    """Fetch, store and delete index credentials in a keyring.

    Example:
        >>> provider = KeyringProvider.subprocess()
        >>> await provider.set("https://pypi.example.com/simple", "user", "s3cret")
        >>> await provider.fetch("https://pypi.example.com/simple", "user")
        Credentials(username='user', password='****')
    """

    def __init__(self, backend: KeyringBackend) -> None:
        self.backend = backend

    def __repr__(self) -> str:
        return f"KeyringProvider(backend={self.backend!r})"

    @classmethod
    def subprocess(cls, command: str = DEFAULT_KEYRING_COMMAND, timeout: float | None = None) -> "KeyringProvider":
        """Create a provider backed by the ``keyring`` command-line agent."""
        return cls(SubprocessBackend(command=command, timeout=timeout))

    @classmethod
    def in_memory(cls, entries: dict[tuple[str, str], str] | None = None) -> "KeyringProvider":
        """Create a provider over an in-memory mapping of ``(service, username) -> password``."""
        return cls(InMemoryBackend(entries))

    @classmethod
    def empty(cls) -> "KeyringProvider":
        """Create a provider with no credentials available."""
        return cls(InMemoryBackend())

    async def fetch(self, url: URLTypes, username: str) -> Credentials | None:
        """Fetch credentials for the given URL from the keyring.

        Args:
            url: Index URL; must have a host and no embedded password
            username: Username to look up; must be non-empty

        Returns:
            Credentials for ``username``, or None if no password was found or
            the keyring backend failed.
        """
        parsed = _parse_url(url)
        if parsed is None or not _is_valid_request(parsed, username):
            return None

        # Check the full URL first, without any embedded username
        if parsed.userinfo:
            parsed = parsed.copy_with(username="", password="")
        # Render an empty path as "/"
        if parsed.path == "/":
            parsed = parsed.copy_with(path="/")
        service_name = str(parsed)
        log.debug("keyring_url_lookup", url=service_name, username=username)
        password = await self.backend.fetch(service_name, username)

        # And fall back to a check for the host
        if password is None:
            host = _host_key(parsed, include_port=True)
            log.debug("keyring_host_lookup", host=host, username=username)
            password = await self.backend.fetch(host, username)

        if password is None:
            return None
        return Credentials(username=username, password=password)

    async def set(self, url: URLTypes, username: str, password: str) -> None:
        """Store credentials for the host of the given URL in the keyring.

        The entry is keyed by ``host[:port]``; the URL path is not part of it.
        """
        parsed = _parse_url(url)
        if parsed is None or not _is_valid_request(parsed, username):
            return

        host = _host_key(parsed, include_port=True)
        log.debug("keyring_store", host=host, url=str(parsed), username=username)
        await self.backend.store(host, username, password)

    async def unset(self, url: URLTypes, username: str) -> None:
        """Delete credentials for the host of the given URL from the keyring.

        The entry is keyed by the host alone, without any port.
        """
        parsed = _parse_url(url)
        if parsed is None or not _is_valid_request(parsed, username):
            return

        host = _host_key(parsed, include_port=False)
        log.debug("keyring_delete", host=host, url=str(parsed), username=username)
        await self.backend.delete(host, username)


def _parse_url(url: URLTypes) -> httpx.URL | None:
    if isinstance(url, httpx.URL):
        return url
    try:
        return httpx.URL(url)
    except httpx.InvalidURL as e:
        log.warning("keyring_invalid_url", error=str(e))
        return None


def _is_valid_request(url: httpx.URL, username: str) -> bool:
    has_host = bool(url.raw_host)
    has_no_password = not url.password
    has_username = bool(username)

    assert has_host, "Should only use keyring for urls with host"
    assert has_no_password, "Should only use keyring for urls without a password"
    assert has_username, "Should only use keyring with a username"

    return has_host and has_no_password and has_username


def _host_key(url: httpx.URL, include_port: bool) -> str:
    """Build the ``host[:port]`` service name for a URL.

    Default ports are already dropped by ``httpx.URL``, so a port only
    appears when the URL spells out a non-default one. IPv6 literals are
    bracketed.
    """
    host = url.raw_host.decode("ascii")
    if ":" in host:
        host = f"[{host}]"
    if include_port and url.port is not None:
        return f"{host}:{url.port}"
    return host
