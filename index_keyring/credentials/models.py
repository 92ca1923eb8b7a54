"""Credential value types."""

import base64
from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    """A resolved username/password pair for a package index.

    Instances are produced by ``KeyringProvider.fetch`` and owned by the
    caller. The password is masked in ``repr`` so that credentials can be
    logged or printed without leaking the secret.

    Example:
        >>> creds = Credentials(username="user", password="s3cret")
        >>> creds
        Credentials(username='user', password='****')
        >>> creds.to_header_value()
        'Basic dXNlcjpzM2NyZXQ='
    """

    username: str | None = None
    password: str | None = None

    def __repr__(self) -> str:
        password = "****" if self.password is not None else None
        return f"Credentials(username={self.username!r}, password={password!r})"

    def is_empty(self) -> bool:
        """Return True when neither a username nor a password is set."""
        return self.username is None and self.password is None

    def to_header_value(self) -> str:
        """Render an HTTP ``Authorization`` header value using Basic auth.

        Missing fields are encoded as empty strings.
        """
        userpass = f"{self.username or ''}:{self.password or ''}"
        token = base64.b64encode(userpass.encode("utf-8")).decode("ascii")
        return f"Basic {token}"
