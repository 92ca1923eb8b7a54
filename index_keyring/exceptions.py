"""Exception hierarchy for index-keyring.

The credential resolution core (``index_keyring.credentials``) never raises
these: lookups and writes are best-effort and report failure as ``None``.
They are raised by the outer layers (configuration loading, the auth config
store and the CLI) so that callers can report a readable error.

Exception Hierarchy:
    IndexKeyringError (base)
    ├── ConfigurationError
    ├── AuthConfigError
    ├── IndexNotFoundError
    └── CredentialError
        ├── KeyringUnavailableError
        └── CredentialInputError

Example Usage:
    >>> from index_keyring.exceptions import ConfigurationError
    >>> try:
    ...     settings = KeyringSettings.from_yaml(path)
    ... except ConfigurationError as e:
    ...     print(e.message)
"""


class IndexKeyringError(Exception):
    """Base exception for all index-keyring errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(IndexKeyringError):
    """Settings file is missing, unreadable, or contains invalid values."""

    pass


class AuthConfigError(IndexKeyringError):
    """The auth config file (index name to username mapping) is unusable.

    Attributes:
        path: Location of the offending file, if known
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        full_message = f"{message} ({path})" if path else message
        super().__init__(full_message)
        self.message = message


class IndexNotFoundError(IndexKeyringError):
    """No configured index carries the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No index found with the name '{name}'")


class CredentialError(IndexKeyringError):
    """Credential-related errors raised outside the resolution core.

    Attributes:
        message: Human-readable error description
        suggestion: Optional hint on how to resolve the problem
    """

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.suggestion = suggestion

        full_message = message
        if suggestion:
            full_message = f"{message}\nSuggestion: {suggestion}"

        super().__init__(full_message)
        # Preserve original message (super sets self.message to full_message)
        self.message = message


class KeyringUnavailableError(CredentialError):
    """The keyring provider is disabled in the current configuration."""

    pass


class CredentialInputError(CredentialError):
    """A username or password was needed but could not be read from the user."""

    pass
