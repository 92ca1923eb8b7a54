"""Enumerations for index-keyring."""

from enum import Enum

from index_keyring.credentials import KeyringProvider


class KeyringProviderType(str, Enum):
    """How credentials for package indexes are looked up.

    - disabled: never consult a keyring
    - subprocess: run the ``keyring`` command-line agent
    """

    DISABLED = "disabled"
    SUBPROCESS = "subprocess"

    def __str__(self) -> str:
        return self.value

    def to_provider(self, command: str = "keyring", timeout: float | None = None) -> KeyringProvider | None:
        """Build the keyring provider for this type.

        Args:
            command: Agent executable used by the subprocess provider
            timeout: Optional per-call timeout for the agent, in seconds

        Returns:
            A KeyringProvider, or None when the keyring is disabled
        """
        if self == KeyringProviderType.SUBPROCESS:
            return KeyringProvider.subprocess(command=command, timeout=timeout)
        return None
