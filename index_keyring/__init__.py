"""index-keyring: keyring-backed credentials for package indexes."""

__version__ = "0.1.0"
