"""CLI commands for index-keyring.

The CLI is built using Click with the main entry point ``index-keyring``
(``index_keyring.main:cli``).

Key Commands:
    credentials (index_keyring.cli.credentials):
        Command group for adding, listing, removing and looking up keyring
        credentials of configured package indexes.
"""
