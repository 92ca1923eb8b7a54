"""CLI commands for index credential management.

This module provides the ``index-keyring credentials`` command group. Each
command resolves a configured index by name, talks to the keyring through a
``KeyringProvider`` and keeps the auth config (index name to username
mapping) in sync.

Commands:
    - add: Store a password for an index and remember its username
    - list: Show which configured indexes have credentials
    - unset: Remove an index's password and forget its username
    - get: Look up credentials for an arbitrary URL (masked by default)

Example:
    Store and inspect credentials::

        $ index-keyring credentials add internal --username alice
        $ index-keyring credentials list
        $ index-keyring credentials unset internal --username alice
"""

import asyncio
import sys

import click
import httpx
import structlog

from index_keyring.config import AuthConfig, Index, KeyringSettings, find_index
from index_keyring.credentials import Credentials, KeyringProvider
from index_keyring.exceptions import (
    CredentialError,
    CredentialInputError,
    IndexKeyringError,
    KeyringUnavailableError,
)

log = structlog.get_logger(__name__)


@click.group(name="credentials")
def credentials_group():
    """Manage keyring credentials for package indexes.

    Passwords are stored by the external `keyring` agent; the username used
    for each index is recorded in the auth config file.

    Examples:

        # Store credentials for the index named "internal"
        index-keyring credentials add internal --username alice

        # Show which indexes have credentials
        index-keyring credentials list

        # Remove credentials
        index-keyring credentials unset internal --username alice
    """
    pass


@credentials_group.command(name="add")
@click.argument("name")
@click.option("--username", help="Username for the index (will prompt if not provided)")
@click.option("--password", help="Password for the index (will prompt if not provided)")
@click.pass_context
def add_credentials(ctx: click.Context, name: str, username: str | None, password: str | None):
    """Store credentials for the index NAME."""
    settings = _settings(ctx)
    _run(_add_credentials(settings, name, username, password))
    click.echo(click.style(f"Credentials stored for index '{name}'", fg="green"))


@credentials_group.command(name="list")
@click.pass_context
def list_credentials(ctx: click.Context):
    """List configured indexes and whether they have credentials."""
    settings = _settings(ctx)
    for line in _run(_list_credentials(settings)):
        click.echo(line)


@credentials_group.command(name="unset")
@click.argument("name")
@click.option("--username", help="Username for the index (will prompt if not provided)")
@click.pass_context
def unset_credentials(ctx: click.Context, name: str, username: str | None):
    """Remove credentials for the index NAME."""
    settings = _settings(ctx)
    _run(_unset_credentials(settings, name, username))
    click.echo(click.style(f"Credentials removed for index '{name}'", fg="green"))


@credentials_group.command(name="get")
@click.argument("url")
@click.option("--username", required=True, help="Username to look up")
@click.option("--show-password", is_flag=True, help="Show full password (default: masked)")
@click.pass_context
def get_credentials(ctx: click.Context, url: str, username: str, show_password: bool):
    """Look up credentials for URL in the keyring.

    The full URL is tried first, then its host.
    """
    settings = _settings(ctx)
    credentials = _run(_get_credentials(settings, url, username))

    if credentials is None or credentials.password is None:
        click.echo(click.style(f"No credentials found for {url}", fg="yellow"), err=True)
        sys.exit(1)

    click.echo(f"Username: {credentials.username}")
    if show_password:
        click.echo(f"Password: {credentials.password}")
    else:
        click.echo(f"Password: {_mask(credentials.password)}")
        click.echo(click.style("Use --show-password to display the full password", fg="yellow"))


async def _add_credentials(
    settings: KeyringSettings,
    name: str,
    username: str | None,
    password: str | None,
) -> None:
    provider = _require_provider(settings)
    index = find_index(_indexes(settings), name)

    username = username or _prompt_username()
    password = password or _prompt_password()

    log.debug("storing_index_credentials", index=name, url=str(index.url), username=username)
    await provider.set(index.url, username, password)

    path = settings.auth_config_file
    auth_config = AuthConfig.load(path)
    auth_config.add_entry(name, username)
    auth_config.store(path)


async def _get_credentials(settings: KeyringSettings, url: str, username: str) -> Credentials | None:
    provider = _require_provider(settings)

    if not username:
        raise CredentialInputError("Username must not be empty", suggestion="Pass a non-empty --username")
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise CredentialInputError(f"Invalid URL: {e}") from e
    if not parsed.host:
        raise CredentialInputError(f"URL has no host: {url}")
    if parsed.password:
        raise CredentialInputError("URL must not embed a password")

    return await provider.fetch(parsed, username)


async def _list_credentials(settings: KeyringSettings) -> list[str]:
    provider = _require_provider(settings)
    auth_config = AuthConfig.load(settings.auth_config_file)

    lines = []
    for index in _indexes(settings):
        auth_index = auth_config.indexes.get(index.name)
        if auth_index is None:
            continue
        credentials = await provider.fetch(index.url, auth_index.username)
        if credentials is not None:
            lines.append(f"Index: '{index.name}' authenticates with username '{auth_index.username}'.")
        else:
            lines.append(f"Index: '{index.name}' has no credentials.")
    return lines


async def _unset_credentials(settings: KeyringSettings, name: str, username: str | None) -> None:
    provider = _require_provider(settings)
    index = find_index(_indexes(settings), name)

    username = username or _prompt_username()

    log.debug("removing_index_credentials", index=name, url=str(index.url), username=username)
    await provider.unset(index.url, username)

    path = settings.auth_config_file
    auth_config = AuthConfig.load(path)
    if not auth_config.delete_entry(name):
        log.debug("auth_config_entry_missing", index=name)
    auth_config.store(path)


def _settings(ctx: click.Context) -> KeyringSettings:
    obj = ctx.obj or {}
    settings = obj.get("settings")
    return settings if settings is not None else KeyringSettings()


def _indexes(settings: KeyringSettings) -> list[Index]:
    return [Index.from_config(config) for config in settings.indexes]


def _require_provider(settings: KeyringSettings) -> KeyringProvider:
    provider = settings.keyring()
    if provider is None:
        raise KeyringUnavailableError(
            "Keyring provider is disabled",
            suggestion="Set keyring_provider: subprocess (or INDEX_KEYRING_KEYRING_PROVIDER=subprocess)",
        )
    return provider


def _stdin_is_terminal() -> bool:
    return sys.stdin.isatty()


def _prompt_username() -> str:
    if not _stdin_is_terminal():
        raise CredentialInputError(
            "No username provided and could not read username from input",
            suggestion="Pass --username",
        )
    return click.prompt("Enter username", err=True)


def _prompt_password() -> str:
    if not _stdin_is_terminal():
        raise CredentialInputError(
            "No password provided and could not read password from input",
            suggestion="Pass --password",
        )
    return click.prompt("Enter password", hide_input=True, err=True)


def _mask(value: str) -> str:
    if len(value) > 8:
        return value[:2] + "*" * (len(value) - 4) + value[-2:]
    return "*" * len(value)


def _run(coro):
    """Run a coroutine for a command, turning domain errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except CredentialError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        if e.suggestion:
            click.echo(click.style(f"Suggestion: {e.suggestion}", fg="yellow"), err=True)
        sys.exit(1)
    except IndexKeyringError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)
