"""CLI entry point for index-keyring."""

import sys
from pathlib import Path

import click
import structlog

from index_keyring.cli.credentials import credentials_group
from index_keyring.config import KeyringSettings
from index_keyring.exceptions import ConfigurationError
from index_keyring.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)

DEFAULT_CONFIG_FILE = "index-keyring.yaml"


@click.group()
@click.option(
    "--config",
    envvar="INDEX_KEYRING_CONFIG",
    default=None,
    help=f"Path to configuration file (default: ./{DEFAULT_CONFIG_FILE} if present)",
)
@click.option("--log-level", default="WARNING", help="Logging level")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
@click.pass_context
def cli(ctx: click.Context, config: str | None, log_level: str, json_logs: bool) -> None:
    """index-keyring: keyring-backed credentials for package indexes."""
    configure_logging(log_level, json_output=json_logs)

    if config is not None:
        config_path = Path(config)
        if not config_path.exists():
            click.echo(f"Error: Configuration file not found: {config}", err=True)
            sys.exit(1)
    else:
        config_path = Path(DEFAULT_CONFIG_FILE)
        if not config_path.exists():
            log.debug("config_file_absent", path=str(config_path))
            ctx.obj = {"settings": KeyringSettings()}
            return

    try:
        settings = KeyringSettings.from_yaml(config_path)
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("config_error", exc_info=True)
        sys.exit(1)

    ctx.obj = {"settings": settings}


cli.add_command(credentials_group)


if __name__ == "__main__":
    cli()
