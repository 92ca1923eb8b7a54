"""Unit tests for index_keyring.main CLI entry point.

Covers configuration discovery, config error reporting and the global
logging options.
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from index_keyring.main import cli


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def disabled_config(tmp_path):
    """Settings file that disables the keyring provider."""
    config_path = tmp_path / "disabled.yaml"
    config_path.write_text("keyring_provider: disabled\n")
    return config_path


class TestHelp:
    """Tests for help output."""

    def test_main_help(self, cli_runner):
        """Test main CLI help lists the credentials group."""
        result = cli_runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "credentials" in result.output
        assert "--config" in result.output

    def test_credentials_help(self, cli_runner):
        """Test credentials group help lists every command."""
        result = cli_runner.invoke(cli, ["credentials", "--help"])

        assert result.exit_code == 0
        for command in ("add", "list", "unset", "get"):
            assert command in result.output


class TestConfigLoading:
    """Tests for configuration file handling."""

    def test_missing_config_file(self, cli_runner, tmp_path):
        """Test an explicit config path that does not exist is an error."""
        missing = tmp_path / "missing.yaml"

        result = cli_runner.invoke(cli, ["--config", str(missing), "credentials", "list"])

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output

    def test_invalid_yaml(self, cli_runner, tmp_path):
        """Test malformed YAML is reported without a traceback."""
        config_path = tmp_path / "broken.yaml"
        config_path.write_text("indexes: [\n")

        result = cli_runner.invoke(cli, ["--config", str(config_path), "credentials", "list"])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Traceback" not in result.output

    def test_invalid_values(self, cli_runner, tmp_path):
        """Test values rejected by validation are reported."""
        config_path = tmp_path / "invalid.yaml"
        config_path.write_text("keyring_provider: bogus\n")

        result = cli_runner.invoke(cli, ["--config", str(config_path), "credentials", "list"])

        assert result.exit_code == 1
        assert "Failed to validate configuration" in result.output

    def test_config_from_environment_variable(self, cli_runner, disabled_config):
        """Test INDEX_KEYRING_CONFIG selects the settings file."""
        result = cli_runner.invoke(
            cli,
            ["credentials", "list"],
            env={"INDEX_KEYRING_CONFIG": str(disabled_config)},
        )

        assert result.exit_code == 1
        assert "Keyring provider is disabled" in result.output

    def test_default_config_file_discovered(self, cli_runner, tmp_path, monkeypatch):
        """Test ./index-keyring.yaml is used when no --config is given."""
        (tmp_path / "index-keyring.yaml").write_text("keyring_provider: disabled\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("INDEX_KEYRING_CONFIG", raising=False)

        result = cli_runner.invoke(cli, ["credentials", "list"])

        assert result.exit_code == 1
        assert "Keyring provider is disabled" in result.output

    def test_no_config_file_uses_environment(self, cli_runner, tmp_path, monkeypatch):
        """Test settings come from the environment when no file exists."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("INDEX_KEYRING_CONFIG", raising=False)
        monkeypatch.setenv("INDEX_KEYRING_KEYRING_PROVIDER", "disabled")

        result = cli_runner.invoke(cli, ["credentials", "list"])

        assert result.exit_code == 1
        assert "Keyring provider is disabled" in result.output


class TestLoggingOptions:
    """Tests for the global logging options."""

    def test_log_level_passed_through(self, cli_runner, disabled_config):
        """Test --log-level and --json-logs configure structlog."""
        with patch("index_keyring.main.configure_logging") as mock_configure:
            cli_runner.invoke(
                cli,
                ["--config", str(disabled_config), "--log-level", "DEBUG", "--json-logs", "credentials", "list"],
            )

        mock_configure.assert_called_once_with("DEBUG", json_output=True)

    def test_default_log_level(self, cli_runner, disabled_config):
        """Test logging defaults to WARNING with console output."""
        with patch("index_keyring.main.configure_logging") as mock_configure:
            cli_runner.invoke(cli, ["--config", str(disabled_config), "credentials", "list"])

        mock_configure.assert_called_once_with("WARNING", json_output=False)
