"""Keyring backend that shells out to the ``keyring`` command.

Each operation spawns one agent process and talks to it over its standard
streams:

- ``keyring get <service> <username>`` prints the newline-terminated password
  on stdout and exits 0, or exits non-zero when there is no entry.
- ``keyring set <service> <username>`` reads the password from stdin.
- ``keyring del <service> <username>`` removes the entry.

The agent signals every failure solely through its exit code, so "not found"
and "agent broken" are indistinguishable here. Nothing is raised to callers:
spawn failures (including arguments with embedded NUL bytes, which cannot be
passed to a process) and undecodable output are logged as warnings, non-zero
exits at debug level, and the operation yields None.
"""

import structlog

from index_keyring.utils.async_subprocess import run_command

log = structlog.get_logger(__name__)

DEFAULT_KEYRING_COMMAND = "keyring"


class SubprocessBackend:
    """Keyring backend delegating to an external agent program.

    Holds no entries itself; every call runs a fresh agent process.

    Args:
        command: Agent executable, resolved on PATH when not absolute
        timeout: Optional seconds to wait for the agent before killing it.
            None (default) waits indefinitely.

    Example:
        >>> backend = SubprocessBackend()
        >>> await backend.store("example.com", "user", "s3cret")
        >>> await backend.fetch("example.com", "user")
        's3cret'
    """

    def __init__(self, command: str = DEFAULT_KEYRING_COMMAND, timeout: float | None = None) -> None:
        self.command = command
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"SubprocessBackend(command={self.command!r}, timeout={self.timeout!r})"

    async def fetch(self, service_name: str, username: str) -> str | None:
        # Agent's stderr goes straight to the user, e.g. for unlock prompts
        try:
            output = await run_command(
                self.command,
                "get",
                service_name,
                username,
                capture_stderr=False,
                timeout=self.timeout,
            )
        except TimeoutError:
            log.warning("keyring_command_timeout", command=self.command, operation="get", timeout=self.timeout)
            return None
        except (OSError, ValueError) as e:
            log.warning("keyring_command_failed", command=self.command, operation="get", error=str(e))
            return None

        if output.returncode != 0:
            log.debug("keyring_entry_not_found", service=service_name, username=username, code=output.returncode)
            return None

        try:
            password = output.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            log.warning("keyring_output_invalid", command=self.command, error=str(e))
            return None

        return _strip_trailing_newline(password)

    async def store(self, service_name: str, username: str, password: str) -> None:
        try:
            output = await run_command(
                self.command,
                "set",
                service_name,
                username,
                input=password.encode("utf-8"),
                timeout=self.timeout,
            )
        except TimeoutError:
            log.warning("keyring_command_timeout", command=self.command, operation="set", timeout=self.timeout)
            return
        except (OSError, ValueError) as e:
            log.warning("keyring_command_failed", command=self.command, operation="set", error=str(e))
            return

        if output.returncode == 0:
            log.debug("keyring_password_saved", service=service_name, username=username)
        else:
            log.debug("keyring_password_not_saved", service=service_name, username=username, code=output.returncode)

    async def delete(self, service_name: str, username: str) -> None:
        try:
            output = await run_command(
                self.command,
                "del",
                service_name,
                username,
                pipe_stdin=True,
                timeout=self.timeout,
            )
        except TimeoutError:
            log.warning("keyring_command_timeout", command=self.command, operation="del", timeout=self.timeout)
            return
        except (OSError, ValueError) as e:
            log.warning("keyring_command_failed", command=self.command, operation="del", error=str(e))
            return

        if output.returncode == 0:
            log.debug("keyring_entry_removed", service=service_name, username=username)
        else:
            log.debug("keyring_entry_not_removed", service=service_name, username=username, code=output.returncode)


def _strip_trailing_newline(value: str) -> str:
    """Remove a single trailing line terminator (``\\n`` or ``\\r\\n``)."""
    if value.endswith("\r\n"):
        return value[:-2]
    if value.endswith("\n"):
        return value[:-1]
    return value
