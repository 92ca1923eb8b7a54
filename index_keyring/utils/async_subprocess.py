"""Async subprocess utilities.

Provides non-blocking execution of the external keyring agent for use in
async contexts.

Key Features:
    - Non-blocking execution compatible with asyncio
    - Raw byte capture, so callers decide how to decode agent output
    - Explicit stdin handling: closed, piped and closed unused, or fed a payload
    - Optional timeout; the process is killed and reaped when the timeout is
      exceeded or when the awaiting task is cancelled

Example:
    >>> from index_keyring.utils.async_subprocess import run_command
    >>> output = await run_command("keyring", "get", "example.com", "user")
    >>> if output.returncode == 0:
    ...     print(output.stdout.decode())

Thread Safety:
    Safe to call concurrently from multiple async tasks. Each call creates an
    independent subprocess with no shared state.
"""

import asyncio
import contextlib
from typing import NamedTuple


class CommandOutput(NamedTuple):
    """Collected result of a finished process."""

    stdout: bytes
    stderr: bytes
    returncode: int


async def run_command(
    *args: str,
    input: bytes | None = None,
    pipe_stdin: bool = False,
    capture_stderr: bool = True,
    timeout: float | None = None,
) -> CommandOutput:
    """Run a command asynchronously without shell interpolation.

    Args:
        *args: Command and arguments as separate strings. The first argument
            is the executable.
        input: Bytes written to the process's stdin, which is then closed.
        pipe_stdin: Open stdin as a pipe even when there is no ``input``. The
            pipe is closed without being written to. When False and no
            ``input`` is given, stdin is connected to the null device.
        capture_stderr: If True (default), capture stderr. If False, the
            process inherits the parent's stderr so its messages reach the user.
        timeout: Maximum seconds to wait for completion. None means wait
            indefinitely.

    Returns:
        CommandOutput with raw stdout/stderr bytes (stderr is empty when not
        captured) and the process exit code.

    Raises:
        TimeoutError: If timeout is exceeded. The process is killed before this
            exception is raised.
        asyncio.CancelledError: If the awaiting task is cancelled. The process
            is killed before the cancellation propagates.
        OSError: If the process cannot be started (missing executable,
            permissions, resource exhaustion).
        ValueError: If an argument contains an embedded NUL byte.
    """
    if input is not None or pipe_stdin:
        stdin = asyncio.subprocess.PIPE
    else:
        stdin = asyncio.subprocess.DEVNULL

    process = await asyncio.create_subprocess_exec(
        *args,
        stdin=stdin,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE if capture_stderr else None,
    )

    # communicate(None) leaves a piped stdin open on Python 3.11
    if input is None and stdin == asyncio.subprocess.PIPE:
        process.stdin.close()

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(input),
            timeout=timeout,
        )
    except (TimeoutError, asyncio.CancelledError):
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        await process.wait()
        raise

    return CommandOutput(stdout_bytes or b"", stderr_bytes or b"", process.returncode or 0)
