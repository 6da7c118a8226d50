"""Remote command execution over a live SSH connection."""

import logging
import signal

import asyncssh

from sshprobe.models import (
    ExecutionResult,
    ExitedWithCode,
    ExitStatusUnavailable,
    TransportFailure,
)
from sshprobe.services.transport import LiveConnection
from sshprobe.utils.shell import command_line, env_exports

logger = logging.getLogger(__name__)

# Exit status reported for a signal without a known number
SIGNAL_EXIT_BASE = 128


def build_command_line(
    command: str,
    args: list[str] | None = None,
    env: list[str] | None = None,
) -> str:
    """Build the single shell line sent to the remote.

    Environment assignments are prepended as ``export`` statements instead
    of SSH env requests, so they work regardless of the server's AcceptEnv.

    Args:
        command: Command to run
        args: Command arguments
        env: ``NAME=VALUE`` assignments

    Returns:
        Shell command line
    """
    return env_exports(env) + command_line(command, args)


async def execute(
    live: LiveConnection,
    line: str,
    timeout: float | None = None,
) -> ExecutionResult:
    """Run one command in a new session and capture all of its output.

    Args:
        live: Connection to run on (one session is opened per call)
        line: Shell command line
        timeout: Deadline for the command, or None to wait indefinitely

    Returns:
        ExecutionResult with stdout, stderr and the tagged outcome
    """
    try:
        result = await live.connection.run(
            line,
            check=False,
            encoding=None,
            timeout=timeout,
        )
    except asyncssh.TimeoutError as e:
        logger.warning("Command on %s timed out after %ss", live.endpoint.resolved, timeout)
        return ExecutionResult(
            stdout=_as_bytes(e.stdout),
            stderr=_as_bytes(e.stderr),
            outcome=ExitStatusUnavailable(f"command timed out after {timeout}s"),
        )
    except asyncssh.ChannelOpenError as e:
        return ExecutionResult(b"", b"", TransportFailure(live.stage, e))
    except (asyncssh.Error, OSError) as e:
        # Connection dropped (or was aborted) mid-command
        return ExecutionResult(b"", b"", TransportFailure(live.stage, e))

    return ExecutionResult(
        stdout=_as_bytes(result.stdout),
        stderr=_as_bytes(result.stderr),
        outcome=_outcome(result.exit_status, result.exit_signal),
    )


def _outcome(
    exit_status: int | None,
    exit_signal: tuple[str, bool, str, str] | None,
) -> ExitedWithCode | ExitStatusUnavailable:
    """Decide the outcome from what the remote reported.

    A signal without a status maps to 128 + signal number, the same
    convention shells use.
    """
    if exit_status is not None and exit_status >= 0:
        if exit_signal:
            return ExitedWithCode(exit_status, signal=exit_signal[0])
        return ExitedWithCode(exit_status)
    if exit_signal:
        name = exit_signal[0]
        try:
            number = signal.Signals[f"SIG{name}"].value
        except KeyError:
            number = 0
        return ExitedWithCode(SIGNAL_EXIT_BASE + number, signal=name)
    return ExitStatusUnavailable()


def _as_bytes(data: bytes | str | None) -> bytes:
    if data is None:
        return b""
    if isinstance(data, str):
        return data.encode("utf-8")
    return data
