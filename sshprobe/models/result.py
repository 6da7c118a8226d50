"""Execution and probe result data models."""

from dataclasses import dataclass

from sshprobe.errors import ExecutionError, TransportError

# Reported when the remote never sent an exit status
UNKNOWN_EXIT_CODE = 255


@dataclass(frozen=True)
class ExitedWithCode:
    """Remote process reported an exit status."""

    code: int
    signal: str | None = None

    def describe(self) -> str:
        if self.signal:
            return f"Process exited with signal {self.signal} (status {self.code})"
        return f"Process exited with status {self.code}"


@dataclass(frozen=True)
class ExitStatusUnavailable:
    """Remote side closed the session without an exit status or signal."""

    reason: str = "remote command exited without exit status or exit signal"

    def describe(self) -> str:
        return self.reason


@dataclass(frozen=True)
class TransportFailure:
    """No command ran: the connection or session could not be set up."""

    stage: str
    cause: Exception | str

    def describe(self) -> str:
        if isinstance(self.cause, TransportError):
            return str(self.cause)
        return f"{self.stage}: {self.cause}"


Outcome = ExitedWithCode | ExitStatusUnavailable | TransportFailure


@dataclass
class ExecutionResult:
    """Output of one remote command execution."""

    stdout: bytes
    stderr: bytes
    outcome: Outcome

    @property
    def exit_code(self) -> int | None:
        """Exit status if the remote reported one."""
        if isinstance(self.outcome, ExitedWithCode):
            return self.outcome.code
        return None

    @property
    def error(self) -> ExecutionError | TransportError | None:
        """Error for this execution, or None if the command exited 0."""
        outcome = self.outcome
        if isinstance(outcome, ExitedWithCode):
            if outcome.code == 0:
                return None
            return ExecutionError(outcome.describe(), exit_code=outcome.code)
        if isinstance(outcome, ExitStatusUnavailable):
            return ExecutionError(f"wait: {outcome.describe()}", exit_code=None)
        if isinstance(outcome.cause, TransportError):
            return outcome.cause
        return TransportError(outcome.stage, outcome.cause)


@dataclass
class ProbeResult:
    """Classified outcome of one probe invocation."""

    success: bool
    message: str
    exit_code: int
    output_len: int = 0
