"""Exception hierarchy for the SSH probe."""


class ProbeError(Exception):
    """Base class for all probe errors."""


class ConfigError(ProbeError):
    """Probe configuration is invalid (e.g. no credential supplied)."""


class ResolveError(ProbeError):
    """Host could not be parsed or resolved into a dialable address."""

    def __init__(self, host: str, reason: str | Exception):
        """Initialize resolve error.

        Args:
            host: Host string as configured
            reason: Why the host could not be resolved
        """
        self.host = host
        self.reason = reason
        super().__init__(f"cannot resolve host [{host}]: {reason}")


class TransportError(ProbeError):
    """Failed to establish an SSH connection.

    The stage localizes the fault: ``Bastion`` means the relay path itself
    is unusable, ``Server`` means the target is unreachable (directly or
    through an otherwise healthy bastion).
    """

    def __init__(self, stage: str, original_error: Exception | str):
        """Initialize transport error.

        Args:
            stage: "Bastion" or "Server"
            original_error: Underlying cause
        """
        self.stage = stage
        self.original_error = original_error
        cause = str(original_error) or type(original_error).__name__
        super().__init__(f"{stage}: {cause}")


class DialError(TransportError):
    """Could not open the stream (socket or tunnel) to the host."""


class HandshakeError(TransportError):
    """Stream opened but SSH negotiation or authentication failed."""


class ExecutionError(ProbeError):
    """Remote command ran but did not exit cleanly."""

    def __init__(self, message: str, exit_code: int | None = None):
        self.exit_code = exit_code
        super().__init__(message)


class ContentMismatchError(ProbeError):
    """Command succeeded but its output broke a content rule."""
