"""sshprobe: SSH command probes, direct or through bastion hosts."""

from sshprobe.errors import (
    ConfigError,
    ContentMismatchError,
    DialError,
    ExecutionError,
    HandshakeError,
    ProbeError,
    ResolveError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ContentMismatchError",
    "DialError",
    "ExecutionError",
    "HandshakeError",
    "ProbeError",
    "ResolveError",
    "TransportError",
    "__version__",
]
