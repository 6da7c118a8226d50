"""Data models for sshprobe."""

from sshprobe.models.endpoint import Endpoint, ResolvedAddress
from sshprobe.models.probe import BaseProbe, ProbeStatus
from sshprobe.models.result import (
    UNKNOWN_EXIT_CODE,
    ExecutionResult,
    ExitedWithCode,
    ExitStatusUnavailable,
    Outcome,
    ProbeResult,
    TransportFailure,
)
from sshprobe.models.target import ProbeTarget

__all__ = [
    "UNKNOWN_EXIT_CODE",
    "BaseProbe",
    "Endpoint",
    "ExecutionResult",
    "ExitStatusUnavailable",
    "ExitedWithCode",
    "Outcome",
    "ProbeResult",
    "ProbeStatus",
    "ProbeTarget",
    "ResolvedAddress",
    "TransportFailure",
]
