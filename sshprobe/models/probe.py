"""Probe lifecycle data models."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sshprobe.models.result import ProbeResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass
class ProbeStatus:
    """Latest result of a probe with timing."""

    success: bool
    message: str
    exit_code: int
    started_at: datetime
    round_trip_ms: float


@dataclass
class BaseProbe:
    """Name, timeout and last status shared by every probe kind."""

    name: str
    kind: str = "ssh"
    timeout: float = DEFAULT_TIMEOUT
    endpoint: str = ""
    status: ProbeStatus | None = field(default=None, init=False)
    total: int = field(default=0, init=False)
    failures: int = field(default=0, init=False)

    @property
    def label(self) -> str:
        """Log prefix: ``[kind / name]``."""
        return f"[{self.kind} / {self.name}]"

    def record(
        self, result: ProbeResult, started_at: datetime, round_trip_ms: float
    ) -> ProbeStatus:
        """Store the latest result and log up/down transitions.

        Args:
            result: Classified probe result
            started_at: When the invocation began
            round_trip_ms: Wall time of the invocation

        Returns:
            The stored ProbeStatus
        """
        previous = self.status
        self.status = ProbeStatus(
            success=result.success,
            message=result.message,
            exit_code=result.exit_code,
            started_at=started_at,
            round_trip_ms=round_trip_ms,
        )
        self.total += 1
        if not result.success:
            self.failures += 1

        if previous is not None and previous.success != result.success:
            logger.info(
                "%s status changed %s -> %s",
                self.label,
                "up" if previous.success else "down",
                "up" if result.success else "down",
            )
        return self.status
