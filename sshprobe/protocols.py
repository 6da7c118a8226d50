"""Protocol interfaces for dependency inversion.

Probes are driven by an external scheduler through two capabilities:

    from sshprobe.protocols import Configurable, Probeable

    def schedule(probe: Probeable) -> None:
        '''Scheduler depends on the capability, not on SSHProbe.'''
        ...

Metrics go to any object with the MetricsSink methods, so a Prometheus
or StatsD adapter can replace the in-process ProbeMetrics.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from sshprobe.models import ProbeResult

if TYPE_CHECKING:
    from sshprobe.config.settings import Settings
    from sshprobe.services.bastion import BastionRegistry


@runtime_checkable
class MetricsSink(Protocol):
    """Write-only sink for probe metrics."""

    def inc_exit_code(self, name: str, exit_code: int) -> None:
        """Increment the execution counter for (name, exit_code)."""
        ...

    def set_output_len(self, name: str, exit_code: int, length: int) -> None:
        """Set the output length gauge for (name, exit_code)."""
        ...


@runtime_checkable
class Configurable(Protocol):
    """Something that validates and resolves its configuration once."""

    def configure(self, registry: "BastionRegistry", settings: "Settings") -> None:
        """Validate and resolve configuration.

        Raises:
            ConfigError: If the configuration is invalid
            ResolveError: If a host cannot be resolved
        """
        ...


@runtime_checkable
class Probeable(Protocol):
    """Something that can be probed."""

    @property
    def name(self) -> str:
        """Probe name."""
        ...

    async def probe(self) -> ProbeResult:
        """Run one check. Never raises for check failures."""
        ...
