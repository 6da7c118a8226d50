"""SSH command probe.

One invocation: open the connection (directly or through the bastion),
run the command in one session, classify the outcome, report metrics.
"""

import asyncio
import logging
import time
from datetime import datetime

from sshprobe.config.host_keys import HostKeyVerifier
from sshprobe.config.settings import Settings
from sshprobe.errors import TransportError
from sshprobe.models import (
    BaseProbe,
    ExecutionResult,
    ProbeResult,
    ProbeTarget,
    TransportFailure,
)
from sshprobe.protocols import MetricsSink
from sshprobe.services.bastion import BastionRegistry
from sshprobe.services.classifier import classify
from sshprobe.services.executor import build_command_line, execute
from sshprobe.services.metrics import ProbeMetrics
from sshprobe.services.transport import TransportEstablisher
from sshprobe.utils.output import check_empty

logger = logging.getLogger(__name__)


class SSHProbe:
    """Runs a command on a target over SSH and checks the result.

    Invocations of the same probe are serialized; separate probes share no
    connection state and may run concurrently.
    """

    def __init__(
        self,
        base: BaseProbe,
        target: ProbeTarget,
        metrics: MetricsSink | None = None,
        establisher: TransportEstablisher | None = None,
        command_timeout: float | None = None,
    ) -> None:
        """Initialize probe.

        Args:
            base: Name, timeout and status holder
            target: Where and what to run
            metrics: Metrics sink (ProbeMetrics if not given)
            establisher: Transport establisher (created at configure time if not given)
            command_timeout: Deadline for the remote command; None waits indefinitely
        """
        self.base = base
        self.target = target
        self.metrics = metrics
        self.establisher = establisher
        self.command_timeout = command_timeout
        self._lock = asyncio.Lock()
        self._configured = False

    @property
    def name(self) -> str:
        return self.base.name

    @property
    def command_line(self) -> str:
        """Command and arguments, without the env exports."""
        return build_command_line(self.target.command, self.target.args)

    def configure(self, registry: BastionRegistry, settings: Settings) -> None:
        """Validate credentials, attach the bastion and resolve the target.

        Args:
            registry: Loaded bastion registry
            settings: Application settings

        Raises:
            ConfigError: If neither password nor private key is set
            ResolveError: If the target host cannot be resolved
        """
        label = self.base.label
        self.base.endpoint = self.command_line

        bastion_id = self.target.bastion_id
        if bastion_id:
            bastion, found = registry.lookup(bastion_id)
            if found and bastion is not None:
                logger.debug("%s - has the bastion [%s]", label, bastion.host)
                self.target.bastion = bastion
            else:
                logger.warning("%s - wrong bastion [%s]", label, bastion_id)
                self.target.bastion = None

        self.target.endpoint.resolve(resolve_dns=not self.target.uses_bastion)

        if self.command_timeout is None:
            self.command_timeout = settings.command_timeout
        if self.establisher is None:
            verifier = HostKeyVerifier(
                known_hosts_path=settings.known_hosts,
                strict_checking=settings.strict_host_key_checking,
            )
            self.establisher = TransportEstablisher(verifier.get_known_hosts_path())
        if self.metrics is None:
            self.metrics = ProbeMetrics(self.base.kind)

        self._configured = True
        logger.debug("%s configuration: %s", label, self.target)

    async def probe(self) -> ProbeResult:
        """Run one check and record its status.

        Returns:
            ProbeResult; check failures are reported here, not raised
        """
        if not self._configured:
            raise RuntimeError(f"{self.base.label} probe is not configured")

        async with self._lock:
            started_at = datetime.now()
            start = time.monotonic()

            result = await self._do_probe()

            round_trip_ms = (time.monotonic() - start) * 1000
            self.base.record(result, started_at, round_trip_ms)
            logger.debug("%s - finished in %.2fms", self.base.label, round_trip_ms)
            return result

    async def _do_probe(self) -> ProbeResult:
        label = self.base.label
        execution = await self.run_command()
        result = classify(execution, self.target.contain, self.target.not_contain)

        if not result.success:
            logger.error("%s %s", label, result.message)

        logger.debug("%s - %s", label, self.command_line)
        if result.success:
            output = execution.stdout.decode("utf-8", errors="replace")
        else:
            output = execution.stderr.decode("utf-8", errors="replace")
        logger.debug("%s - %s", label, check_empty(output))

        self.export_metrics(result)
        return result

    async def run_command(self) -> ExecutionResult:
        """Connect, run the command and close every connection.

        Returns:
            ExecutionResult; connection failures become TransportFailure
        """
        if self.establisher is None:
            raise RuntimeError(f"{self.base.label} probe is not configured")
        line = build_command_line(self.target.command, self.target.args, self.target.env)
        try:
            async with self.establisher.open(self.target, self.base.timeout) as live:
                return await execute(live, line, self.command_timeout)
        except TransportError as e:
            return ExecutionResult(b"", b"", TransportFailure(e.stage, e))

    async def abort(self) -> None:
        """Close the connections of the invocation in flight."""
        if self.establisher is not None:
            await self.establisher.abort()

    def export_metrics(self, result: ProbeResult) -> None:
        """Report exit code count and output length."""
        if self.metrics is None:
            return
        self.metrics.inc_exit_code(self.base.name, result.exit_code)
        self.metrics.set_output_len(self.base.name, result.exit_code, result.output_len)
