"""Services for sshprobe."""

from sshprobe.services.bastion import BastionRegistry
from sshprobe.services.classifier import SUCCESS_MESSAGE, classify
from sshprobe.services.executor import build_command_line, execute
from sshprobe.services.metrics import ProbeMetrics
from sshprobe.services.probe import SSHProbe
from sshprobe.services.runner import run_probes
from sshprobe.services.transport import (
    BASTION_STAGE,
    SERVER_STAGE,
    LiveConnection,
    TransportEstablisher,
    disable_linger,
)

__all__ = [
    "BASTION_STAGE",
    "SERVER_STAGE",
    "SUCCESS_MESSAGE",
    "BastionRegistry",
    "LiveConnection",
    "ProbeMetrics",
    "SSHProbe",
    "TransportEstablisher",
    "build_command_line",
    "classify",
    "disable_linger",
    "execute",
    "run_probes",
]
