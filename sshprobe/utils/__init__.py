"""Utility modules for sshprobe."""

from sshprobe.utils.console import ColorfulFormatter, ProbeFormatter
from sshprobe.utils.output import check_empty, check_output
from sshprobe.utils.shell import command_line, env_exports

__all__ = [
    "ColorfulFormatter",
    "ProbeFormatter",
    "check_empty",
    "check_output",
    "command_line",
    "env_exports",
]
