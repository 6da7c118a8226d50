"""Probe target data model."""

from dataclasses import dataclass, field

from sshprobe.models.endpoint import Endpoint


@dataclass
class ProbeTarget:
    """What to run and where.

    ``bastion`` is filled in at configure time from ``bastion_id``; it stays
    None when no bastion is referenced or the reference is unknown.
    """

    endpoint: Endpoint
    command: str
    args: list[str] = field(default_factory=list)
    env: list[str] = field(default_factory=list)
    contain: str = ""
    not_contain: str = ""
    bastion_id: str = ""
    bastion: Endpoint | None = field(default=None, repr=False)

    @property
    def uses_bastion(self) -> bool:
        return self.bastion is not None and bool(self.bastion.host)
