"""Bastion host registry.

Holds the named bastion endpoints that probe targets refer to by id. The
registry is a plain value handed to each probe at configure time, so tests
and separate config files never share bastions by accident.
"""

import logging
from collections.abc import Iterator, Mapping

from sshprobe.errors import ProbeError
from sshprobe.models import Endpoint

logger = logging.getLogger(__name__)


class BastionRegistry:
    """Mapping of bastion id to Endpoint."""

    def __init__(self, bastions: Mapping[str, Endpoint] | None = None) -> None:
        """Initialize registry.

        Args:
            bastions: Initial id -> Endpoint entries (not yet resolved)
        """
        self._bastions: dict[str, Endpoint] = dict(bastions or {})

    def add(self, bastion_id: str, endpoint: Endpoint) -> None:
        """Register (or replace) a bastion."""
        self._bastions[bastion_id] = endpoint

    def load(self) -> None:
        """Resolve every bastion, dropping the ones that fail.

        Best effort: a broken bastion entry is logged and removed so the
        probes that reference it fall back to direct connections.
        """
        for bastion_id, endpoint in list(self._bastions.items()):
            try:
                endpoint.resolve()
            except ProbeError as e:
                logger.error(
                    "Bastion Host error: [%s / %s] - %s",
                    bastion_id,
                    endpoint.host,
                    e,
                )
                del self._bastions[bastion_id]
                continue
            logger.debug("Bastion [%s] resolved to %s", bastion_id, endpoint.resolved)

        logger.info("Loaded %d bastion host(s)", len(self._bastions))

    def lookup(self, bastion_id: str) -> tuple[Endpoint | None, bool]:
        """Find a bastion by id.

        Returns:
            Tuple of (endpoint, found)
        """
        endpoint = self._bastions.get(bastion_id)
        return endpoint, endpoint is not None

    def __contains__(self, bastion_id: object) -> bool:
        return bastion_id in self._bastions

    def __len__(self) -> int:
        return len(self._bastions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._bastions)
