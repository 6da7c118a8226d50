"""Run a set of probes once, concurrently."""

import asyncio
import logging
from collections.abc import Iterable

from sshprobe.models import ProbeResult
from sshprobe.protocols import Probeable

logger = logging.getLogger(__name__)


async def run_probes(probes: Iterable[Probeable]) -> dict[str, ProbeResult]:
    """Run every probe once.

    Args:
        probes: Configured probes (names must be unique)

    Returns:
        Dict of {probe name: ProbeResult}
    """
    probes = list(probes)
    if not probes:
        return {}

    logger.info("Running %d probe(s)", len(probes))
    results = await asyncio.gather(*(p.probe() for p in probes))

    passed = sum(1 for r in results if r.success)
    logger.info("Probes completed: %d passed, %d failed", passed, len(results) - passed)
    return {p.name: r for p, r in zip(probes, results)}
