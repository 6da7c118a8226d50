"""In-process metrics for SSH probes.

Two series, both labelled by probe name and exit code:
- ``ssh_exit_code``: counter of executions
- ``ssh_output_len``: gauge of the last output length
"""

import threading
from collections import defaultdict

EXIT_CODE_METRIC = "exit_code"
OUTPUT_LEN_METRIC = "output_len"


class ProbeMetrics:
    """Counter and gauge store implementing the MetricsSink protocol."""

    def __init__(self, kind: str = "ssh") -> None:
        """Initialize metrics.

        Args:
            kind: Probe kind, used as the metric name prefix
        """
        self.kind = kind
        self._lock = threading.Lock()
        self._exit_codes: defaultdict[tuple[str, str], int] = defaultdict(int)
        self._output_len: dict[tuple[str, str], float] = {}

    def inc_exit_code(self, name: str, exit_code: int) -> None:
        """Count one execution for (name, exit_code)."""
        with self._lock:
            self._exit_codes[(name, str(exit_code))] += 1

    def set_output_len(self, name: str, exit_code: int, length: int) -> None:
        """Record the output length of the latest execution."""
        with self._lock:
            self._output_len[(name, str(exit_code))] = float(length)

    def exit_code_count(self, name: str, exit_code: int) -> int:
        return self._exit_codes.get((name, str(exit_code)), 0)

    def output_len(self, name: str, exit_code: int) -> float | None:
        return self._output_len.get((name, str(exit_code)))

    def snapshot(self) -> dict[str, list[dict[str, object]]]:
        """Return all samples grouped by metric name."""
        with self._lock:
            return {
                f"{self.kind}_{EXIT_CODE_METRIC}": [
                    {"name": name, "exit": exit_code, "value": value}
                    for (name, exit_code), value in sorted(self._exit_codes.items())
                ],
                f"{self.kind}_{OUTPUT_LEN_METRIC}": [
                    {"name": name, "exit": exit_code, "value": value}
                    for (name, exit_code), value in sorted(self._output_len.items())
                ],
            }
