"""Tests for main entry point."""

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from sshprobe.__main__ import configure_logging, main
from sshprobe.config.settings import Settings
from sshprobe.utils.console import ProbeFormatter
from tests.fakes import FakeConnection, completed


@pytest.fixture(autouse=True)
def restore_logger() -> Iterator[None]:
    """Undo handler and propagate changes made by configure_logging."""
    probe_logger = logging.getLogger("sshprobe")
    handlers = list(probe_logger.handlers)
    propagate = probe_logger.propagate
    level = probe_logger.level
    yield
    probe_logger.handlers = handlers
    probe_logger.propagate = propagate
    probe_logger.setLevel(level)


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ("SSHPROBE_CONFIG", "SSHPROBE_LOG_LEVEL", "SSHPROBE_COMMAND_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SSHPROBE_KNOWN_HOSTS", "none")
    return monkeypatch


def write_config(tmp_path: Path, contain: str) -> Path:
    path = tmp_path / "probes.json"
    path.write_text(
        json.dumps(
            {
                "ssh": {
                    "servers": [
                        {
                            "name": "web",
                            "host": "10.0.0.5",
                            "password": "pw",
                            "cmd": "echo",
                            "args": ["OK"],
                            "contain": contain,
                        }
                    ]
                }
            }
        )
    )
    return path


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_attaches_probe_formatter(self) -> None:
        probe_logger = logging.getLogger("sshprobe")
        probe_logger.handlers = []

        configure_logging(Settings(log_level="DEBUG"))

        assert probe_logger.level == logging.DEBUG
        assert len(probe_logger.handlers) == 1
        assert isinstance(probe_logger.handlers[0].formatter, ProbeFormatter)
        assert probe_logger.propagate is False
        assert logging.getLogger("asyncssh").level == logging.WARNING

    def test_is_idempotent(self) -> None:
        probe_logger = logging.getLogger("sshprobe")
        probe_logger.handlers = []

        configure_logging(Settings())
        configure_logging(Settings())

        assert len(probe_logger.handlers) == 1


class TestMain:
    """Tests for main()."""

    def test_missing_config_env(self, env: pytest.MonkeyPatch) -> None:
        assert main() == 2

    def test_unreadable_config(self, env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        env.setenv("SSHPROBE_CONFIG", str(tmp_path / "missing.json"))
        assert main() == 2

    def test_all_probes_pass(self, env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        env.setenv("SSHPROBE_CONFIG", str(write_config(tmp_path, "OK")))

        with patch("asyncssh.connect", new_callable=AsyncMock) as mock_connect:
            mock_connect.return_value = FakeConnection("web", [], result=completed(b"OK\n"))
            assert main() == 0

    def test_failed_probe(self, env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        env.setenv("SSHPROBE_CONFIG", str(write_config(tmp_path, "ready")))

        with patch("asyncssh.connect", new_callable=AsyncMock) as mock_connect:
            mock_connect.return_value = FakeConnection("web", [], result=completed(b"OK\n"))
            assert main() == 1
