"""Probe configuration loading.

Builds a BastionRegistry and configured SSHProbe instances from a mapping
shaped like::

    {
        "bastion": {"aws": {"host": "ubuntu@bastion.example.com:22", "key": "~/.ssh/id_rsa"}},
        "servers": [
            {"name": "web", "host": "10.0.1.5", "username": "ec2-user",
             "password": "...", "cmd": "systemctl is-active nginx",
             "contain": "active", "bastion": "aws"}
        ]
    }
"""

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sshprobe.config.host_keys import HostKeyVerifier
from sshprobe.config.settings import Settings
from sshprobe.errors import ConfigError, ProbeError
from sshprobe.models import BaseProbe, Endpoint, ProbeTarget
from sshprobe.services.bastion import BastionRegistry
from sshprobe.services.metrics import ProbeMetrics
from sshprobe.services.probe import SSHProbe
from sshprobe.services.transport import TransportEstablisher

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Loaded probes and the registry and metrics they share."""

    settings: Settings
    registry: BastionRegistry
    metrics: ProbeMetrics
    probes: list[SSHProbe] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], settings: Settings | None = None) -> "Config":
        """Load bastions and servers from a mapping.

        Servers whose configuration fails are logged and left out.

        Args:
            data: Mapping with optional "bastion" and "servers" keys
            settings: Settings (from environment if not given)

        Returns:
            Config with configured probes
        """
        settings = settings or Settings.from_env()

        registry = BastionRegistry()
        for bastion_id, raw in (data.get("bastion") or {}).items():
            try:
                registry.add(str(bastion_id), parse_endpoint(raw))
            except ConfigError as e:
                logger.error("Bastion Host error: [%s] - %s", bastion_id, e)
        registry.load()

        verifier = HostKeyVerifier(
            known_hosts_path=settings.known_hosts,
            strict_checking=settings.strict_host_key_checking,
        )
        known_hosts = verifier.get_known_hosts_path()

        config = cls(settings=settings, registry=registry, metrics=ProbeMetrics())
        names: set[str] = set()
        for raw in data.get("servers") or []:
            try:
                probe = parse_server(raw, settings)
            except ConfigError as e:
                name = raw.get("name", "") if isinstance(raw, Mapping) else ""
                logger.error("Invalid ssh server entry %r: %s", name, e)
                continue

            if probe.name in names:
                logger.error("%s - duplicate probe name, skipped", probe.base.label)
                continue

            probe.metrics = config.metrics
            probe.establisher = TransportEstablisher(known_hosts)
            try:
                probe.configure(registry, settings)
            except ProbeError as e:
                logger.error("%s - configuration failed: %s", probe.base.label, e)
                continue

            names.add(probe.name)
            config.probes.append(probe)

        logger.info("Configured %d ssh probe(s)", len(config.probes))
        return config

    @classmethod
    def from_file(cls, path: Path | str, settings: Settings | None = None) -> "Config":
        """Load configuration from a JSON file.

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        path = Path(os.path.expanduser(str(path)))
        try:
            data = json.loads(path.read_text())
        except OSError as e:
            raise ConfigError(f"cannot read config {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"config {path} must be a JSON object")

        # Probe definitions may be nested under "ssh" like the other probe kinds
        if "ssh" in data and isinstance(data["ssh"], dict):
            data = data["ssh"]

        logger.debug("Reading probe config from %s", path)
        return cls.from_dict(data, settings)


def parse_endpoint(raw: Mapping[str, Any]) -> Endpoint:
    """Build an Endpoint from a config entry.

    Raises:
        ConfigError: If the host is missing or the port is not a number
    """
    if not isinstance(raw, Mapping):
        raise ConfigError("endpoint must be a mapping")
    host = str(raw.get("host") or "").strip()
    if not host:
        raise ConfigError("host is required")

    port = raw.get("port")
    if port is not None:
        try:
            port = int(port)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"invalid port {port!r}") from e

    key = raw.get("key") or None
    if key:
        key = os.path.expanduser(str(key))

    return Endpoint(
        host=host,
        port=port,
        user=raw.get("username") or None,
        password=raw.get("password") or None,
        private_key=key,
        passphrase=raw.get("passphrase") or None,
    )


def parse_server(raw: Mapping[str, Any], settings: Settings) -> SSHProbe:
    """Build an unconfigured SSHProbe from a server entry.

    Raises:
        ConfigError: If required fields are missing or malformed
    """
    endpoint = parse_endpoint(raw)

    command = str(raw.get("cmd") or "").strip()
    if not command:
        raise ConfigError("cmd is required")

    args = raw.get("args") or []
    env = raw.get("env") or []
    if not isinstance(args, list) or not isinstance(env, list):
        raise ConfigError("args and env must be lists")

    timeout = raw.get("timeout")
    try:
        timeout = float(timeout) if timeout else settings.timeout
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid timeout {timeout!r}") from e

    target = ProbeTarget(
        endpoint=endpoint,
        command=command,
        args=[str(a) for a in args],
        env=[str(e) for e in env],
        contain=str(raw.get("contain") or ""),
        not_contain=str(raw.get("not_contain") or ""),
        bastion_id=str(raw.get("bastion") or ""),
    )
    base = BaseProbe(name=str(raw.get("name") or endpoint.host), timeout=timeout)
    return SSHProbe(base=base, target=target)
