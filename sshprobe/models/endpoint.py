"""SSH endpoint data model."""

import ipaddress
import logging
import socket
from dataclasses import dataclass, field
from typing import Any

from sshprobe.errors import ConfigError, ResolveError

logger = logging.getLogger(__name__)

DEFAULT_PORT = 22
DEFAULT_USER = "root"


@dataclass(frozen=True)
class ResolvedAddress:
    """Dialable address produced by Endpoint.resolve()."""

    host: str
    port: int
    address: str
    user: str | None = None

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass
class Endpoint:
    """Remote SSH access target.

    ``host`` accepts ``host``, ``host:port``, ``user@host:port`` and
    ``[v6addr]:port``. Explicit ``port``/``user`` fields win over the ones
    embedded in the host string.
    """

    host: str
    port: int | None = None
    user: str | None = None
    password: str | None = None
    private_key: str | None = None
    passphrase: str | None = None
    resolved: ResolvedAddress | None = field(default=None, compare=False, repr=False)

    @property
    def has_credential(self) -> bool:
        """True if a password or a private key is set."""
        return bool(self.password) or bool(self.private_key)

    @property
    def username(self) -> str:
        if self.user:
            return self.user
        if self.resolved and self.resolved.user:
            return self.resolved.user
        return DEFAULT_USER

    def resolve(self, resolve_dns: bool = True) -> ResolvedAddress:
        """Validate credentials and resolve the host into an address.

        Args:
            resolve_dns: Look the name up locally. Disabled for targets
                reached through a bastion, where the bastion resolves it.

        Returns:
            The cached ResolvedAddress

        Raises:
            ConfigError: If neither password nor private key is set
            ResolveError: If the host cannot be parsed or resolved
        """
        if not self.has_credential:
            raise ConfigError(f"password or private key is required for [{self.host}]")

        host, port, user = _split_host(self.host)
        if self.port is not None:
            port = self.port
        if not 0 < port < 65536:
            raise ResolveError(self.host, f"invalid port {port}")

        address = host
        if resolve_dns:
            address = _lookup(host, port)

        self.resolved = ResolvedAddress(host=host, port=port, address=address, user=user)
        logger.debug("Resolved %s -> %s (%s)", self.host, self.resolved, address)
        return self.resolved

    def connect_options(
        self,
        timeout: float,
        known_hosts: str | None = None,
    ) -> dict[str, Any]:
        """Build asyncssh.connect() keyword arguments for this endpoint.

        Args:
            timeout: Dial + handshake deadline in seconds
            known_hosts: known_hosts path, or None to skip host key checks

        Returns:
            Keyword arguments for asyncssh.connect()
        """
        if not self.has_credential:
            raise ConfigError(f"password or private key is required for [{self.host}]")

        options: dict[str, Any] = {
            "username": self.username,
            "known_hosts": known_hosts,
            "connect_timeout": timeout,
        }
        if self.private_key:
            options["client_keys"] = [self.private_key]
            if self.passphrase:
                options["passphrase"] = self.passphrase
        else:
            # Only the configured password, never keys or agents found locally
            options["client_keys"] = None
            options["agent_path"] = None
        if self.password:
            options["password"] = self.password
        return options


def _split_host(value: str) -> tuple[str, int, str | None]:
    """Split ``[user@]host[:port]`` into its parts."""
    text = value.strip()
    if not text:
        raise ResolveError(value, "empty host")

    user = None
    if "@" in text:
        user, _, text = text.rpartition("@")
        user = user or None

    port = DEFAULT_PORT
    if text.startswith("["):
        host, sep, rest = text[1:].partition("]")
        if not sep:
            raise ResolveError(value, "missing ']' in address")
        if rest:
            if not rest.startswith(":"):
                raise ResolveError(value, "unexpected text after address")
            port = _parse_port(value, rest[1:])
    elif text.count(":") == 1:
        host, _, port_text = text.partition(":")
        port = _parse_port(value, port_text)
    else:
        # Bare hostname or bare IPv6 literal
        host = text
        if ":" in host:
            try:
                ipaddress.IPv6Address(host)
            except ValueError as e:
                raise ResolveError(value, e) from e

    if not host:
        raise ResolveError(value, "empty host")
    return host, port, user


def _parse_port(value: str, text: str) -> int:
    try:
        return int(text)
    except ValueError as e:
        raise ResolveError(value, f"invalid port {text!r}") from e


def _lookup(host: str, port: int) -> str:
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        raise ResolveError(host, e) from e
    if not infos:
        raise ResolveError(host, "no addresses found")
    return str(infos[0][4][0])
