"""Tests for Endpoint resolution and connect options."""

import socket

import pytest

from sshprobe.errors import ConfigError, ResolveError
from sshprobe.models import Endpoint


def test_resolve_requires_credential() -> None:
    """Neither password nor key is a configuration error."""
    endpoint = Endpoint(host="10.0.0.5", user="probe")
    with pytest.raises(ConfigError, match="password or private key is required"):
        endpoint.resolve()
    assert endpoint.resolved is None


def test_resolve_defaults_port_22() -> None:
    endpoint = Endpoint(host="10.0.0.5", password="pw")
    address = endpoint.resolve()
    assert address.host == "10.0.0.5"
    assert address.port == 22
    assert address.address == "10.0.0.5"
    assert endpoint.resolved is address


def test_resolve_parses_user_and_port() -> None:
    endpoint = Endpoint(host="deploy@10.0.0.5:2200", password="pw")
    address = endpoint.resolve()
    assert address.port == 2200
    assert endpoint.username == "deploy"


def test_explicit_fields_win_over_host_string() -> None:
    endpoint = Endpoint(host="deploy@10.0.0.5:2200", port=2022, user="admin", password="pw")
    address = endpoint.resolve()
    assert address.port == 2022
    assert endpoint.username == "admin"


def test_default_username_is_root() -> None:
    endpoint = Endpoint(host="10.0.0.5", password="pw")
    endpoint.resolve()
    assert endpoint.username == "root"


def test_resolve_ipv6_with_port() -> None:
    endpoint = Endpoint(host="[::1]:2222", password="pw")
    address = endpoint.resolve(resolve_dns=False)
    assert address.host == "::1"
    assert address.port == 2222
    assert str(address) == "[::1]:2222"


def test_resolve_bare_ipv6() -> None:
    endpoint = Endpoint(host="::1", password="pw")
    address = endpoint.resolve(resolve_dns=False)
    assert address.host == "::1"
    assert address.port == 22


@pytest.mark.parametrize("host", ["", "10.0.0.5:abc", "[::1", "a:b:c"])
def test_resolve_rejects_malformed_hosts(host: str) -> None:
    endpoint = Endpoint(host=host, password="pw")
    with pytest.raises(ResolveError):
        endpoint.resolve()


def test_resolve_rejects_out_of_range_port() -> None:
    endpoint = Endpoint(host="10.0.0.5", port=70000, password="pw")
    with pytest.raises(ResolveError, match="invalid port"):
        endpoint.resolve()


def test_resolve_unknown_host(monkeypatch: pytest.MonkeyPatch) -> None:
    """Name resolution failure raises ResolveError."""

    def fail(*args, **kwargs):
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    monkeypatch.setattr(socket, "getaddrinfo", fail)
    endpoint = Endpoint(host="nowhere.invalid", password="pw")
    with pytest.raises(ResolveError, match="nowhere.invalid"):
        endpoint.resolve()


def test_resolve_uses_first_address(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def fake(host, port, type=0):
        calls.append((host, port))
        return [
            (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("203.0.113.7", port)),
            (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("203.0.113.8", port)),
        ]

    monkeypatch.setattr(socket, "getaddrinfo", fake)
    endpoint = Endpoint(host="web.example.com", password="pw")
    address = endpoint.resolve()
    assert address.address == "203.0.113.7"
    assert address.host == "web.example.com"
    assert calls == [("web.example.com", 22)]


def test_resolve_without_dns_skips_lookup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Targets behind a bastion are not looked up locally."""

    def fail(*args, **kwargs):
        raise AssertionError("getaddrinfo should not be called")

    monkeypatch.setattr(socket, "getaddrinfo", fail)
    endpoint = Endpoint(host="internal.corp:2222", password="pw")
    address = endpoint.resolve(resolve_dns=False)
    assert address.address == "internal.corp"
    assert address.port == 2222


def test_connect_options_with_password() -> None:
    endpoint = Endpoint(host="10.0.0.5", user="probe", password="pw")
    options = endpoint.connect_options(timeout=7.5)
    assert options == {
        "username": "probe",
        "known_hosts": None,
        "connect_timeout": 7.5,
        "client_keys": None,
        "agent_path": None,
        "password": "pw",
    }


def test_connect_options_with_key_and_passphrase() -> None:
    endpoint = Endpoint(
        host="10.0.0.5",
        private_key="/keys/id_ed25519",
        passphrase="hunter2",
    )
    options = endpoint.connect_options(timeout=3, known_hosts="/etc/ssh/known_hosts")
    assert options["client_keys"] == ["/keys/id_ed25519"]
    assert options["passphrase"] == "hunter2"
    assert options["known_hosts"] == "/etc/ssh/known_hosts"
    assert "password" not in options
    assert "agent_path" not in options


def test_connect_options_requires_credential() -> None:
    with pytest.raises(ConfigError):
        Endpoint(host="10.0.0.5").connect_options(timeout=1)
