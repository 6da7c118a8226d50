"""Shared fixtures."""

import pytest

from sshprobe.config.settings import Settings
from sshprobe.models import BaseProbe, Endpoint, ProbeTarget


@pytest.fixture
def events() -> list[str]:
    """Ordered record of fake connection activity."""
    return []


@pytest.fixture
def settings() -> Settings:
    """Settings with host key checks disabled."""
    return Settings(timeout=5.0, known_hosts="none")


@pytest.fixture
def endpoint() -> Endpoint:
    return Endpoint(host="10.0.0.5", user="probe", password="secret")


@pytest.fixture
def bastion_endpoint() -> Endpoint:
    return Endpoint(host="ops@192.0.2.10:2222", private_key="/keys/bastion")


@pytest.fixture
def target(endpoint: Endpoint) -> ProbeTarget:
    return ProbeTarget(endpoint=endpoint, command="echo", args=["OK"])


@pytest.fixture
def base() -> BaseProbe:
    return BaseProbe(name="web-1", timeout=5.0)
