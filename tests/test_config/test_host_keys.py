"""Tests for HostKeyVerifier."""

from pathlib import Path

import pytest

from sshprobe.config.host_keys import HostKeyVerifier


def test_verifier_uses_default_known_hosts_path(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Verifier defaults to ~/.ssh/known_hosts."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    known_hosts = tmp_path / ".ssh" / "known_hosts"
    known_hosts.parent.mkdir(parents=True)
    known_hosts.touch()

    verifier = HostKeyVerifier()
    assert verifier.get_known_hosts_path() == str(known_hosts)


def test_verifier_uses_custom_path(tmp_path: Path) -> None:
    """Verifier accepts custom known_hosts path."""
    custom = tmp_path / "my_known_hosts"
    custom.touch()

    verifier = HostKeyVerifier(known_hosts_path=str(custom))
    assert verifier.get_known_hosts_path() == str(custom)
    assert verifier.is_enabled()


def test_verifier_disabled_with_none() -> None:
    """Verifier can be disabled with 'none' path."""
    verifier = HostKeyVerifier(known_hosts_path="none")
    assert verifier.get_known_hosts_path() is None
    assert not verifier.is_enabled()


def test_verifier_disabled_with_none_even_in_strict_mode() -> None:
    verifier = HostKeyVerifier(known_hosts_path="NONE", strict_checking=True)
    assert not verifier.is_enabled()


def test_verifier_raises_on_missing_file_strict_mode(tmp_path: Path) -> None:
    """Verifier raises if file missing in strict mode."""
    missing = tmp_path / "nonexistent"
    with pytest.raises(FileNotFoundError, match="known_hosts file not found"):
        HostKeyVerifier(known_hosts_path=str(missing), strict_checking=True)


def test_verifier_allows_missing_file_non_strict(tmp_path: Path) -> None:
    """Missing file in non-strict mode disables verification."""
    missing = tmp_path / "nonexistent"
    verifier = HostKeyVerifier(known_hosts_path=str(missing), strict_checking=False)
    assert verifier.get_known_hosts_path() is None


def test_verifier_strict_checking_default_false(tmp_path: Path) -> None:
    """Strict checking is opt-in."""
    custom = tmp_path / "known_hosts"
    custom.touch()

    verifier = HostKeyVerifier(known_hosts_path=str(custom))
    assert verifier.strict_checking is False
