"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Dial + handshake deadline per invocation (seconds)
    timeout: float = field(default=30.0)
    # Remote command deadline; None leaves the command unbounded
    command_timeout: float | None = field(default=None)

    # Host keys
    known_hosts: str | None = field(default="none")
    strict_host_key_checking: bool = field(default=False)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)

    # Probe definitions (JSON)
    config_path: str | None = field(default=None)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from SSHPROBE_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            timeout=cls._get_float("SSHPROBE_TIMEOUT", 30.0) or 30.0,
            command_timeout=cls._get_float("SSHPROBE_COMMAND_TIMEOUT", None) or None,
            known_hosts=os.getenv("SSHPROBE_KNOWN_HOSTS", "none"),
            strict_host_key_checking=cls._get_bool("SSHPROBE_STRICT_HOST_KEY_CHECKING", False),
            log_level=os.getenv("SSHPROBE_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("SSHPROBE_LOG_COLORS", True),
            config_path=os.getenv("SSHPROBE_CONFIG") or None,
        )

    @staticmethod
    def _get_float(key: str, default: float | None) -> float | None:
        """Get a number of seconds from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Float value from environment or default
        """
        value = os.getenv(key)
        if value is None or not value.strip():
            return default

        try:
            parsed = float(value)
        except ValueError:
            logger.warning("Invalid number for %s: %s, using default %s", key, value, default)
            return default

        if parsed < 0:
            logger.warning("Negative value for %s: %s, using default %s", key, value, default)
            return default
        return parsed

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")
