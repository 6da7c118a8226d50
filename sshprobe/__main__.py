"""Entry point: run every configured SSH probe once."""

import asyncio
import logging
import sys

from sshprobe.config.main import Config
from sshprobe.config.settings import Settings
from sshprobe.errors import ConfigError
from sshprobe.services.runner import run_probes
from sshprobe.utils.console import ProbeFormatter

logger = logging.getLogger("sshprobe")


def configure_logging(settings: Settings) -> None:
    """Attach the console formatter to the sshprobe logger.

    Colors are dropped when stderr is not a TTY.
    """
    use_colors = settings.log_colors and sys.stderr.isatty()

    probe_logger = logging.getLogger("sshprobe")
    probe_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    if not probe_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ProbeFormatter(use_colors=use_colors))
        probe_logger.addHandler(handler)
        probe_logger.propagate = False

    # asyncssh logs every channel open/close at INFO
    logging.getLogger("asyncssh").setLevel(logging.WARNING)


def main() -> int:
    """Load the config named by SSHPROBE_CONFIG and run it once.

    Returns:
        0 if every probe passed, 1 if any failed, 2 on configuration errors
    """
    settings = Settings.from_env()
    configure_logging(settings)

    if not settings.config_path:
        logger.error("SSHPROBE_CONFIG is not set")
        return 2

    try:
        config = Config.from_file(settings.config_path, settings)
    except (ConfigError, FileNotFoundError) as e:
        logger.error("Cannot load configuration: %s", e)
        return 2

    results = asyncio.run(run_probes(config.probes))
    for name, result in results.items():
        level = logging.INFO if result.success else logging.ERROR
        logger.log(
            level,
            "[ssh / %s] %s (exit=%d)",
            name,
            result.message,
            result.exit_code,
        )

    return 0 if all(r.success for r in results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
