"""Configuration module for sshprobe.

- Settings: Environment variable configuration
- HostKeyVerifier: Manages SSH host key verification

The probe loader (``sshprobe.config.main.Config``) builds on the services
package and is imported from its own module.
"""

from sshprobe.config.host_keys import HostKeyVerifier
from sshprobe.config.settings import Settings

__all__ = ["HostKeyVerifier", "Settings"]
