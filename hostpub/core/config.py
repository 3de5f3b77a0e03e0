"""hostpub runtime configuration and settings."""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class HostpubConfig:
    """Runtime configuration for hostpub operations.

    Attributes:
        exec_timeout: Timeout in seconds for the remote publishing session (default: 120)
        status_timeout: Timeout in seconds for pct status/config queries (default: 10)
        container_boot_timeout: Seconds to wait for a container to finish booting (default: 30)
        container_ready_timeout: Timeout in seconds for a single readiness check (default: 2)
    """

    exec_timeout: int = 120  # dhclient renewals can take a while
    status_timeout: int = 10
    container_boot_timeout: int = 30
    container_ready_timeout: int = 2

    @classmethod
    def from_env(cls) -> "HostpubConfig":
        """Create config from environment variables.

        Environment variables:
            HOSTPUB_EXEC_TIMEOUT: Remote session timeout in seconds
            HOSTPUB_STATUS_TIMEOUT: pct status/config timeout in seconds
            HOSTPUB_CONTAINER_BOOT_TIMEOUT: Container boot timeout in seconds
            HOSTPUB_CONTAINER_READY_TIMEOUT: Readiness check timeout in seconds

        Returns:
            HostpubConfig instance with values from environment or defaults
        """
        return cls(
            exec_timeout=int(
                os.getenv("HOSTPUB_EXEC_TIMEOUT", cls.exec_timeout)
            ),
            status_timeout=int(
                os.getenv("HOSTPUB_STATUS_TIMEOUT", cls.status_timeout)
            ),
            container_boot_timeout=int(
                os.getenv("HOSTPUB_CONTAINER_BOOT_TIMEOUT", cls.container_boot_timeout)
            ),
            container_ready_timeout=int(
                os.getenv("HOSTPUB_CONTAINER_READY_TIMEOUT", cls.container_ready_timeout)
            ),
        )


_config: Optional[HostpubConfig] = None


def get_config() -> HostpubConfig:
    """Get the global hostpub configuration (created from environment if unset)."""
    global _config
    if _config is None:
        _config = HostpubConfig.from_env()
    return _config


def set_config(config: Optional[HostpubConfig]):
    """Set the global hostpub configuration.

    Args:
        config: HostpubConfig instance to use globally, or None to re-read
            the environment on next access
    """
    global _config
    _config = config


def is_mock() -> bool:
    """Return True when hostpub runs in mock mode."""
    return os.environ.get("HOSTPUB_MOCK") == "1"
