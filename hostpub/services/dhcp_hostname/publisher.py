"""Publish a container hostname through its IPv4 DHCP client.

The whole configuration runs as one remote session: a static bash script
(hostpub/scripts/publish_hostname.sh) streamed on stdin, with the hostname
bound as the HN environment variable. The script re-validates the name,
guards on OS family and IPv4 addressing, writes /etc/hostname, /etc/hosts,
dhclient.conf and a systemd-networkd profile, then renews the lease.
"""
from pathlib import Path
from typing import List, Optional, Tuple

from hostpub.core.errors import RemoteSessionError, UnsupportedEnvironment
from hostpub.core.hostname import ValidatedHostname
from hostpub.core.logger import get_logger
from hostpub.models.container import ContainerHandle, ExecResult
from hostpub.models.publish import PublishResult, PublishStatus
from hostpub.services.proxmox.transport import (
    STATUS_MISSING,
    STATUS_RUNNING,
    ContainerTransport,
    PctTransport,
)

logger = get_logger(__name__)

SCRIPT_PATH = Path(__file__).parent.parent.parent / "scripts" / "publish_hostname.sh"

HOSTNAME_ENV = "HN"
RESULT_MARKER = "HOSTPUB_RESULT"
WARN_MARKER = "HOSTPUB_WARN"


def load_publish_script(path: Optional[Path] = None) -> str:
    """Return the remote procedure text."""
    return (path or SCRIPT_PATH).read_text()


class HostnamePublisher:
    """Pushes a validated hostname into a running container."""

    def __init__(self, transport: Optional[ContainerTransport] = None, mock: bool = False):
        self.transport = transport or PctTransport(mock=mock)
        self.mock = mock or self.transport.mock
        self._script: Optional[str] = None

    @property
    def script(self) -> str:
        if self._script is None:
            self._script = load_publish_script()
        return self._script

    def publish(self, hostname: ValidatedHostname, handle: ContainerHandle) -> PublishResult:
        """Publish a hostname into a container.

        Args:
            hostname: Normalized hostname
            handle: Running container to configure

        Returns:
            PublishResult that is APPLIED, SKIPPED (guard tripped, nothing
            changed) or FAILED (session error or non-zero exit)
        """
        if not isinstance(hostname, ValidatedHostname):
            raise TypeError("publish() needs a ValidatedHostname; use normalize_hostname() first")

        name = hostname.value
        logger.info(f"Configuring DHCP hostname publishing inside CT {handle.vmid}")

        if self.mock:
            logger.info(f"MOCK: Would publish hostname {name} in container {handle.vmid}")
            return PublishResult(PublishStatus.APPLIED, name, handle, reason="mock")

        try:
            status = self.transport.container_status(handle)
            if status == STATUS_MISSING:
                raise RemoteSessionError(handle.vmid, "container does not exist")
            if status != STATUS_RUNNING:
                raise RemoteSessionError(handle.vmid, f"container is {status}, not running")

            execution = self.transport.run_script(
                handle, self.script, env={HOSTNAME_ENV: name}
            )
        except RemoteSessionError as exc:
            logger.debug(f"Failed to configure DHCP hostname publishing inside CT {handle.vmid}: {exc}")
            return PublishResult(PublishStatus.FAILED, name, handle, reason=str(exc))

        result = self._interpret(name, handle, execution)
        for warning in result.warnings:
            logger.warning(f"CT {handle.vmid}: {warning}")
        return result

    def _interpret(self, name: str, handle: ContainerHandle, execution: ExecResult) -> PublishResult:
        """Turn the remote exit status and protocol lines into a PublishResult."""
        warnings, fields = self._parse_output(execution.stdout)

        if not execution.ok:
            detail = self._last_line(execution.stderr) or "no error output"
            reason = f"remote configuration exited with status {execution.returncode}: {detail}"
            logger.debug(f"Failed to configure DHCP hostname publishing inside CT {handle.vmid}")
            return PublishResult(PublishStatus.FAILED, name, handle, reason=reason, warnings=warnings)

        if not fields:
            logger.debug(f"CT {handle.vmid} did not report a publishing result")
            return PublishResult(
                PublishStatus.FAILED, name, handle,
                reason="remote configuration reported no result",
                warnings=warnings,
            )

        try:
            interface, address = self._applied_fields(fields)
        except UnsupportedEnvironment as exc:
            logger.debug(f"Skipping DHCP hostname publishing in CT {handle.vmid}: {exc}")
            return PublishResult(
                PublishStatus.SKIPPED, name, handle, reason=str(exc), warnings=warnings
            )
        except ValueError as exc:
            logger.debug(f"CT {handle.vmid} reported an {exc}")
            return PublishResult(
                PublishStatus.FAILED, name, handle, reason=str(exc), warnings=warnings
            )

        logger.debug(f"DHCP hostname publishing configured (CT {handle.vmid}: {name})")
        return PublishResult(
            PublishStatus.APPLIED,
            name,
            handle,
            interface=interface,
            address=address,
            warnings=warnings,
        )

    @staticmethod
    def _parse_output(stdout: str) -> Tuple[List[str], List[str]]:
        """Split stdout into warning messages and the last result line's fields."""
        warnings: List[str] = []
        fields: List[str] = []
        for line in (stdout or "").splitlines():
            marker, _, rest = line.strip().partition(" ")
            if marker == WARN_MARKER:
                warnings.append(rest.strip())
            elif marker == RESULT_MARKER:
                fields = rest.split()
        return warnings, fields

    @staticmethod
    def _applied_fields(fields: List[str]) -> Tuple[Optional[str], Optional[str]]:
        """Return (interface, address) of an applied result.

        Raises:
            UnsupportedEnvironment: The container skipped publishing
            ValueError: The result state is not recognised
        """
        state, details = fields[0], fields[1:]
        if state == PublishStatus.SKIPPED.value:
            raise UnsupportedEnvironment(" ".join(details) or "unsupported environment")
        if state != PublishStatus.APPLIED.value:
            raise ValueError(f"unknown result '{state}'")
        interface = details[0] if details else None
        address = details[1] if len(details) > 1 else None
        return interface, address

    @staticmethod
    def _last_line(text: str) -> str:
        lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
        return lines[-1] if lines else ""
