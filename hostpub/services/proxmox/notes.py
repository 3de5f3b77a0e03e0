"""Proxmox container notes (the `description` field shown in the web UI)."""
import json
import socket
import subprocess
from typing import Optional

from hostpub.core.config import get_config
from hostpub.core.logger import get_logger
from hostpub.models.container import ContainerHandle
from hostpub.models.publish import PublishResult

logger = get_logger(__name__)


class ProxmoxNotes:
    """Reads and appends Proxmox notes of an LXC container."""

    def __init__(self, node: Optional[str] = None, mock: bool = False):
        """Initialize notes service.

        Args:
            node: Proxmox node name (defaults to the local host name)
            mock: If True, simulate operations without touching the host
        """
        self.node = node or socket.gethostname().split('.')[0]
        self.mock = mock

    def read(self, handle: ContainerHandle) -> Optional[str]:
        """Return the current notes of a container.

        Returns:
            Notes text ('' when unset), or None when they could not be read
        """
        if self.mock:
            logger.info(f"MOCK: Would read notes of container {handle.vmid}")
            return ""

        config = get_config()
        cmd = [
            'pvesh', 'get', f'/nodes/{self.node}/lxc/{handle.vmid}/config',
            '--output-format', 'json',
        ]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=config.status_timeout,
            )
            data = json.loads(result.stdout or '{}')
        except subprocess.CalledProcessError as e:
            logger.warning(f"Could not read notes of container {handle.vmid}: {e.stderr.strip() if e.stderr else e}")
            return None
        except (OSError, subprocess.TimeoutExpired, json.JSONDecodeError) as e:
            logger.warning(f"Could not read notes of container {handle.vmid}: {e}")
            return None

        return data.get('description', '') or ''

    def write(self, handle: ContainerHandle, text: str) -> bool:
        """Replace the notes of a container."""
        if self.mock:
            logger.info(f"MOCK: Would write notes of container {handle.vmid}")
            return True

        config = get_config()
        try:
            subprocess.run(
                ['pct', 'set', str(handle.vmid), '--description', text],
                capture_output=True,
                text=True,
                check=True,
                timeout=config.status_timeout,
            )
        except subprocess.CalledProcessError as e:
            logger.error(f"Failed to write notes of container {handle.vmid}: {e.stderr.strip() if e.stderr else e}")
            return False
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error(f"Failed to write notes of container {handle.vmid}: {e}")
            return False

        logger.debug(f"Updated notes of container {handle.vmid}")
        return True

    def append(self, handle: ContainerHandle, block: str) -> bool:
        """Append a block to the existing notes, separated by a blank line.

        Nothing is written when the current notes cannot be read.
        """
        existing = self.read(handle)
        if existing is None:
            logger.warning(f"Leaving notes of container {handle.vmid} unchanged")
            return False
        existing = existing.rstrip()
        block = block.strip()
        text = f"{existing}\n\n{block}" if existing else block
        return self.write(handle, text)

    @staticmethod
    def networking_block(result: PublishResult) -> str:
        """Render the notes block describing a publish result."""
        lines = [
            "Networking:",
            f"- Hostname: {result.hostname or 'unknown'}",
            f"- CTID: {result.handle.vmid}",
        ]
        if result.address:
            lines.append(f"- IPv4: {result.address}")
        if result.interface:
            lines.append(f"- Interface: {result.interface}")
        return "\n".join(lines)
