"""Remote execution inside Proxmox LXC containers."""
import shlex
import subprocess
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from hostpub.core.config import get_config
from hostpub.core.errors import RemoteSessionError
from hostpub.core.logger import get_logger
from hostpub.models.container import ContainerHandle, ExecResult

logger = get_logger(__name__)

STATUS_RUNNING = 'running'
STATUS_STOPPED = 'stopped'
STATUS_MISSING = 'missing'


class ContainerTransport(ABC):
    """Abstract interface for running scripts inside a container."""

    def __init__(self, mock: bool = False):
        """Initialize transport.

        Args:
            mock: If True, simulate operations without touching the host
        """
        self.mock = mock

    @abstractmethod
    def container_status(self, handle: ContainerHandle) -> str:
        """Return 'running', 'stopped' or 'missing'."""
        pass

    @abstractmethod
    def run_script(
        self,
        handle: ContainerHandle,
        script: str,
        env: Optional[Dict[str, str]] = None,
    ) -> ExecResult:
        """Run a bash script inside the container.

        Args:
            handle: Target container
            script: Script text, streamed on stdin
            env: Variables bound in the script's environment

        Returns:
            ExecResult with exit code and captured output

        Raises:
            RemoteSessionError: If the session cannot be established
        """
        pass

    def wait_until_ready(self, handle: ContainerHandle, timeout: Optional[int] = None) -> bool:
        """Wait for the container to accept commands.

        Args:
            handle: Target container
            timeout: Maximum seconds to wait (uses config default if None)

        Returns:
            True if the container is ready
        """
        return True


class PctTransport(ContainerTransport):
    """Runs scripts inside LXC containers through `pct exec`."""

    def container_status(self, handle: ContainerHandle) -> str:
        if self.mock:
            logger.info(f"MOCK: Would query status of container {handle.vmid}")
            return STATUS_RUNNING

        config = get_config()
        try:
            result = subprocess.run(
                ['pct', 'status', str(handle.vmid)],
                capture_output=True,
                text=True,
                timeout=config.status_timeout,
            )
        except FileNotFoundError as exc:
            raise RemoteSessionError(handle.vmid, "pct not found; run hostpub on a Proxmox host") from exc
        except subprocess.TimeoutExpired as exc:
            raise RemoteSessionError(handle.vmid, "timed out querying container status") from exc
        except OSError as exc:
            raise RemoteSessionError(handle.vmid, f"failed to run pct: {exc}") from exc

        if result.returncode != 0:
            logger.debug(f"pct status {handle.vmid}: {result.stderr.strip()}")
            return STATUS_MISSING

        # Output format: "status: running"
        status = result.stdout.strip().split(':', 1)[-1].strip()
        return status or STATUS_MISSING

    def build_command(self, handle: ContainerHandle, env: Optional[Dict[str, str]] = None) -> List[str]:
        """Build the pct exec argv for a stdin-fed bash session.

        Values travel as separate argv entries to env(1), never through a shell.
        """
        cmd: List[str] = ['pct', 'exec', str(handle.vmid), '--']
        if env:
            cmd.append('env')
            cmd.extend(f"{key}={value}" for key, value in env.items())
        cmd.extend(['bash', '-s'])
        return cmd

    def run_script(
        self,
        handle: ContainerHandle,
        script: str,
        env: Optional[Dict[str, str]] = None,
    ) -> ExecResult:
        cmd = self.build_command(handle, env)
        command_str = shlex.join(cmd)

        if self.mock:
            logger.info(f"MOCK: Would execute: {command_str}")
            return ExecResult(returncode=0)

        config = get_config()
        logger.debug(f"Executing in container {handle.vmid}: {command_str}")

        try:
            result = subprocess.run(
                cmd,
                input=script,
                capture_output=True,
                text=True,
                timeout=config.exec_timeout,
            )
        except FileNotFoundError as exc:
            raise RemoteSessionError(handle.vmid, "pct not found; run hostpub on a Proxmox host") from exc
        except subprocess.TimeoutExpired as exc:
            raise RemoteSessionError(
                handle.vmid, f"command timed out after {config.exec_timeout}s"
            ) from exc
        except OSError as exc:
            raise RemoteSessionError(handle.vmid, f"failed to run pct: {exc}") from exc

        if result.returncode != 0:
            logger.debug(f"Command exited with code {result.returncode}")
        if result.stderr:
            logger.debug(f"stderr: {result.stderr.strip()}")

        return ExecResult(result.returncode, result.stdout, result.stderr)

    def wait_until_ready(self, handle: ContainerHandle, timeout: Optional[int] = None) -> bool:
        if self.mock:
            return True

        config = get_config()
        actual_timeout = timeout if timeout is not None else config.container_boot_timeout

        logger.debug(f"Waiting for container {handle.vmid} to boot...")

        # Always check once, even with a zero timeout
        for i in range(max(actual_timeout, 1)):
            try:
                result = subprocess.run(
                    ['pct', 'exec', str(handle.vmid), '--', 'true'],
                    capture_output=True,
                    timeout=config.container_ready_timeout,
                )
                if result.returncode == 0:
                    logger.debug(f"Container {handle.vmid} ready after {i}s")
                    return True
            except subprocess.TimeoutExpired:
                logger.debug(f"Readiness check for {handle.vmid} timed out")
            except FileNotFoundError:
                logger.error("pct not found; run hostpub on a Proxmox host")
                return False
            except OSError as exc:
                logger.error(f"Failed to run pct: {exc}")
                return False

            time.sleep(1)

        logger.warning(f"Container {handle.vmid} not ready after {actual_timeout}s")
        return False
