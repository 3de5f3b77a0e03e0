"""Hostname publishing results."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from hostpub.models.container import ContainerHandle


class PublishStatus(Enum):
    """Terminal states of a publish attempt."""
    APPLIED = "applied"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class PublishResult:
    """What happened when publishing a hostname into a container."""
    status: PublishStatus
    hostname: str
    handle: ContainerHandle
    reason: str = ""
    interface: Optional[str] = None
    address: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def applied(self) -> bool:
        return self.status is PublishStatus.APPLIED

    @property
    def skipped(self) -> bool:
        return self.status is PublishStatus.SKIPPED

    @property
    def failed(self) -> bool:
        return self.status is PublishStatus.FAILED

    def summary(self) -> str:
        """One human-readable status line."""
        if self.applied:
            where = f" on {self.interface}" if self.interface else ""
            return (
                f"Applied: DHCP hostname publishing configured "
                f"(CT {self.handle.vmid}: {self.hostname}{where})"
            )
        if self.skipped:
            return f"Skipped: {self.reason}"
        return f"Failed: {self.reason}"
