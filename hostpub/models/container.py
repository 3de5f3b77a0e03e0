"""Container models."""
from dataclasses import dataclass


@dataclass(frozen=True)
class ContainerHandle:
    """Identifies a Proxmox container by VMID."""
    vmid: int

    def __post_init__(self):
        if isinstance(self.vmid, bool) or not isinstance(self.vmid, int) or self.vmid <= 0:
            raise ValueError(f"Invalid container ID: {self.vmid!r}")

    @classmethod
    def parse(cls, value) -> "ContainerHandle":
        """Build a handle from a VMID given as int or digit string."""
        if isinstance(value, ContainerHandle):
            return value
        text = str(value).strip()
        if not text.isdigit():
            raise ValueError(f"Invalid container ID: {value!r}")
        return cls(int(text))

    def __str__(self) -> str:
        return str(self.vmid)


@dataclass
class ExecResult:
    """Outcome of one command run inside a container."""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0
