"""Exception hierarchy for hostpub."""


class HostpubError(Exception):
    """Base class for hostpub errors."""
    pass


class InvalidHostname(HostpubError, ValueError):
    """Raised when a hostname is empty or too long after normalization."""

    def __init__(self, raw: str, normalized: str, reason: str):
        self.raw = raw
        self.normalized = normalized
        self.reason = reason
        super().__init__(reason)


class UnsupportedEnvironment(HostpubError):
    """The target container cannot publish a DHCP hostname (OS or addressing)."""
    pass


class RemoteSessionError(HostpubError, RuntimeError):
    """Raised when a command cannot be run inside the container."""

    def __init__(self, vmid: int, message: str):
        self.vmid = vmid
        super().__init__(f"container {vmid}: {message}")
