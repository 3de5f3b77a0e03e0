"""Proxmox host integration.

- ContainerTransport: abstract remote-execution boundary
- PctTransport: runs commands inside LXC containers via `pct`
- ProxmoxNotes: reads and appends container notes
"""
from .transport import ContainerTransport, PctTransport
from .notes import ProxmoxNotes

__all__ = [
    'ContainerTransport',
    'PctTransport',
    'ProxmoxNotes',
]
