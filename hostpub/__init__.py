"""hostpub - publish DHCP hostnames for Proxmox LXC containers."""

__version__ = "0.1.0"
