"""DHCP hostname publishing for LXC containers."""
from .publisher import HostnamePublisher, load_publish_script

__all__ = ['HostnamePublisher', 'load_publish_script']
