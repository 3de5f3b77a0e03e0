#!/usr/bin/env python3
"""hostpub CLI - DHCP hostname publishing for Proxmox LXC containers."""

import typer
from rich.console import Console

from hostpub.cli_notes_commands import register_notes_commands
from hostpub.cli_publish_commands import register_publish_commands

app = typer.Typer(
    name="hostpub",
    help="""hostpub - publish LXC container hostnames through DHCP

Sets the hostname inside a running container and makes its DHCP client
send it, so the router can resolve the container by name.

Quick start:
  hostpub normalize "My Host"          # Check a name
  hostpub publish 105 --hostname web   # Publish it in CT 105
""",
    add_completion=False,
)

console = Console()

register_publish_commands(app, console)
register_notes_commands(app, console)

if __name__ == "__main__":
    app()
