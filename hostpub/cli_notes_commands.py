"""Proxmox notes CLI commands."""
from __future__ import annotations

import typer
from rich.console import Console

from hostpub.cli_support import is_mock, parse_handle, print_error, print_success
from hostpub.services.proxmox import ProxmoxNotes

NotesTyper = typer.Typer(help="Read and extend Proxmox container notes")


def register_notes_commands(root: typer.Typer, console: Console) -> None:
    """Attach notes commands to the main CLI."""

    @NotesTyper.command("show")
    def show_command(
        ctid: str = typer.Argument(..., help="Container ID (VMID)."),
    ) -> None:
        """Print the notes of a container."""
        handle = parse_handle(ctid, console)
        text = ProxmoxNotes(mock=is_mock()).read(handle)
        if text is None:
            print_error(console, f"Could not read notes of CT {handle.vmid}")
            raise typer.Exit(1)
        if text:
            typer.echo(text)

    @NotesTyper.command("append")
    def append_command(
        ctid: str = typer.Argument(..., help="Container ID (VMID)."),
        text: str = typer.Argument(..., help="Text block to append."),
    ) -> None:
        """Append a block of text to the notes of a container."""
        handle = parse_handle(ctid, console)
        if not ProxmoxNotes(mock=is_mock()).append(handle, text):
            print_error(console, f"Failed to update notes of CT {handle.vmid}")
            raise typer.Exit(1)
        print_success(console, f"Notes updated (CT {handle.vmid})")

    root.add_typer(NotesTyper, name="notes")
