"""Hostname publishing CLI commands."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from hostpub.cli_support import (
    configure_logging,
    is_mock,
    parse_handle,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from hostpub.core.errors import InvalidHostname
from hostpub.core.hostname import PROMPT_HINT, normalize_hostname, resolve_hostname
from hostpub.core.logger import get_logger
from hostpub.services.dhcp_hostname import HostnamePublisher, load_publish_script
from hostpub.services.proxmox import PctTransport, ProxmoxNotes

logger = get_logger(__name__)

EXIT_FAILED = 1
EXIT_INVALID = 2
EXIT_SKIPPED = 3


def register_publish_commands(root: typer.Typer, console: Console) -> None:
    """Attach publishing commands to the main CLI."""

    @root.command("publish")
    def publish_command(
        ctid: str = typer.Argument(..., help="Container ID (VMID) of a running LXC container."),
        hostname: Optional[str] = typer.Option(
            None, "--hostname", "-n", envvar="HOSTPUB_HOSTNAME",
            help="Hostname to publish. Prompted for when omitted.",
        ),
        wait: Optional[int] = typer.Option(
            None, "--wait", "-w", min=0,
            help="Seconds to wait for the container to finish booting first.",
        ),
        notes: bool = typer.Option(True, "--notes/--no-notes", help="Record the result in the container's Proxmox notes."),
        fail_on_skip: bool = typer.Option(False, "--fail-on-skip", help="Exit with code 3 when publishing is skipped."),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
        log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
    ) -> None:
        """Set a container's hostname and advertise it through IPv4 DHCP."""
        configure_logging(log_file=log_file, verbose=verbose)
        handle = parse_handle(ctid, console)

        if hostname:
            try:
                validated = normalize_hostname(hostname)
            except InvalidHostname as exc:
                print_error(console, escape(exc.reason))
                raise typer.Exit(EXIT_INVALID) from exc
        else:
            console.print(PROMPT_HINT)
            validated = resolve_hostname(
                on_invalid=lambda exc: print_error(console, escape(exc.reason)),
            )

        if validated.value != hostname:
            print_info(console, f"Hostname: {validated}")

        mock = is_mock()
        transport = PctTransport(mock=mock)

        if wait is not None and not transport.wait_until_ready(handle, timeout=wait):
            print_warning(console, f"Container {handle.vmid} not ready after {wait}s, trying anyway")

        result = HostnamePublisher(transport, mock=mock).publish(validated, handle)

        if result.applied and notes:
            notes_service = ProxmoxNotes(mock=mock)
            if not notes_service.append(handle, ProxmoxNotes.networking_block(result)):
                logger.warning(f"Could not record hostname in notes of CT {handle.vmid}")

        if result.applied:
            print_success(console, escape(result.summary()))
            return

        if result.skipped:
            print_warning(console, escape(result.summary()))
            if fail_on_skip:
                raise typer.Exit(EXIT_SKIPPED)
            return

        print_error(console, escape(result.summary()))
        raise typer.Exit(EXIT_FAILED)

    @root.command("normalize")
    def normalize_command(
        name: str = typer.Argument(..., help="Hostname candidate to check. Put -- before names that start with a hyphen."),
    ) -> None:
        """Show the DNS-safe form of a hostname without touching any container.

        Example: hostpub normalize -- -my-host-
        """
        try:
            validated = normalize_hostname(name)
        except InvalidHostname as exc:
            print_error(console, escape(exc.reason))
            raise typer.Exit(EXIT_INVALID) from exc
        typer.echo(validated.value)

    @root.command("script")
    def script_command() -> None:
        """Print the script that `publish` runs inside the container."""
        typer.echo(load_publish_script(), nl=False)
