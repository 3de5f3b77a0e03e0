"""Shared utilities for hostpub CLI modules."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from hostpub.core.config import is_mock
from hostpub.models.container import ContainerHandle

__all__ = [
    'is_mock',
    'configure_logging',
    'parse_handle',
    'print_success',
    'print_error',
    'print_warning',
    'print_info',
]


def configure_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up console verbosity and optional file logging for CLI commands."""
    from hostpub.core.logger import set_verbose, setup_file_logging

    if verbose:
        set_verbose(True)
    if log_file:
        setup_file_logging(log_file=log_file, verbose=verbose)


def parse_handle(ctid: str, console: Console) -> ContainerHandle:
    """Turn a CTID argument into a ContainerHandle or exit with code 2."""
    try:
        return ContainerHandle.parse(ctid)
    except ValueError as exc:
        print_error(console, str(exc))
        raise typer.Exit(2) from exc


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting."""
    console.print(f"[green]{prefix}[/green] {message}", highlight=False, soft_wrap=True)


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    """Print error message with consistent formatting."""
    console.print(f"[red]{prefix}[/red] {message}", highlight=False, soft_wrap=True)


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    """Print warning message with consistent formatting."""
    console.print(f"[yellow]{prefix}[/yellow] {message}", highlight=False, soft_wrap=True)


def print_info(console: Console, message: str, prefix: str = "ℹ") -> None:
    """Print info message with consistent formatting."""
    console.print(f"[cyan]{prefix}[/cyan] {message}", highlight=False, soft_wrap=True)
