"""Shared utilities for Sprout CLI modules."""
from __future__ import annotations

import os
from typing import Optional, Tuple

import typer
from rich.console import Console


def is_mock() -> bool:
    """Return True when the CLI runs in mock mode."""
    return os.environ.get("SPROUT_MOCK") == "1"


def parse_dependency_spec(spec: str) -> Tuple[str, Optional[str]]:
    """Split ``name@version`` into its parts.

    A leading ``@`` belongs to the package scope, so
    ``@shopify/prettier-config`` has no version while
    ``@shopify/prettier-config@1.1.2`` does.

    Raises:
        typer.BadParameter: If the name or version is empty
    """
    scope = "@" if spec.startswith("@") else ""
    name, sep, version = spec[len(scope):].partition("@")

    if not name or (sep and not version):
        raise typer.BadParameter(f"Invalid dependency '{spec}', expected name or name@version")

    return scope + name, version or None


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    console.print(f"[red]Error:[/red] {e}")
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting."""
    console.print(f"[green]{prefix}[/green] {message}")


def print_info(console: Console, message: str, prefix: str = "ℹ") -> None:
    """Print info message with consistent formatting."""
    console.print(f"[cyan]{prefix}[/cyan] {message}")
