"""Shared console and logging helpers.

Provides the process-wide Rich console, coloured status printers, a
key/value summary table, and logging setup routed through Rich.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _resolve_level(value: int | str) -> int:
    if isinstance(value, int):
        return value
    candidate = logging.getLevelName(value.strip().upper())
    if isinstance(candidate, int):
        return candidate
    return logging.INFO


def configure_logging(level: int | str = "INFO") -> None:
    """Send log records through a Rich handler on the shared console.

    Safe to call more than once: when the root logger already has handlers
    only its level is updated.
    """
    resolved = _resolve_level(level)
    root = logging.getLogger()
    if not root.hasHandlers():
        logging.basicConfig(
            level=resolved,
            format="%(name)s: %(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=console, show_path=False, markup=False)],
        )
    else:
        root.setLevel(resolved)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")
