"""Console output helpers for the scaffolding engine.

All user-facing output goes through the Rich consoles defined here:
``console`` for normal progress lines on stdout and ``err_console`` for
warnings and errors on stderr.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def _printable(message: str) -> str:
    """Escape markup and any lone surrogates left over from undecodable argv bytes."""
    return escape(message.encode("utf-8", "backslashreplace").decode("utf-8"))


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{_printable(message)}[/bold green]")


def print_info(message: str) -> None:
    console.print(_printable(message))


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]{_printable(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message to stderr."""
    err_console.print(f"[bold yellow]{_printable(message)}[/bold yellow]")


def print_generator_table(
    rows: Iterable[tuple[str, str]], title: str = "Available generators"
) -> None:
    """Print a two-column generator name/description table.

    Args:
        rows: ``(name, description)`` pairs in display order.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Generator", style="bold", no_wrap=True)
    table.add_column("Description")

    for name, description in rows:
        table.add_row(name, description)

    console.print(table)
