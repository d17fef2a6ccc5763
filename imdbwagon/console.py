"""Rich console helpers for imdbwagon CLI output.

All user-facing output of the click commands goes through this module so that
colors, the NO_COLOR convention and CI detection are handled in one place.
Diagnostic detail belongs in the logger, not here.
"""

from __future__ import annotations

import os
from typing import Any, List, Optional, Sequence

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

_console: Optional[Console] = None

# Columns whose header contains one of these words are right-aligned
_NUMERIC_HEADER_WORDS = ("count", "size", "rows", "bytes")


def get_console() -> Console:
    """Get or create the shared Rich Console.

    Respects the NO_COLOR environment variable and detects CI environments.
    """
    global _console
    if _console is None:
        no_color = os.getenv("NO_COLOR", "").lower() in ("1", "true", "yes")
        is_ci = os.getenv("CI", "").lower() in ("1", "true", "yes")

        _console = Console(
            force_terminal=not (no_color or is_ci),
            no_color=no_color,
            highlight=False,
        )
    return _console


def success(message: str, emoji: bool = True) -> None:
    prefix = "✓ " if emoji else ""
    get_console().print(f"[green]{prefix}{message}[/green]")


def error(message: str, emoji: bool = True) -> None:
    prefix = "✗ " if emoji else ""
    get_console().print(f"[red]{prefix}{message}[/red]")


def warning(message: str, emoji: bool = True) -> None:
    prefix = "⚠ " if emoji else ""
    get_console().print(f"[yellow]{prefix}{message}[/yellow]")


def info(message: str, bold: bool = False) -> None:
    get_console().print(message, style="bold" if bold else "")


def status(message: str) -> None:
    """Display a progress message in blue."""
    get_console().print(f"[blue]{message}[/blue]")


def newline() -> None:
    get_console().print()


def header(title: str, style: str = "cyan") -> None:
    """Display a section header rule."""
    get_console().print(Rule(title, style=style))


def table(
    data: List[List[Any]],
    headers: List[str],
    title: Optional[str] = None,
) -> None:
    """Display rows in a bordered Rich table.

    Args:
        data: List of rows (each row is a list of values)
        headers: Column headers
        title: Optional table title
    """
    rich_table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )

    for column in headers:
        numeric = any(word in column.lower() for word in _NUMERIC_HEADER_WORDS)
        rich_table.add_column(column, justify="right" if numeric else "left")

    for row in data:
        rich_table.add_row(*[str(cell) for cell in row])

    get_console().print(rich_table)


def file_list(
    files: Sequence[str],
    max_display: int = 10,
    title: Optional[str] = None,
) -> None:
    """Display a list of file names, truncated after ``max_display`` entries."""
    console = get_console()

    if title:
        console.print(f"\n[green]{title}[/green]")

    for file in files[:max_display]:
        console.print(f"  {file}")

    if len(files) > max_display:
        console.print(f"  [dim]...and {len(files) - max_display} more[/dim]")


def confirm(message: str, default: bool = False, abort: bool = True) -> bool:
    """Prompt the user for confirmation (wraps click.confirm)."""
    import click

    return click.confirm(message, default=default, abort=abort)
