from __future__ import annotations

from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..models import Event

# Singleton console for consistent output across the CLI
_CONSOLE: Optional[Console] = None


def get_console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False, soft_wrap=False)
    return _CONSOLE


def print_banner(title: str, subtitle: Optional[str] = None) -> None:
    console = get_console()
    console.rule(Text(title, style="bold bright_cyan"), style="bright_cyan")
    if subtitle:
        console.print(Text(subtitle, style="bright_white"), justify="center")


def info(message: str) -> None:
    get_console().print(f"[bold cyan]ℹ[/bold cyan] {message}")


def success(message: str) -> None:
    get_console().print(f"[bold green]✓[/bold green] {message}")


def error(message: str) -> None:
    get_console().print(f"[bold red]✗[/bold red] {message}")


def events_table(events: Iterable[Event], title: str = "Events") -> Table:
    table = Table(title=title, header_style="bold bright_cyan")
    table.add_column("ID", justify="right")
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Title")
    table.add_column("Venue")
    for event in events:
        table.add_row(
            str(event.id),
            event.event_date.isoformat(),
            event.time or "",
            event.title,
            event.venue or "",
        )
    return table
