"""Shared UI theme, console, and display helpers for toolscout."""

import json
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from toolscout.models import ScoredEntry

# ── Output Mode State ──
_plain_mode: bool = False


def set_plain_mode(enabled: bool = True) -> None:
    """Enable or disable plain text output (no colors, no panels, ASCII only)."""
    global _plain_mode, console
    _plain_mode = enabled
    if enabled:
        console = Console(no_color=True, highlight=False)
    else:
        console = Console(theme=TOOLSCOUT_THEME)


def is_plain() -> bool:
    return _plain_mode


def print_json_output(data: dict | list) -> None:
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


# ── Theme ──
TOOLSCOUT_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "yellow",
    "error": "bold red",
    "score.high": "bold green",
    "score.mid": "yellow",
    "score.low": "dim",
    "brand": "bold cyan",
    "muted": "dim",
})

console = Console(theme=TOOLSCOUT_THEME)
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Route toolscout logs through rich on stderr (DEBUG when verbose)."""
    root = logging.getLogger("toolscout")
    root.handlers.clear()
    root.addHandler(RichHandler(console=err_console, show_path=False, rich_tracebacks=verbose))
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def score_style(score: float) -> str:
    if score >= 50:
        return "score.high"
    if score >= 20:
        return "score.mid"
    return "score.low"


def results_table(title: str, results: list[ScoredEntry], show_category: bool = False) -> None:
    """Display scored entries as a table (or plain lines)."""
    if _plain_mode:
        print(title)
        for index, result in enumerate(results, 1):
            item = result.item
            official = " (official)" if item.metrics.official else ""
            print(f"  {index}. [{result.score:g}] {item.name}{official} ({item.type})")
            if result.reasons:
                print(f"       {', '.join(result.reasons)}")
        print()
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    if show_category:
        table.add_column("Category")
    table.add_column("Why", style="dim")

    for index, result in enumerate(results, 1):
        item = result.item
        name = f"{item.name} [green]*[/green]" if item.metrics.official else item.name
        row = [
            str(index),
            f"[{score_style(result.score)}]{result.score:g}[/]",
            name,
            item.type,
        ]
        if show_category:
            row.append(item.category)
        row.append(", ".join(result.reasons))
        table.add_row(*row)

    console.print(table)


def key_value_table(title: str, rows: dict) -> None:
    if _plain_mode:
        print(title)
        for key, value in rows.items():
            print(f"  {key}: {value}")
        print()
        return

    table = Table(title=title, show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in rows.items():
        table.add_row(str(key), str(value))
    console.print(table)


def success_panel(title: str, content=None):
    if _plain_mode:
        print(f"OK: {title}")
        if content:
            print(f"  {content}")
        return

    console.print(Panel(
        content or "",
        title=f"[bold green]{title}[/bold green]",
        border_style="green",
    ))


def info_panel(title: str, content: str):
    if _plain_mode:
        print(f"== {title} ==")
        print(content)
        return
    console.print(Panel(content, title=f"[bold cyan]{title}[/bold cyan]", border_style="cyan"))

