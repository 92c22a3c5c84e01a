"""Unified CLI error handler for toolscout commands."""

from __future__ import annotations

import functools
import logging
import os
import traceback

import typer

from toolscout import ui
from toolscout.errors import (
    CatalogLoadError,
    ConfigError,
    EntryNotFoundError,
    InvalidInputError,
    ToolscoutError,
)

logger = logging.getLogger("toolscout.error_handler")


def _debug_mode() -> bool:
    """Check if debug output is enabled via TOOLSCOUT_DEBUG env var."""
    return os.environ.get("TOOLSCOUT_DEBUG", "").lower() in ("1", "true", "yes")


def _render_toolscout_error(e: ToolscoutError) -> None:
    """Render a ToolscoutError with Rich formatting and context."""
    console = ui.console
    console.print(f"\n[bold red]Error:[/bold red] {e}")

    if e.context and _debug_mode():
        context_parts = [
            f"  [dim]{key}:[/dim] {value}" for key, value in e.context.items() if value
        ]
        if context_parts:
            console.print("[dim]Context:[/dim]")
            for part in context_parts:
                console.print(part)

    # Actionable hints based on error type
    if isinstance(e, EntryNotFoundError):
        console.print("[dim]Run 'toolscout search <keyword>' to find entry names.[/dim]")
    elif isinstance(e, InvalidInputError) and e.context.get("field") == "types":
        console.print("[dim]Valid types: plugin, mcp, skill, workflow, hook, command, agent.[/dim]")
    elif isinstance(e, ConfigError):
        console.print("[dim]Run 'toolscout config show' to inspect the resolved configuration.[/dim]")
    elif isinstance(e, CatalogLoadError):
        console.print("[dim]Check TOOLSCOUT_CATALOG_DIR or catalog.data_dir in your config.[/dim]")


def handle_errors(func):
    """Decorator that catches ToolscoutError and renders formatted CLI output.

    Usage::

        @app.command()
        @handle_errors
        def my_command(...):
            ...  # no try/except needed
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ToolscoutError as e:
            _render_toolscout_error(e)
            if _debug_mode():
                ui.console.print(f"\n[dim]{traceback.format_exc()}[/dim]")
            raise typer.Exit(e.exit_code)
        except KeyboardInterrupt:
            ui.console.print("\n[dim]Interrupted.[/dim]")
            raise typer.Exit(130)
        except (typer.Exit, typer.Abort, SystemExit):
            raise
        except Exception as e:
            logger.debug("Unhandled error in %s", func.__name__, exc_info=True)
            ui.console.print(f"\n[bold red]Unexpected error:[/bold red] {e}")
            if _debug_mode():
                ui.console.print(f"\n[dim]{traceback.format_exc()}[/dim]")
            else:
                ui.console.print("[dim]Set TOOLSCOUT_DEBUG=1 for full traceback.[/dim]")
            raise typer.Exit(1)

    return wrapper
