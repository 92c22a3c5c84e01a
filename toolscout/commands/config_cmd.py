"""CLI commands for configuration management."""
from __future__ import annotations

import typer

from toolscout import ui
from toolscout.completions import complete_config_key
from toolscout.error_handler import handle_errors

app = typer.Typer(
    name="config",
    help="Manage toolscout configuration.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _parse_value(value: str) -> object:
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            pass
    return value


@app.command()
@handle_errors
def show():
    """Display the resolved configuration and the layer each value came from."""
    from toolscout.core.config_service import flatten, get_config_service

    svc = get_config_service()
    info = svc.show()
    # Fails early on a bad [scoring] section
    svc.get_scoring_config()

    sources = info["sources"]
    ui.info_panel(
        "Config Sources",
        f"Global:  {sources['global_config'] or 'not found'}\n"
        f"Project: {sources['project_config'] or 'not found'}",
    )
    origins = info["origins"]
    for section, values in info["resolved"].items():
        if not isinstance(values, dict):
            continue
        rows = {}
        for key, value in flatten(values):
            shown = value if value != "" else "not set"
            origin = origins[f"{section}.{key}"]
            rows[key] = f"{shown} (from {origin})"
        if rows:
            ui.key_value_table(section.capitalize(), rows)


@app.command("set")
@handle_errors
def set_value(
    key: str = typer.Argument(..., help="Config key in dotted notation (e.g. scan.max_depth)",
                              autocompletion=complete_config_key),
    value: str = typer.Argument(..., help="Value to set"),
):
    """Set a global configuration value."""
    from toolscout.core.config_service import get_config_service
    from toolscout.errors import ConfigError

    if "." not in key:
        raise ConfigError(f"Config keys take the form section.name, got '{key}'", context={"key": key})
    parsed_value = _parse_value(value)
    get_config_service().set_global(key, parsed_value)
    ui.success_panel("Config updated", f"{key} = {parsed_value}")


@app.command()
@handle_errors
def init():
    """Create a .toolscout.toml project config in the current directory."""
    from toolscout.core.config_service import get_config_service

    path = get_config_service().init_project_config()
    ui.success_panel("Created project config", str(path))


@app.command()
@handle_errors
def path():
    """Show all configuration file locations."""
    from toolscout.core.config_service import get_config_service

    ui.key_value_table("Config Paths", get_config_service().config_paths())
