#!/usr/bin/env python3
"""
toolscout: fingerprint a project and find the skills, plugins and MCP
servers that fit it.
"""
from typing import List, Optional

import typer

from toolscout import ui
from toolscout.completions import complete_entry_name, complete_type
from toolscout.error_handler import handle_errors

app = typer.Typer(
    name="toolscout",
    help="Project-aware recommendations for editor tooling.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

from toolscout.commands import config_cmd

app.add_typer(config_cmd.app, name="config", help="Manage configuration", rich_help_panel="Advanced")


def _service():
    from toolscout.core.recommendation_service import RecommendationService
    return RecommendationService()


@app.callback()
def main_callback(
    plain: bool = typer.Option(False, "--plain", help="Plain text output (no colors or tables)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr."),
):
    """Project-aware recommendations for editor tooling."""
    from toolscout.core.config_service import get_config_service

    ui.setup_logging(verbose)
    if plain or get_config_service().is_plain_output():
        ui.set_plain_mode(True)


@app.command(rich_help_panel="Discover")
@handle_errors
def analyze(
    path: str = typer.Argument(".", help="Project directory"),
    json_output: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """[bold cyan]Fingerprint[/bold cyan] a project: languages, frameworks, dependencies."""
    result = _service().analyze(path)
    data = result.to_dict()
    if json_output:
        ui.print_json_output(data)
        return

    ui.key_value_table(f"Project: {data['path']}", {
        "languages": ", ".join(data["languages"]) or "-",
        "frameworks": ", ".join(data["frameworks"]) or "-",
        "dependencies": len(data["dependencies"]),
        "files scanned": len(data["files"]),
        "size": result.size,
        "kind": result.kind,
        "estimated team size": result.estimated_team_size,
    })
    if data["description"]:
        ui.console.print(f"[dim]{data['description']}[/dim]")


@app.command(rich_help_panel="Discover")
@handle_errors
def recommend(
    path: str = typer.Argument(".", help="Project directory"),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="What you are building or looking for",
    ),
    types: Optional[List[str]] = typer.Option(
        None, "--type", "-t", help="Only recommend these types (repeatable)",
        autocompletion=complete_type,
    ),
    max_results: Optional[int] = typer.Option(None, "--max-results", "-n", help="1-50, default 20"),
    json_output: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """[bold cyan]Recommend[/bold cyan] catalog entries for a project."""
    result = _service().recommend(path, description, types, max_results)
    if json_output:
        ui.print_json_output(result.to_dict())
        return
    if ui.is_plain():
        print(result.formatted)
        return

    project = result.project
    ui.info_panel(
        "Project",
        f"{project.path}\n"
        f"languages: {', '.join(project.languages) or '-'}\n"
        f"frameworks: {', '.join(project.frameworks) or '-'}\n"
        f"dependencies: {project.dependency_count}",
    )
    if not result.recommendations:
        ui.console.print("[muted]No recommendations matched this project.[/muted]")
        return
    ui.results_table(f"Recommendations ({result.total_found})", result.recommendations)


@app.command(rich_help_panel="Discover")
@handle_errors
def search(
    query: str = typer.Argument(..., help="Keyword to look for"),
    types: Optional[List[str]] = typer.Option(
        None, "--type", "-t", help="Only search these types (repeatable)",
        autocompletion=complete_type,
    ),
    max_results: Optional[int] = typer.Option(None, "--max-results", "-n", help="1-50, default 20"),
    json_output: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """[bold cyan]Search[/bold cyan] the catalog by keyword."""
    result = _service().search(query, types, max_results)
    if json_output:
        ui.print_json_output(result.to_dict())
        return
    if not result.results:
        ui.console.print(f"No entries match '{result.query}'.")
        return
    ui.results_table(f"Results for '{result.query}' ({result.total_found})", result.results, show_category=True)


@app.command(rich_help_panel="Catalog")
@handle_errors
def show(
    name: str = typer.Argument(..., help="Entry name or id", autocompletion=complete_entry_name),
    json_output: bool = typer.Option(False, "--json", help="Print JSON"),
):
    """Show everything the catalog knows about one entry."""
    from toolscout.scoring.quality import quality_badge

    detail = _service().details(name)
    data = detail.to_dict()
    if json_output:
        ui.print_json_output(data)
        return

    metrics = data.get("metrics", {})
    install = data.get("install", {})
    rows = {
        "id": data["id"],
        "type": data["type"],
        "category": data["category"],
        "author": data["author"].get("name", ""),
        "url": data["url"],
        "tags": ", ".join(data["tags"]) or "-",
        "source": metrics.get("source", ""),
        "stars": metrics.get("stars", "-"),
        "security": metrics.get("securityScore", "-"),
        "quality": f"{data['qualityScore']} ({data['qualityTier']}) {quality_badge(detail.quality_score)}".rstrip(),
        "install": install.get("command") or install.get("method", ""),
    }
    ui.key_value_table(data["name"], rows)
    if data["description"]:
        ui.console.print(data["description"])


@app.command(rich_help_panel="Catalog")
@handle_errors
def categories(json_output: bool = typer.Option(False, "--json", help="Print JSON")):
    """List catalog categories, largest first."""
    listing = _service().list_categories()
    if json_output:
        ui.print_json_output(listing.to_dict())
        return
    if ui.is_plain():
        for category in listing.categories:
            print(f"{category.name}: {category.count} ({', '.join(category.types)})")
        print(f"total: {listing.total_items}")
        return

    from rich.table import Table

    table = Table(title=f"Categories ({listing.total_items} entries)")
    table.add_column("Category", style="cyan")
    table.add_column("Entries", justify="right")
    table.add_column("Types", style="dim")
    for category in listing.categories:
        table.add_row(category.name, str(category.count), ", ".join(category.types))
    ui.console.print(table)


@app.command(rich_help_panel="Catalog")
@handle_errors
def stats(json_output: bool = typer.Option(False, "--json", help="Print JSON")):
    """Catalog totals by type and source."""
    result = _service().stats()
    if json_output:
        ui.print_json_output(result.to_dict())
        return

    rows = {
        "version": result.version,
        "last updated": result.last_updated or "-",
        "total entries": result.total_items,
        "official": result.official_count,
    }
    rows.update({f"type: {k}": v for k, v in sorted(result.by_type.items())})
    rows.update({f"source: {k}": v for k, v in sorted(result.by_source.items())})
    ui.key_value_table("Catalog", rows)


@app.command(rich_help_panel="Advanced")
@handle_errors
def readers():
    """List manifest readers, including ones installed as plugins."""
    from toolscout.analyzers.readers import DEFAULT_READERS
    from toolscout.plugins import list_all_plugins

    rows = {reader.__name__: "built-in" for reader in DEFAULT_READERS}
    for info in list_all_plugins():
        status = "loaded" if info.loaded else f"failed: {info.error}"
        rows[info.name] = f"plugin {info.module} ({status})"
    ui.key_value_table("Manifest readers", rows)


def main():
    app()


if __name__ == "__main__":
    main()
