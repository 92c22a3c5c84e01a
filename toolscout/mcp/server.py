"""MCP server exposing toolscout services as tools.

Runs via STDIO transport. Entry point: `toolscout-mcp` console script.

Usage:
    Claude Desktop: {"mcpServers": {"toolscout": {"command": "toolscout-mcp"}}}
    Claude Code:    claude mcp add toolscout -- toolscout-mcp
"""
from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional

from mcp.server.fastmcp import FastMCP

from toolscout.errors import ToolscoutError

logger = logging.getLogger("toolscout.mcp")

mcp = FastMCP("toolscout")

_service = None


def get_service():
    """Shared RecommendationService, so the catalog cache survives between calls."""
    global _service
    if _service is None:
        from toolscout.core.recommendation_service import RecommendationService

        _service = RecommendationService()
    return _service


def reset_service() -> None:
    """Drop the shared service (useful for testing)."""
    global _service
    _service = None


# ---------------------------------------------------------------------------
# Recommendation tools
# ---------------------------------------------------------------------------


@mcp.tool()
async def recommend_tools(
    project_path: str,
    description: Optional[str] = None,
    types: Optional[list[str]] = None,
    max_results: int = 20,
) -> dict:
    """Analyze a project and recommend skills, plugins and MCP servers for it.

    Args:
        project_path: Path to the project directory.
        description: What you are building or looking for.
        types: Only recommend these types (plugin, mcp, skill, workflow, hook, command, agent).
        max_results: Maximum number of results (1-50).
    """
    try:
        svc = get_service()
        # Scanning the tree is blocking I/O
        result = await asyncio.to_thread(svc.recommend, project_path, description, types, max_results)
        return {"status": "ok", **result.to_dict()}
    except ToolscoutError as e:
        return {"status": "error", "error": str(e)}


@mcp.tool()
async def search_tools(
    query: str,
    types: Optional[list[str]] = None,
    max_results: int = 20,
) -> dict:
    """Search the catalog by keyword.

    Args:
        query: Keyword matched against name, description, category and tags.
        types: Only search these types.
        max_results: Maximum number of results (1-50).
    """
    try:
        result = get_service().search(query, types, max_results)
        return {"status": "ok", **result.to_dict()}
    except ToolscoutError as e:
        return {"status": "error", "error": str(e)}


@mcp.tool()
async def analyze_project(project_path: str) -> dict:
    """Fingerprint a project: languages, frameworks, dependencies and size.

    Args:
        project_path: Path to the project directory.
    """
    try:
        svc = get_service()
        result = await asyncio.to_thread(svc.analyze, project_path)
        return {"status": "ok", "project": result.to_dict()}
    except ToolscoutError as e:
        return {"status": "error", "error": str(e)}


# ---------------------------------------------------------------------------
# Catalog tools
# ---------------------------------------------------------------------------


@mcp.tool()
async def get_tool_details(name: str) -> dict:
    """Get everything the catalog knows about one entry.

    Args:
        name: Entry name or id (case-insensitive).
    """
    try:
        detail = get_service().details(name)
        return {"status": "ok", "item": detail.to_dict()}
    except ToolscoutError as e:
        return {"status": "error", "error": str(e)}


@mcp.tool()
async def list_categories() -> dict:
    """List catalog categories with entry counts, largest first."""
    try:
        return {"status": "ok", **get_service().list_categories().to_dict()}
    except ToolscoutError as e:
        return {"status": "error", "error": str(e)}


@mcp.tool()
async def get_stats() -> dict:
    """Catalog statistics: totals by type and source, official count."""
    try:
        return {"status": "ok", **get_service().stats().to_dict()}
    except ToolscoutError as e:
        return {"status": "error", "error": str(e)}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    """Run the toolscout MCP server via STDIO transport."""
    # stdout carries the protocol
    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
