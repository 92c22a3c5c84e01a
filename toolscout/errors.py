"""Custom exception hierarchy for toolscout.

All toolscout-specific exceptions derive from ToolscoutError. Each exception
carries an optional ``context`` dict with structured metadata (entry name,
field name, file path, etc.) that the CLI error handler can render.

Exception hierarchy::

    ToolscoutError
    ├── InvalidInputError
    ├── EntryNotFoundError
    ├── CatalogLoadError
    └── ConfigError
"""
from __future__ import annotations

from typing import Optional


class ToolscoutError(Exception):
    """Base class for all toolscout exceptions.

    Args:
        message: Human-readable error description.
        context: Optional dict of structured metadata.
    """

    exit_code: int = 1

    def __init__(self, message: str, context: Optional[dict] = None):
        self.context = context or {}
        super().__init__(message)


# ── Caller Errors ──────────────────────────────────────────────────

class InvalidInputError(ToolscoutError):
    """Raised when an operation receives a missing or malformed argument."""

    exit_code = 2

    def __init__(self, message: str, field: str = "", value: object = None):
        super().__init__(
            message,
            context={"field": field, "value": value},
        )


class EntryNotFoundError(ToolscoutError):
    """Raised when no catalog entry matches a name or id."""

    def __init__(self, name: str):
        super().__init__(
            f"Catalog entry '{name}' not found",
            context={"name": name},
        )


# ── Internal Errors ────────────────────────────────────────────────

class CatalogLoadError(ToolscoutError):
    """Raised by catalog loaders when a catalog file cannot be read or parsed.

    The repository catches this and degrades to an empty catalog.
    """

    def __init__(self, message: str, file_path: str = ""):
        super().__init__(message, context={"file": file_path})


class ConfigError(ToolscoutError):
    """Raised when configuration is invalid or missing."""
    pass
