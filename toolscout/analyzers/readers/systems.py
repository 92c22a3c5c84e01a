"""Go go.mod and Rust Cargo.toml readers."""

from __future__ import annotations

import tomllib
from pathlib import Path

from ..models import ManifestContribution
from .base import clean_description, fails_soft, map_frameworks, read_first

GO_FRAMEWORKS: dict[str, str] = {
    "github.com/gin-gonic/gin": "gin",
    "github.com/labstack/echo/v4": "echo",
    "github.com/gofiber/fiber/v2": "fiber",
    "github.com/gorilla/mux": "gorilla",
    "github.com/go-chi/chi/v5": "chi",
    "gorm.io/gorm": "gorm",
    "github.com/spf13/cobra": "cobra",
}

CARGO_FRAMEWORKS: dict[str, str] = {
    "axum": "axum",
    "actix-web": "actix-web",
    "rocket": "rocket",
    "tokio": "tokio",
    "async-std": "async-std",
    "serde": "serde",
    "sqlx": "sqlx",
    "diesel": "diesel",
    "sea-orm": "sea-orm",
    "tauri": "tauri",
    "leptos": "leptos",
    "yew": "yew",
    "bevy": "bevy",
}


@fails_soft
def read_go_mod(root: Path) -> ManifestContribution:
    """Collect module paths from ``require`` blocks and single-line requires."""
    found = read_first(root, ["go.mod"])
    if found is None:
        return ManifestContribution.empty()
    _, text = found

    deps: set[str] = set()
    in_require = False
    for line in text.splitlines():
        stripped = line.split("//", 1)[0].strip()
        if not stripped:
            continue
        if stripped.startswith("require ("):
            in_require = True
            continue
        if in_require:
            if stripped == ")":
                in_require = False
                continue
            deps.add(stripped.split()[0])
        elif stripped.startswith("require "):
            parts = stripped.split()
            if len(parts) >= 2:
                deps.add(parts[1])

    return ManifestContribution(
        dependencies=deps,
        frameworks=map_frameworks(deps, GO_FRAMEWORKS),
    )


@fails_soft
def read_cargo_toml(root: Path) -> ManifestContribution:
    found = read_first(root, ["Cargo.toml"])
    if found is None:
        return ManifestContribution.empty()
    _, text = found
    data = tomllib.loads(text)

    deps = {name.lower() for name in (data.get("dependencies") or {})}
    return ManifestContribution(
        dependencies=deps,
        frameworks=map_frameworks(deps, CARGO_FRAMEWORKS),
        description=clean_description(data.get("package", {}).get("description")),
    )
