"""Shared fixtures for toolscout tests."""
import json
from pathlib import Path

import pytest

from toolscout.models import Catalog, CatalogEntry


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point HOME and cwd at temporary directories for every test.

    Keeps tests away from real config files and clears TOOLSCOUT_* env vars.
    """
    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(workdir)

    from toolscout.core.config_service import ENV_VAR_MAP, reset_config_service

    for env_var in [*ENV_VAR_MAP, "TOOLSCOUT_DEBUG"]:
        monkeypatch.delenv(env_var, raising=False)
    reset_config_service()

    import toolscout.mcp.server as server
    server.reset_service()

    from toolscout import ui
    ui.set_plain_mode(False)

    yield home

    reset_config_service()
    server.reset_service()


def build_entry(
    id: str,
    name: str = "",
    type: str = "skill",
    description: str = "",
    category: str = "general",
    tags=(),
    detection=None,
    metrics=None,
    install=None,
) -> CatalogEntry:
    """Build a CatalogEntry from the JSON shape with sensible defaults."""
    return CatalogEntry.from_dict({
        "id": id,
        "name": name or id,
        "type": type,
        "url": f"https://example.com/{id}",
        "description": description,
        "author": {"name": "tester"},
        "category": category,
        "tags": list(tags),
        "detection": detection or {},
        "metrics": metrics or {"source": "community"},
        "install": install or {"method": "manual"},
    })


def build_catalog(*entries: CatalogEntry) -> Catalog:
    return Catalog(version="1.0.0", last_updated="2026-01-01", items=tuple(entries))


@pytest.fixture
def make_entry():
    return build_entry


@pytest.fixture
def make_catalog():
    return build_catalog


@pytest.fixture
def sample_catalog():
    """A small catalog covering every scoring signal."""
    return build_catalog(
        build_entry(
            "jest-helper",
            "Jest Helper",
            description="Writes Jest unit tests",
            category="testing",
            tags=["testing", "jest"],
            detection={"dependencies": ["jest"], "files": ["jest.config.js"]},
        ),
        build_entry(
            "react-kit",
            "React Kit",
            type="plugin",
            description="Component scaffolding for React apps",
            category="frontend",
            tags=["react", "frontend"],
            detection={"frameworks": ["react"], "languages": ["typescript"]},
            metrics={"source": "official", "isOfficial": True, "securityScore": 90},
        ),
        build_entry(
            "postgres",
            "Postgres Helper",
            type="mcp",
            description="database helper",
            category="database",
            tags=["database", "sql"],
            detection={"dependencies": ["pg"], "keywords": ["database"]},
        ),
        build_entry(
            "rust-tools",
            "Rust Tools",
            description="Clippy and cargo helpers",
            category="language-support",
            tags=["rust"],
            detection={"languages": ["rust"]},
        ),
    )


@pytest.fixture
def catalog_dir(tmp_path, sample_catalog):
    """Write the sample catalog as per-type JSON files."""
    data_dir = tmp_path / "catalog"
    data_dir.mkdir()
    files = {"plugin": "plugins.json", "mcp": "mcp-servers.json", "skill": "skills.json"}
    grouped: dict[str, list] = {name: [] for name in files.values()}
    for entry in sample_catalog:
        grouped[files[entry.type]].append(entry.to_dict())
    for name, items in grouped.items():
        (data_dir / name).write_text(json.dumps({
            "version": "1.0.0",
            "lastUpdated": "2026-01-01",
            "items": items,
        }))
    return data_dir


@pytest.fixture
def node_project(tmp_path) -> Path:
    """A small React + Jest project tree."""
    root = tmp_path / "webapp"
    (root / "src" / "components").mkdir(parents=True)
    (root / "node_modules" / "react").mkdir(parents=True)
    (root / "node_modules" / "react" / "index.js").write_text("module.exports = {}")
    (root / "package.json").write_text(json.dumps({
        "name": "webapp",
        "description": "A demo web app",
        "dependencies": {"react": "^18.0.0", "pg": "^8.0.0"},
        "devDependencies": {"jest": "^29.0.0", "typescript": "^5.0.0"},
    }))
    (root / "tsconfig.json").write_text("{}")
    (root / "jest.config.js").write_text("module.exports = {}")
    (root / "src" / "index.tsx").write_text("export {}")
    (root / "src" / "components" / "Button.tsx").write_text("export {}")
    return root
