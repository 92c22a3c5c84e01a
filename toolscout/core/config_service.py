"""Layered settings for toolscout.

Each layer is a nested dict of TOML tables. Later layers win::

    defaults < ~/.config/toolscout/config.toml < ./.toolscout.toml < TOOLSCOUT_* env

A ``.env`` file in the working directory is loaded into the environment
before the env layer is read. Env values stay strings until one of the
typed accessors coerces them.
"""
from __future__ import annotations

import copy
import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import tomli_w
from dotenv import load_dotenv

from toolscout.errors import ConfigError
from toolscout.scoring.config import ScoringConfig

logger = logging.getLogger("toolscout.config")


DEFAULTS: dict[str, Any] = {
    "catalog": {
        "data_dir": "",
        "catalog_file": "",
        "cache_ttl": 3600,
    },
    "scan": {
        "max_depth": 5,
        "max_files": 1000,
    },
    "scoring": {},
    "ui": {
        "plain_output": False,
    },
}

ENV_VAR_MAP = {
    "TOOLSCOUT_CATALOG_DIR": "catalog.data_dir",
    "TOOLSCOUT_CATALOG_FILE": "catalog.catalog_file",
    "TOOLSCOUT_MAX_DEPTH": "scan.max_depth",
    "TOOLSCOUT_MAX_FILES": "scan.max_files",
    "TOOLSCOUT_MAX_RESULTS": "scoring.max_results",
    "TOOLSCOUT_CONTEXT_SCORING": "scoring.enable_context_scoring",
    "TOOLSCOUT_SIMILARITY_SCORING": "scoring.enable_similarity_scoring",
    "TOOLSCOUT_PLAIN": "ui.plain_output",
}

# Lowest precedence first
LAYER_NAMES = ("default", "global", "project", "env")


def global_config_file() -> Path:
    return Path.home() / ".config" / "toolscout" / "config.toml"


def project_config_file() -> Path:
    return Path.cwd() / ".toolscout.toml"


# ── Table helpers ──


def load_table(path: Path) -> dict:
    """Parse a TOML file. A missing or broken file is an empty table."""
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}


def save_table(table: dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomli_w.dumps(table), encoding="utf-8")


def merge_tables(base: dict, override: dict) -> dict:
    """Return ``base`` updated with ``override``; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_tables(current, value)
        else:
            merged[key] = value
    return merged


def lookup(table: dict, dotted_key: str, default: Any = None) -> Any:
    node: Any = table
    for part in dotted_key.split("."):
        if not isinstance(node, dict) or node.get(part) is None:
            return default
        node = node[part]
    return node


def assign(table: dict, dotted_key: str, value: Any) -> None:
    """Set ``scan.max_depth``-style keys, replacing non-table parents."""
    *parents, leaf = dotted_key.split(".")
    node = table
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value


def flatten(table: dict, prefix: str = "") -> Iterator[tuple[str, Any]]:
    """Yield ``(dotted_key, value)`` for every leaf of a nested table."""
    for key, value in table.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            yield from flatten(value, f"{dotted}.")
        else:
            yield dotted, value


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _env_layer() -> dict:
    layer: dict = {}
    for var, dotted_key in ENV_VAR_MAP.items():
        value = os.environ.get(var)
        if value is not None:
            assign(layer, dotted_key, value)
    return layer


@dataclass
class ResolvedConfig:
    """Merged settings plus the layers they were built from."""

    data: dict
    layers: dict[str, dict] = field(default_factory=dict)
    files: dict[str, Path] = field(default_factory=dict)

    def get(self, dotted_key: str, default: Any = None) -> Any:
        return lookup(self.data, dotted_key, default)

    def origin(self, dotted_key: str) -> str:
        """Name of the highest-precedence layer that sets ``dotted_key``."""
        for name in reversed(LAYER_NAMES):
            if lookup(self.layers.get(name, {}), dotted_key) is not None:
                return name
        return "unset"


class ConfigService:
    """Resolves the layers lazily and caches the result until the next write."""

    def __init__(self):
        self._resolved: Optional[ResolvedConfig] = None

    def resolve(self, force: bool = False) -> ResolvedConfig:
        if self._resolved is None or force:
            self._resolved = self._build()
        return self._resolved

    def _build(self) -> ResolvedConfig:
        load_dotenv(Path.cwd() / ".env")
        paths = {"global": global_config_file(), "project": project_config_file()}
        layers = {
            "default": copy.deepcopy(DEFAULTS),
            "global": load_table(paths["global"]),
            "project": load_table(paths["project"]),
            "env": _env_layer(),
        }
        data: dict = {}
        for name in LAYER_NAMES:
            if layers[name] and name in paths:
                logger.debug("Applying %s config from %s", name, paths[name])
            data = merge_tables(data, layers[name])
        return ResolvedConfig(
            data=data,
            layers=layers,
            files={name: path for name, path in paths.items() if path.is_file()},
        )

    def get(self, dotted_key: str, default: Any = None) -> Any:
        return self.resolve().get(dotted_key, default)

    def _typed(self, dotted_key: str, cast: Callable[[Any], Any]) -> Any:
        value = self.get(dotted_key, lookup(DEFAULTS, dotted_key))
        try:
            return cast(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"Invalid value for {dotted_key}: {value!r}", context={"key": dotted_key}
            ) from e

    def _path(self, dotted_key: str) -> Optional[Path]:
        value = self.get(dotted_key, "")
        return Path(value).expanduser() if value else None

    def get_scoring_config(self) -> ScoringConfig:
        """Scoring constants with the ``[scoring]`` table applied."""
        return ScoringConfig.from_dict(self.get("scoring", {}))

    def get_max_depth(self) -> int:
        return self._typed("scan.max_depth", int)

    def get_max_files(self) -> int:
        return self._typed("scan.max_files", int)

    def get_cache_ttl(self) -> float:
        return self._typed("catalog.cache_ttl", float)

    def is_plain_output(self) -> bool:
        return self._typed("ui.plain_output", _to_bool)

    def get_catalog_dir(self) -> Optional[Path]:
        """Configured catalog directory; None means the bundled catalog."""
        return self._path("catalog.data_dir")

    def get_catalog_file(self) -> Optional[Path]:
        return self._path("catalog.catalog_file")

    def set_global(self, dotted_key: str, value: Any) -> None:
        """Write one key into the global config file."""
        path = global_config_file()
        table = load_table(path)
        assign(table, dotted_key, value)
        save_table(table, path)
        self._resolved = None
        logger.info("Wrote %s to %s", dotted_key, path)

    def init_project_config(self) -> Path:
        """Create ``.toolscout.toml`` in the working directory with the scan defaults."""
        path = project_config_file()
        if path.exists():
            raise ConfigError(f"Project config already exists: {path}", context={"path": str(path)})
        save_table({"scan": dict(DEFAULTS["scan"])}, path)
        self._resolved = None
        logger.info("Created %s", path)
        return path

    def show(self) -> dict:
        """Merged settings, the layer each key came from, and the files read."""
        resolved = self.resolve(force=True)
        global_file = resolved.files.get("global")
        project_file = resolved.files.get("project")
        return {
            "resolved": resolved.data,
            "origins": {key: resolved.origin(key) for key, _ in flatten(resolved.data)},
            "sources": {
                "global_config": str(global_file) if global_file else None,
                "project_config": str(project_file) if project_file else None,
            },
        }

    def config_paths(self) -> dict[str, str]:
        """Config file and catalog locations, each marked as present or missing."""

        def status(path: Path) -> str:
            return f"{path} ({'exists' if path.exists() else 'not found'})"

        catalog = self.get_catalog_file() or self.get_catalog_dir()
        return {
            "global_config": status(global_config_file()),
            "project_config": status(project_config_file()),
            "catalog": status(catalog) if catalog else "bundled",
        }


_service: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    """Process-wide ConfigService."""
    global _service
    if _service is None:
        _service = ConfigService()
    return _service


def reset_config_service() -> None:
    """Forget the process-wide service so the next call re-reads every layer."""
    global _service
    _service = None
