"""Catalog loading and caching.

A catalog is either a single file (``.json``, ``.yaml`` or ``.yml``) holding
``{"version", "lastUpdated", "items": [...]}``, or a data directory with the
per-type files ``plugins.json``, ``mcp-servers.json`` and ``skills.json``,
each holding ``{"items": [...]}`` (or a bare list of items).

Load failures never propagate: the repository logs a warning and serves
an empty catalog so the engine keeps answering queries.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Optional

import yaml

from toolscout.errors import CatalogLoadError
from toolscout.models import Catalog, CatalogEntry

logger = logging.getLogger("toolscout.catalog")

BUNDLED_DATA_DIR = Path(__file__).parent / "data"

# Merged in this order
CATALOG_FILES = ("plugins.json", "mcp-servers.json", "skills.json")

DEFAULT_CACHE_TTL = 3600.0


def _read_document(path: Path) -> Any:
    """Parse a JSON or YAML catalog file."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogLoadError(f"Cannot read catalog file {path}: {e}", str(path)) from e
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogLoadError(f"Cannot parse catalog file {path}: {e}", str(path)) from e


def _raw_items(document: Any, path: Path) -> list:
    if document is None:
        return []
    if isinstance(document, list):
        return document
    if isinstance(document, dict):
        items = document.get("items", [])
        if isinstance(items, list):
            return items
    raise CatalogLoadError(f"Catalog file {path} has no 'items' list", str(path))


def parse_items(raw_items: list, source: str = "") -> list[CatalogEntry]:
    """Build entries from raw dicts, skipping (and logging) malformed ones."""
    entries = []
    for index, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object item #%d in %s", index, source or "catalog")
            continue
        try:
            entries.append(CatalogEntry.from_dict(raw))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(
                "Skipping malformed item #%d (%s) in %s: %s",
                index,
                raw.get("id", "?"),
                source or "catalog",
                e,
            )
    return entries


def load_catalog_file(path: Path) -> Catalog:
    """Load a single-file catalog. Raises CatalogLoadError on failure."""
    document = _read_document(path)
    items = parse_items(_raw_items(document, path), str(path))
    meta = document if isinstance(document, dict) else {}
    return Catalog(
        version=str(meta.get("version", "1.0.0")),
        last_updated=str(meta.get("lastUpdated", "")),
        items=tuple(items),
    )


def load_catalog_dir(data_dir: Path) -> Catalog:
    """Load and merge the per-type catalog files from ``data_dir``.

    A missing directory or missing files contribute nothing. Raises
    CatalogLoadError when a present file cannot be parsed.
    """
    items: list[CatalogEntry] = []
    version = "1.0.0"
    last_updated = ""
    for name in CATALOG_FILES:
        path = data_dir / name
        if not path.is_file():
            continue
        document = _read_document(path)
        items.extend(parse_items(_raw_items(document, path), str(path)))
        if isinstance(document, dict):
            version = str(document.get("version", version))
            last_updated = max(last_updated, str(document.get("lastUpdated", "")))
    return Catalog(version=version, last_updated=last_updated, items=tuple(items))


class CatalogRepository:
    """Loads the catalog once and serves it until the cache TTL expires.

    Args:
        data_dir: Directory holding the per-type catalog files. Defaults to
            the catalog bundled with the package.
        catalog_file: A single catalog file; takes precedence over ``data_dir``.
        cache_ttl: Seconds a loaded catalog is served before reloading.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        catalog_file: Optional[Path] = None,
        cache_ttl: float = DEFAULT_CACHE_TTL,
    ):
        self.data_dir = Path(data_dir).expanduser() if data_dir else BUNDLED_DATA_DIR
        self.catalog_file = Path(catalog_file).expanduser() if catalog_file else None
        self.cache_ttl = cache_ttl
        self._catalog: Optional[Catalog] = None
        self._loaded_at = 0.0

    @property
    def source(self) -> Path:
        return self.catalog_file or self.data_dir

    def get(self) -> Catalog:
        """Return the cached catalog, loading it if missing or stale."""
        if self._catalog is None or time.monotonic() - self._loaded_at > self.cache_ttl:
            self._catalog = self._load()
            self._loaded_at = time.monotonic()
        return self._catalog

    def reload(self) -> Catalog:
        """Drop the cache and load the catalog again."""
        self._catalog = None
        return self.get()

    def _load(self) -> Catalog:
        try:
            if self.catalog_file is not None:
                catalog = load_catalog_file(self.catalog_file)
            else:
                catalog = load_catalog_dir(self.data_dir)
        except CatalogLoadError as e:
            logger.warning("%s; serving an empty catalog", e)
            return Catalog.empty()
        logger.debug("Loaded %d catalog entries from %s", len(catalog), self.source)
        return catalog
