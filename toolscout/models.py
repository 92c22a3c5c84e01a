"""Core catalog data models for toolscout.

Catalog entries are immutable once loaded. ``from_dict`` constructors accept
the JSON/YAML shape produced by the catalog build pipeline (camelCase keys).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

# ── Enumerations ──
RECOMMENDATION_TYPES: tuple[str, ...] = (
    "plugin",
    "mcp",
    "skill",
    "workflow",
    "hook",
    "command",
    "agent",
)

SOURCE_TYPES: tuple[str, ...] = ("official", "community", "awesome-list")

INSTALL_METHODS: tuple[str, ...] = ("plugin", "mcp-add", "manual")

# Alternative spellings accepted on load
TYPE_ALIASES: dict[str, str] = {
    "mcp-server": "mcp",
    "mcp_server": "mcp",
}

INSTALL_METHOD_ALIASES: dict[str, str] = {
    "plugin-install": "plugin",
    "protocol-add": "mcp-add",
}


def normalize_type(value: str) -> str:
    """Map a recommendation type (or one of its aliases) to its canonical name."""
    lowered = value.strip().lower()
    return TYPE_ALIASES.get(lowered, lowered)


def _str_tuple(values: Any) -> tuple[str, ...]:
    if not values:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(str(v) for v in values)


def _mapping(value: Any, field_name: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"{field_name} must be a mapping, got {type(value).__name__}")
    return value


def _text(value: Any, field_name: str, default: str = "") -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise TypeError(f"{field_name} must be a string, got {type(value).__name__}")
    return value or default


# ── Entry Models ──
@dataclass(frozen=True)
class Author:
    name: str
    url: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Any) -> Author:
        if isinstance(d, str):
            return cls(name=d)
        d = _mapping(d, "author")
        return cls(name=d.get("name", "unknown"), url=d.get("url"), email=d.get("email"))

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"name": self.name}
        if self.url:
            data["url"] = self.url
        if self.email:
            data["email"] = self.email
        return data


@dataclass(frozen=True)
class Detection:
    """Signals matched against a project fingerprint. Every field defaults to empty."""

    dependencies: tuple[str, ...] = ()
    files: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()
    frameworks: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> Detection:
        d = _mapping(d, "detection")
        return cls(
            dependencies=_str_tuple(d.get("dependencies")),
            files=_str_tuple(d.get("files")),
            languages=_str_tuple(d.get("languages")),
            frameworks=_str_tuple(d.get("frameworks")),
            keywords=_str_tuple(d.get("keywords")),
        )

    def to_dict(self) -> dict:
        return {
            name: list(getattr(self, name))
            for name in ("dependencies", "files", "languages", "frameworks", "keywords")
            if getattr(self, name)
        }


@dataclass(frozen=True)
class Metrics:
    source: str = "community"
    security_score: Optional[float] = None
    stars: Optional[int] = None
    is_official: Optional[bool] = None
    last_updated: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> Metrics:
        d = _mapping(d, "metrics")
        source = d.get("source", "community")
        if source not in SOURCE_TYPES:
            raise ValueError(f"Unknown source type: {source}")
        security = d.get("securityScore")
        stars = d.get("stars")
        return cls(
            source=source,
            security_score=float(security) if security is not None else None,
            stars=int(stars) if stars is not None else None,
            is_official=d.get("isOfficial"),
            last_updated=d.get("lastUpdated"),
        )

    @property
    def official(self) -> bool:
        """Explicit ``isOfficial`` flag, falling back to the source type."""
        if self.is_official is not None:
            return bool(self.is_official)
        return self.source == "official"

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"source": self.source}
        if self.security_score is not None:
            data["securityScore"] = self.security_score
        if self.stars is not None:
            data["stars"] = self.stars
        if self.is_official is not None:
            data["isOfficial"] = self.is_official
        if self.last_updated:
            data["lastUpdated"] = self.last_updated
        return data


@dataclass(frozen=True)
class InstallInfo:
    method: str = "manual"
    command: Optional[str] = None
    marketplace: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> InstallInfo:
        d = _mapping(d, "install")
        method = d.get("method", "manual")
        method = INSTALL_METHOD_ALIASES.get(method, method)
        if method not in INSTALL_METHODS:
            raise ValueError(f"Unknown install method: {method}")
        return cls(method=method, command=d.get("command"), marketplace=d.get("marketplace"))

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"method": self.method}
        if self.command:
            data["command"] = self.command
        if self.marketplace:
            data["marketplace"] = self.marketplace
        return data


@dataclass(frozen=True)
class CatalogEntry:
    """One recommendable unit: a skill, plugin, MCP server, workflow, etc."""

    id: str
    name: str
    type: str
    url: str
    description: str
    author: Author
    category: str
    tags: tuple[str, ...] = ()
    detection: Detection = field(default_factory=Detection)
    metrics: Metrics = field(default_factory=Metrics)
    install: InstallInfo = field(default_factory=InstallInfo)

    @classmethod
    def from_dict(cls, d: dict) -> CatalogEntry:
        entry_type = normalize_type(d["type"])
        if entry_type not in RECOMMENDATION_TYPES:
            raise ValueError(f"Unknown recommendation type: {d['type']}")
        return cls(
            id=str(d["id"]),
            name=str(d["name"]),
            type=entry_type,
            url=_text(d.get("url"), "url"),
            description=_text(d.get("description"), "description"),
            author=Author.from_dict(d.get("author")),
            category=_text(d.get("category"), "category", "other"),
            tags=_str_tuple(d.get("tags")),
            detection=Detection.from_dict(d.get("detection")),
            metrics=Metrics.from_dict(d.get("metrics")),
            install=InstallInfo.from_dict(d.get("install")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "url": self.url,
            "description": self.description,
            "author": self.author.to_dict(),
            "category": self.category,
            "tags": list(self.tags),
            "detection": self.detection.to_dict(),
            "metrics": self.metrics.to_dict(),
            "install": self.install.to_dict(),
        }


@dataclass(frozen=True)
class Catalog:
    """Read-only, ordered collection of catalog entries."""

    version: str
    last_updated: str
    items: tuple[CatalogEntry, ...] = ()

    @classmethod
    def empty(cls) -> Catalog:
        return cls(version="0.0.0", last_updated="", items=())

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def find(self, name: str) -> Optional[CatalogEntry]:
        """Find the first entry whose name or id equals ``name`` (case-insensitive)."""
        needle = name.strip().lower()
        for item in self.items:
            if item.name.lower() == needle or item.id.lower() == needle:
                return item
        return None


# ── Scoring Results ──
@dataclass
class ScoreBreakdown:
    """How a recommendation score was assembled."""

    base_score: float = 0.0
    context_score: float = 0.0
    similarity_score: float = 0.0
    final_score: float = 0.0


@dataclass
class ScoredEntry:
    item: CatalogEntry
    score: float
    reasons: list[str] = field(default_factory=list)
    breakdown: Optional[ScoreBreakdown] = None
