"""Service layer for toolscout.

All services return typed dataclasses. Services never import from
toolscout.ui, toolscout.cli, or typer. Consumer layers (CLI, MCP) handle
presentation; ``to_dict`` gives the camelCase wire shape both of them emit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from toolscout.models import ScoredEntry


def _result_dict(scored: ScoredEntry) -> dict:
    item = scored.item
    return {
        "name": item.name,
        "type": item.type,
        "description": item.description,
        "score": scored.score,
        "reasons": list(scored.reasons),
        "url": item.url,
        "install": item.install.to_dict(),
        "isOfficial": item.metrics.official,
    }


@dataclass
class ProjectSummary:
    """Short project description attached to recommendation results."""

    path: str
    languages: list[str]
    frameworks: list[str]
    dependency_count: int

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "languages": self.languages,
            "frameworks": self.frameworks,
            "dependencyCount": self.dependency_count,
        }


@dataclass
class RecommendResult:
    project: ProjectSummary
    recommendations: list[ScoredEntry]
    formatted: str = ""

    @property
    def total_found(self) -> int:
        return len(self.recommendations)

    def to_dict(self) -> dict:
        return {
            "project": self.project.to_dict(),
            "recommendations": [_result_dict(r) for r in self.recommendations],
            "formatted": self.formatted,
            "totalFound": self.total_found,
        }


@dataclass
class SearchResult:
    query: str
    results: list[ScoredEntry]

    @property
    def total_found(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict:
        return {
            "query": self.query,
            "results": [
                {**_result_dict(r), "category": r.item.category} for r in self.results
            ],
            "totalFound": self.total_found,
        }


@dataclass
class EntryDetail:
    """Full projection of one catalog entry plus its quality score."""

    entry: dict
    quality_score: float
    quality_tier: str

    def to_dict(self) -> dict:
        return {
            **self.entry,
            "qualityScore": round(self.quality_score, 1),
            "qualityTier": self.quality_tier,
        }


@dataclass
class CategoryInfo:
    name: str
    count: int
    types: list[str] = field(default_factory=list)


@dataclass
class CategoryListing:
    categories: list[CategoryInfo]
    total_items: int

    def to_dict(self) -> dict:
        return {
            "categories": [
                {"name": c.name, "count": c.count, "types": c.types} for c in self.categories
            ],
            "totalItems": self.total_items,
        }


@dataclass
class CatalogStats:
    version: str
    last_updated: str
    total_items: int
    by_type: dict[str, int]
    by_source: dict[str, int]
    official_count: int

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "lastUpdated": self.last_updated,
            "totalItems": self.total_items,
            "byType": self.by_type,
            "bySource": self.by_source,
            "officialCount": self.official_count,
        }


@dataclass
class AnalysisResult:
    """Project fingerprint plus the metadata derived from it."""

    fingerprint: dict
    size: str
    kind: str
    estimated_team_size: int
    workspace_count: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            **self.fingerprint,
            "metadata": {
                "size": self.size,
                "kind": self.kind,
                "estimatedTeamSize": self.estimated_team_size,
                "workspaceCount": self.workspace_count,
            },
        }
