"""Recommendation service: the operations behind the CLI and MCP surfaces.

Validates caller input, resolves the catalog and config, runs the analyzer
and scorers, and returns typed results from :mod:`toolscout.core`.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Iterable, Optional

from toolscout.analyzers.metadata import analyze_metadata
from toolscout.analyzers.models import ProjectFingerprint
from toolscout.analyzers.project_analyzer import ProjectAnalyzer
from toolscout.catalog import CatalogRepository
from toolscout.core import (
    AnalysisResult,
    CatalogStats,
    CategoryInfo,
    CategoryListing,
    EntryDetail,
    ProjectSummary,
    RecommendResult,
    SearchResult,
)
from toolscout.errors import EntryNotFoundError, InvalidInputError
from toolscout.formatters import format_recommendations
from toolscout.models import RECOMMENDATION_TYPES, Catalog, normalize_type
from toolscout.scoring.config import MAX_RESULTS, MIN_RESULTS, ScoringConfig
from toolscout.scoring.quality import calculate_quality_score
from toolscout.scoring.recommender import recommend
from toolscout.scoring.search import search
from toolscout.scoring.similarity import SimilarityMatrix, build_similarity_matrix

logger = logging.getLogger("toolscout.core.recommendation")


def validate_max_results(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError("max_results must be an integer", field="max_results", value=value)
    if not MIN_RESULTS <= value <= MAX_RESULTS:
        raise InvalidInputError(
            f"max_results must be between {MIN_RESULTS} and {MAX_RESULTS}, got {value}",
            field="max_results",
            value=value,
        )
    return value


def validate_types(types: Optional[Iterable[str]]) -> Optional[set[str]]:
    """Normalize a type filter; None or empty means "all types"."""
    if types is None:
        return None
    if isinstance(types, str):
        types = [types]
    normalized = set()
    for value in types:
        if not isinstance(value, str):
            raise InvalidInputError("types must be strings", field="types", value=value)
        canonical = normalize_type(value)
        if canonical not in RECOMMENDATION_TYPES:
            raise InvalidInputError(
                f"Unknown type '{value}'. Valid types: {', '.join(RECOMMENDATION_TYPES)}",
                field="types",
                value=value,
            )
        normalized.add(canonical)
    return normalized or None


def _require_text(value: object, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field} must be a non-empty string", field=field, value=value)
    return value.strip()


class RecommendationService:
    """Stateful front for the scorers.

    Args:
        repository: Catalog source; built from the config layer when omitted.
        config: Scoring constants; read from the config layer when omitted.
        max_depth: Analyzer depth limit; from config when omitted.
        max_files: Analyzer file cap; from config when omitted.
    """

    def __init__(
        self,
        repository: Optional[CatalogRepository] = None,
        config: Optional[ScoringConfig] = None,
        max_depth: Optional[int] = None,
        max_files: Optional[int] = None,
    ):
        if repository is None or config is None or max_depth is None or max_files is None:
            from toolscout.core.config_service import get_config_service

            settings = get_config_service()
            if repository is None:
                repository = CatalogRepository(
                    data_dir=settings.get_catalog_dir(),
                    catalog_file=settings.get_catalog_file(),
                    cache_ttl=settings.get_cache_ttl(),
                )
            config = config or settings.get_scoring_config()
            max_depth = settings.get_max_depth() if max_depth is None else max_depth
            max_files = settings.get_max_files() if max_files is None else max_files

        self.repository = repository
        self.config = config
        self.max_depth = max_depth
        self.max_files = max_files
        self._similarity: Optional[tuple[Catalog, SimilarityMatrix]] = None

    @property
    def catalog(self) -> Catalog:
        return self.repository.get()

    def _similarity_matrix(self, catalog: Catalog) -> SimilarityMatrix:
        # Rebuilt only when the repository hands out a different catalog
        if self._similarity is None or self._similarity[0] is not catalog:
            self._similarity = (catalog, build_similarity_matrix(catalog))
        return self._similarity[1]

    def fingerprint(self, project_path: str) -> ProjectFingerprint:
        path = _require_text(project_path, "project_path")
        analyzer = ProjectAnalyzer(max_depth=self.max_depth, max_files=self.max_files)
        return analyzer.analyze(Path(path))

    def analyze(self, project_path: str) -> AnalysisResult:
        """Fingerprint a project and describe its size and shape."""
        fingerprint = self.fingerprint(project_path)
        metadata = analyze_metadata(fingerprint)
        return AnalysisResult(
            fingerprint=fingerprint.to_dict(),
            size=metadata.size,
            kind=metadata.kind,
            estimated_team_size=metadata.estimated_team_size,
            workspace_count=metadata.workspace_count,
        )

    def recommend(
        self,
        project_path: str,
        description: Optional[str] = None,
        types: Optional[Iterable[str]] = None,
        max_results: Optional[int] = None,
    ) -> RecommendResult:
        """Analyze ``project_path`` and rank catalog entries for it."""
        if description is not None and not isinstance(description, str):
            raise InvalidInputError("description must be a string", field="description", value=description)
        limit = validate_max_results(max_results, self.config.max_results)
        allowed = validate_types(types)
        fingerprint = self.fingerprint(project_path)
        return self.recommend_for(fingerprint, description, allowed, limit)

    def recommend_for(
        self,
        fingerprint: ProjectFingerprint,
        description: Optional[str] = None,
        types: Optional[set[str]] = None,
        max_results: Optional[int] = None,
    ) -> RecommendResult:
        """Rank catalog entries for an already computed fingerprint."""
        catalog = self.catalog
        similarity = (
            self._similarity_matrix(catalog) if self.config.enable_similarity_scoring else None
        )
        results = recommend(
            catalog,
            fingerprint,
            description or None,
            max_results=max_results,
            types=types,
            config=self.config,
            similarity=similarity,
        )
        logger.info("Found %d recommendations for %s", len(results), fingerprint.path)
        return RecommendResult(
            project=ProjectSummary(
                path=str(fingerprint.path),
                languages=sorted(fingerprint.languages),
                frameworks=sorted(fingerprint.frameworks),
                dependency_count=len(fingerprint.dependencies),
            ),
            recommendations=results,
            formatted=format_recommendations(results),
        )

    def search(
        self,
        query: str,
        types: Optional[Iterable[str]] = None,
        max_results: Optional[int] = None,
    ) -> SearchResult:
        """Keyword search over the catalog."""
        text = _require_text(query, "query")
        limit = validate_max_results(max_results, self.config.max_results)
        allowed = validate_types(types)
        results = search(self.catalog, text, max_results=limit, types=allowed, config=self.config)
        return SearchResult(query=text, results=results)

    def details(self, name: str) -> EntryDetail:
        """Look up one entry by name or id (case-insensitive)."""
        needle = _require_text(name, "name")
        entry = self.catalog.find(needle)
        if entry is None:
            raise EntryNotFoundError(needle)
        quality = calculate_quality_score(entry)
        return EntryDetail(entry=entry.to_dict(), quality_score=quality.total, quality_tier=quality.tier)

    def list_categories(self) -> CategoryListing:
        """Entry counts per category, most populated first."""
        catalog = self.catalog
        counts: Counter = Counter()
        types: dict[str, list[str]] = {}
        for entry in catalog:
            counts[entry.category] += 1
            seen = types.setdefault(entry.category, [])
            if entry.type not in seen:
                seen.append(entry.type)
        # Counter preserves first-seen order, sorted() is stable
        ordered = sorted(counts.items(), key=lambda kv: -kv[1])
        return CategoryListing(
            categories=[CategoryInfo(name=name, count=count, types=types[name]) for name, count in ordered],
            total_items=len(catalog),
        )

    def stats(self) -> CatalogStats:
        catalog = self.catalog
        by_type: Counter = Counter(entry.type for entry in catalog)
        by_source: Counter = Counter(entry.metrics.source for entry in catalog)
        return CatalogStats(
            version=catalog.version,
            last_updated=catalog.last_updated,
            total_items=len(catalog),
            by_type=dict(by_type),
            by_source=dict(by_source),
            official_count=sum(1 for entry in catalog if entry.metrics.official),
        )
