"""Keyword search over the catalog, independent of any project."""

from __future__ import annotations

from typing import Collection, Optional

from toolscout.models import Catalog, CatalogEntry, ScoredEntry

from .config import DEFAULT_CONFIG, ScoringConfig
from .recommender import sort_scored

NAME_POINTS = 10
DESCRIPTION_POINTS = 5
CATEGORY_POINTS = 3
TAG_POINTS = 2


def search_score(
    entry: CatalogEntry,
    query: str,
    official_boost: float = DEFAULT_CONFIG.search_official_boost,
) -> tuple[float, list[str]]:
    needle = query.lower()
    score = 0.0
    reasons: list[str] = []

    if needle in entry.name.lower():
        score += NAME_POINTS
        reasons.append("name match")
    if needle in entry.description.lower():
        score += DESCRIPTION_POINTS
        reasons.append("description match")
    if needle in entry.category.lower():
        score += CATEGORY_POINTS
        reasons.append("category match")

    # Only the first matching tag counts
    tag = next((t for t in entry.tags if needle in t.lower()), None)
    if tag is not None:
        score += TAG_POINTS
        reasons.append(f"tag: {tag}")

    if entry.metrics.official:
        score *= official_boost
    return score, reasons


def search(
    catalog: Catalog,
    query: str,
    *,
    max_results: Optional[int] = None,
    types: Optional[Collection[str]] = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> list[ScoredEntry]:
    """Score entries by direct text match against name, description, category and tags."""
    max_results = config.max_results if max_results is None else max_results
    allowed = set(types) if types else None

    results: list[ScoredEntry] = []
    for entry in catalog:
        if allowed is not None and entry.type not in allowed:
            continue
        score, reasons = search_score(entry, query, config.search_official_boost)
        if score > 0:
            results.append(ScoredEntry(item=entry, score=score, reasons=reasons))

    return sort_scored(results, config.tie_break)[:max_results]
