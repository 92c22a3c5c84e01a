"""Context-aware recommendation scoring.

Scores every catalog entry against a project fingerprint:

1. Signal weights (language, framework, dependency, file glob, keyword) are
   summed into a raw score. Entries with no matched signal are dropped.
2. Quality multipliers (official, security score) scale the raw score.
3. Context and tag-similarity bonuses are added when enabled.
4. The total is normalized against ``max_raw_score`` onto a 1-100 scale,
   filtered by ``min_score``, stably sorted and truncated.
"""

from __future__ import annotations

import logging
import math
from typing import Collection, Optional

from toolscout.analyzers.metadata import analyze_metadata
from toolscout.analyzers.models import ProjectFingerprint, ProjectMetadata
from toolscout.models import Catalog, CatalogEntry, ScoreBreakdown, ScoredEntry

from .config import DEFAULT_CONFIG, ScoringConfig
from .context import calculate_context_score
from .glob import match_glob
from .similarity import (
    SimilarityMatrix,
    build_similarity_matrix,
    calculate_similarity_score,
    extract_project_tags,
)

logger = logging.getLogger("toolscout.scoring")


def _matches(wanted: Collection[str], available: set[str]) -> list[str]:
    """Entries of ``wanted`` present in ``available`` (case-insensitive), in order, once each."""
    seen: set[str] = set()
    found = []
    for value in wanted:
        key = value.lower()
        if key in available and key not in seen:
            seen.add(key)
            found.append(value)
    return found


def signal_score(
    entry: CatalogEntry,
    fingerprint: ProjectFingerprint,
    description: Optional[str] = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> tuple[float, list[str]]:
    """Raw (pre-multiplier) score and the reasons for each matched signal."""
    weights = config.weights
    detection = entry.detection
    score = 0.0
    reasons: list[str] = []

    languages = _matches(detection.languages, {l.lower() for l in fingerprint.languages})
    if languages:
        score += len(languages) * weights.language
        reasons.append(f"language match: {', '.join(languages)}")

    frameworks = _matches(detection.frameworks, {f.lower() for f in fingerprint.frameworks})
    if frameworks:
        score += len(frameworks) * weights.framework
        reasons.append(f"framework match: {', '.join(frameworks)}")

    deps = _matches(detection.dependencies, {d.lower() for d in fingerprint.dependencies})
    if deps:
        score += len(deps) * weights.dependency
        reasons.append(f"dependency match: {', '.join(deps)}")

    patterns = [
        pattern
        for pattern in dict.fromkeys(detection.files)
        if any(match_glob(path, pattern) for path in fingerprint.files)
    ]
    if patterns:
        score += len(patterns) * weights.file
        reasons.append(f"file match: {', '.join(patterns)}")

    if description:
        text = description.lower()
        keywords = [
            kw
            for kw in _unique_ci([*detection.keywords, *entry.tags])
            if kw and kw.lower() in text
        ]
        if keywords:
            score += len(keywords) * weights.keyword
            reasons.append(f"keyword match: {', '.join(keywords)}")
        if entry.name and entry.name.lower() in text:
            score += weights.keyword * 2
            reasons.append(f"name mentioned: {entry.name}")

    return score, reasons


def _unique_ci(values: list[str]) -> list[str]:
    seen: set[str] = set()
    unique = []
    for value in values:
        if value.lower() not in seen:
            seen.add(value.lower())
            unique.append(value)
    return unique


def quality_multiplier(entry: CatalogEntry, config: ScoringConfig = DEFAULT_CONFIG) -> float:
    """Product of the official and security multipliers for an entry."""
    m = config.multipliers
    multiplier = 1.0
    if entry.metrics.official:
        multiplier *= m.official
    security = entry.metrics.security_score
    if security is not None:
        if security > m.high_security_threshold:
            multiplier *= m.high_security
        elif security < m.low_security_threshold:
            multiplier *= m.low_security
    return multiplier


def normalize_score(raw_score: float, max_raw_score: float) -> int:
    """Map a raw score onto 1-100 (half-up rounding, clamped)."""
    if raw_score <= 0:
        return 1
    normalized = raw_score / max_raw_score * 100
    return int(math.floor(min(100.0, max(1.0, normalized)) + 0.5))


def score_entry(
    entry: CatalogEntry,
    fingerprint: ProjectFingerprint,
    description: Optional[str] = None,
    config: ScoringConfig = DEFAULT_CONFIG,
    metadata: Optional[ProjectMetadata] = None,
    similarity: Optional[SimilarityMatrix] = None,
    project_tags: Optional[list[str]] = None,
) -> Optional[ScoredEntry]:
    """Score one entry; None when no detection signal matched."""
    raw, reasons = signal_score(entry, fingerprint, description, config)
    if raw <= 0:
        return None

    if entry.metrics.official:
        reasons.append("official")
    base = raw * quality_multiplier(entry, config)

    context_score = 0.0
    if config.enable_context_scoring and metadata is not None:
        context_score, context_reasons = calculate_context_score(entry, metadata, config.context)
        reasons.extend(context_reasons)

    similarity_score = 0.0
    if config.enable_similarity_scoring and similarity is not None:
        tags = project_tags if project_tags is not None else extract_project_tags(fingerprint)
        similarity_score, similarity_reasons = calculate_similarity_score(
            entry, tags, similarity, config.similarity
        )
        reasons.extend(similarity_reasons)

    final = normalize_score(base + context_score + similarity_score, config.max_raw_score)
    return ScoredEntry(
        item=entry,
        score=final,
        reasons=reasons,
        breakdown=ScoreBreakdown(
            base_score=base,
            context_score=context_score,
            similarity_score=similarity_score,
            final_score=final,
        ),
    )


def sort_scored(results: list[ScoredEntry], tie_break: str = "catalog") -> list[ScoredEntry]:
    """Stable sort by descending score; ties keep catalog order unless ``tie_break='stars'``."""
    if tie_break == "stars":
        return sorted(
            results,
            key=lambda r: (-r.score, -(r.item.metrics.stars or 0), r.item.id),
        )
    return sorted(results, key=lambda r: -r.score)


def recommend(
    catalog: Catalog,
    fingerprint: ProjectFingerprint,
    description: Optional[str] = None,
    *,
    max_results: Optional[int] = None,
    types: Optional[Collection[str]] = None,
    min_score: Optional[float] = None,
    config: ScoringConfig = DEFAULT_CONFIG,
    metadata: Optional[ProjectMetadata] = None,
    similarity: Optional[SimilarityMatrix] = None,
) -> list[ScoredEntry]:
    """Rank catalog entries for a project fingerprint.

    Args:
        catalog: The loaded catalog (read-only).
        fingerprint: Result of ProjectAnalyzer.analyze().
        description: Optional free text describing what the user wants.
        max_results: Result cap (defaults to ``config.max_results``).
        types: Only entries of these types are evaluated.
        min_score: Minimum normalized score (defaults to ``config.min_score``).
        config: Scoring constants.
        metadata: Precomputed project metadata; derived from the
            fingerprint when context scoring is enabled and none is given.
        similarity: Precomputed tag co-occurrence matrix; built from the
            catalog when similarity scoring is enabled and none is given.

    Returns:
        Scored entries, best first.
    """
    max_results = config.max_results if max_results is None else max_results
    min_score = config.min_score if min_score is None else min_score
    allowed = set(types) if types else None

    if config.enable_context_scoring and metadata is None:
        metadata = analyze_metadata(fingerprint)
    if config.enable_similarity_scoring and similarity is None:
        similarity = build_similarity_matrix(catalog)
    project_tags = extract_project_tags(fingerprint)

    results: list[ScoredEntry] = []
    for entry in catalog:
        if allowed is not None and entry.type not in allowed:
            continue
        scored = score_entry(
            entry,
            fingerprint,
            description,
            config=config,
            metadata=metadata,
            similarity=similarity,
            project_tags=project_tags,
        )
        if scored is not None and scored.score >= min_score:
            results.append(scored)

    logger.debug("Scored %d matching entries out of %d", len(results), len(catalog))
    return sort_scored(results, config.tie_break)[:max_results]
