"""Context bonuses: project size, monorepo layout and team scale."""

from __future__ import annotations

from typing import Iterable

from toolscout.analyzers.models import ProjectMetadata
from toolscout.models import CatalogEntry

from .config import ContextWeights

MONOREPO_TAGS = frozenset({"monorepo", "workspace", "nx", "turborepo", "lerna", "pnpm"})
LARGE_PROJECT_TAGS = ("ci/cd", "monitoring", "testing", "documentation")
SMALL_PROJECT_TAGS = ("quick-start", "beginner", "simple", "lightweight")
COLLABORATION_TAGS = ("collaboration", "team", "review", "workflow")
TEAM_SIZE_THRESHOLD = 5


def _has_tag_like(tags: Iterable[str], needles: Iterable[str]) -> bool:
    needles = tuple(needles)
    return any(needle in tag for tag in tags for needle in needles)


def size_matches(entry: CatalogEntry, metadata: ProjectMetadata) -> bool:
    tags = [t.lower() for t in entry.tags]
    if metadata.size in ("large", "enterprise"):
        return _has_tag_like(tags, LARGE_PROJECT_TAGS)
    if metadata.size == "small":
        return _has_tag_like(tags, SMALL_PROJECT_TAGS)
    return False


def calculate_context_score(
    entry: CatalogEntry,
    metadata: ProjectMetadata,
    weights: ContextWeights,
) -> tuple[float, list[str]]:
    """Each bonus contributes its weight at most once."""
    score = 0.0
    reasons: list[str] = []
    tags = [t.lower() for t in entry.tags]

    if metadata.kind == "monorepo" and any(t in MONOREPO_TAGS for t in tags):
        score += weights.monorepo_bonus
        reasons.append("monorepo support")

    if size_matches(entry, metadata):
        score += weights.size_match
        reasons.append(f"suited to {metadata.size} projects")

    if metadata.estimated_team_size > TEAM_SIZE_THRESHOLD and _has_tag_like(
        tags, COLLABORATION_TAGS
    ):
        score += weights.team_size_match
        reasons.append("team size fit")

    return score, reasons
