"""Tag co-occurrence similarity.

A co-occurrence matrix is built once per catalog: for every pair of tags, the
number of entries carrying both. The Jaccard similarity of two tags is
``|A and B| / |A or B|`` over the sets of entries carrying each tag.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from itertools import combinations
from typing import Iterable

from toolscout.analyzers.models import ProjectFingerprint
from toolscout.models import Catalog, CatalogEntry

from .config import SimilarityThresholds

MAX_PROJECT_DEPENDENCY_TAGS = 10


@dataclass
class SimilarityMatrix:
    cooccurrence: dict[str, Counter] = field(default_factory=lambda: defaultdict(Counter))
    tag_counts: Counter = field(default_factory=Counter)

    def pair_count(self, tag1: str, tag2: str) -> int:
        row = self.cooccurrence.get(tag1)
        return row[tag2] if row else 0


def build_similarity_matrix(catalog: Catalog | Iterable[CatalogEntry]) -> SimilarityMatrix:
    matrix = SimilarityMatrix()
    for entry in catalog:
        tags = sorted({t.lower() for t in entry.tags})
        matrix.tag_counts.update(tags)
        for tag1, tag2 in combinations(tags, 2):
            matrix.cooccurrence[tag1][tag2] += 1
            matrix.cooccurrence[tag2][tag1] += 1
    return matrix


def extract_project_tags(fingerprint: ProjectFingerprint) -> list[str]:
    """Languages, frameworks and the first ten dependencies (sorted), lower-cased."""
    tags = [
        *sorted(fingerprint.languages),
        *sorted(fingerprint.frameworks),
        *sorted(fingerprint.dependencies)[:MAX_PROJECT_DEPENDENCY_TAGS],
    ]
    return [t.lower() for t in tags]


def jaccard_similarity(
    tag1: str,
    tag2: str,
    matrix: SimilarityMatrix,
    thresholds: SimilarityThresholds,
) -> float:
    if tag1 == tag2:
        return 1.0
    together = matrix.pair_count(tag1, tag2)
    if together < thresholds.min_cooccurrence:
        return 0.0
    union = matrix.tag_counts[tag1] + matrix.tag_counts[tag2] - together
    return together / union if union > 0 else 0.0


def calculate_similarity_score(
    entry: CatalogEntry,
    project_tags: list[str],
    matrix: SimilarityMatrix,
    thresholds: SimilarityThresholds,
) -> tuple[float, list[str]]:
    total = 0.0
    reasons: list[str] = []
    item_tags = [t.lower() for t in entry.tags]

    for project_tag in project_tags:
        for item_tag in item_tags:
            similarity = jaccard_similarity(project_tag, item_tag, matrix, thresholds)
            if similarity >= thresholds.min_jaccard:
                total += similarity
                reasons.append(f"similar tag: {project_tag} ~ {item_tag}")

    return min(total, thresholds.max_bonus), reasons
