"""Quality score for catalog entries (0-100).

Components:
- official status: 0 or 40
- stars: 0-30, ``log10(stars + 1) * 10`` capped
- freshness: 0-20 from days since ``lastUpdated`` (10 when unknown)
- source: official 10, awesome-list 7, community 5
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from toolscout.models import CatalogEntry

SOURCE_POINTS = {"official": 10, "awesome-list": 7, "community": 5}

# (max days since update, points), checked in order
FRESHNESS_STEPS = ((30, 20), (90, 15), (180, 10), (365, 5))


@dataclass
class QualityScore:
    total: float
    official: float
    stars: float
    freshness: float
    source: float

    @property
    def tier(self) -> str:
        return quality_tier(self.total)


def _parse_date(value: str) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def freshness_points(last_updated: Optional[str], now: Optional[datetime] = None) -> float:
    if not last_updated:
        return 10
    updated = _parse_date(last_updated)
    if updated is None:
        return 10
    now = now or datetime.now(timezone.utc)
    days = (now - updated).days
    for max_days, points in FRESHNESS_STEPS:
        if days < max_days:
            return points
    return 0


def stars_points(stars: Optional[int]) -> float:
    if not stars:
        return 0
    return min(math.log10(stars + 1) * 10, 30)


def calculate_quality_score(entry: CatalogEntry, now: Optional[datetime] = None) -> QualityScore:
    official = 40 if entry.metrics.official else 0
    stars = stars_points(entry.metrics.stars)
    freshness = freshness_points(entry.metrics.last_updated, now)
    source = SOURCE_POINTS.get(entry.metrics.source, 5)
    return QualityScore(
        total=official + stars + freshness + source,
        official=official,
        stars=stars,
        freshness=freshness,
        source=source,
    )


def quality_tier(score: float) -> str:
    if score >= 80:
        return "excellent"
    if score >= 60:
        return "good"
    if score >= 40:
        return "fair"
    return "low"


def quality_badge(score: float) -> str:
    if score >= 80:
        return "***"
    if score >= 60:
        return "**"
    if score >= 40:
        return "*"
    return ""
