"""Shell completion functions for the toolscout CLI."""
from __future__ import annotations

from toolscout.models import RECOMMENDATION_TYPES


def complete_type(incomplete: str) -> list[str]:
    """Complete recommendation type names."""
    return [t for t in RECOMMENDATION_TYPES if t.startswith(incomplete)]


def complete_entry_name(incomplete: str) -> list[str]:
    """Complete catalog entry names from the configured catalog."""
    from toolscout.core.recommendation_service import RecommendationService

    needle = incomplete.lower()
    return [e.name for e in RecommendationService().catalog if e.name.lower().startswith(needle)]


def complete_config_key(incomplete: str) -> list[str]:
    """Complete dotted config keys."""
    from toolscout.core.config_service import ENV_VAR_MAP

    keys = sorted(set(ENV_VAR_MAP.values()) | {"catalog.cache_ttl", "scoring.tie_break"})
    return [k for k in keys if k.startswith(incomplete)]
