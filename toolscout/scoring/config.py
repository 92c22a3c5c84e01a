"""Scoring weights, multipliers and thresholds.

Every constant here is a default; the ``[scoring]`` section of the layered
config overrides any of them (see :meth:`ScoringConfig.from_dict`).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from toolscout.errors import ConfigError

# Bounds for any requested result count
MIN_RESULTS = 1
MAX_RESULTS = 50


@dataclass(frozen=True)
class SignalWeights:
    """Points added per matched detection signal."""
    language: float = 5.0
    framework: float = 4.0
    dependency: float = 3.0
    file: float = 2.0
    keyword: float = 1.0


@dataclass(frozen=True)
class QualityMultipliers:
    official: float = 1.3
    high_security: float = 1.1  # security score above high_security_threshold
    low_security: float = 0.7  # security score below low_security_threshold
    high_security_threshold: float = 80.0
    low_security_threshold: float = 50.0


@dataclass(frozen=True)
class ContextWeights:
    size_match: float = 2.0
    monorepo_bonus: float = 3.0
    team_size_match: float = 1.5


@dataclass(frozen=True)
class SimilarityThresholds:
    min_cooccurrence: int = 3
    min_jaccard: float = 0.3
    max_bonus: float = 5.0


@dataclass(frozen=True)
class ScoringConfig:
    weights: SignalWeights = field(default_factory=SignalWeights)
    multipliers: QualityMultipliers = field(default_factory=QualityMultipliers)
    context: ContextWeights = field(default_factory=ContextWeights)
    similarity: SimilarityThresholds = field(default_factory=SimilarityThresholds)
    min_score: float = 1.0
    max_results: int = 20
    # Empirical ceiling of the raw score; not a guaranteed bound
    max_raw_score: float = 50.0
    search_official_boost: float = 1.2
    enable_context_scoring: bool = True
    enable_similarity_scoring: bool = True
    tie_break: str = "catalog"  # "catalog" or "stars"

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> ScoringConfig:
        """Build a config from a (possibly partial) ``[scoring]`` mapping."""
        config = cls()
        if not data:
            return config

        nested = {
            "weights": SignalWeights,
            "multipliers": QualityMultipliers,
            "context": ContextWeights,
            "similarity": SimilarityThresholds,
        }
        changes: dict[str, Any] = {}
        for key, value in data.items():
            if key in nested:
                if not isinstance(value, Mapping):
                    raise ConfigError(f"scoring.{key} must be a table", context={"key": key})
                changes[key] = _replace_fields(getattr(config, key), value, f"scoring.{key}")
            elif key in {f.name for f in fields(cls)}:
                changes[key] = _coerce(getattr(config, key), value, f"scoring.{key}")
            else:
                raise ConfigError(f"Unknown scoring option: {key}", context={"key": key})

        config = replace(config, **changes)
        if config.tie_break not in ("catalog", "stars"):
            raise ConfigError(
                f"scoring.tie_break must be 'catalog' or 'stars', got '{config.tie_break}'",
                context={"key": "tie_break"},
            )
        if config.max_raw_score <= 0:
            raise ConfigError("scoring.max_raw_score must be positive", context={"key": "max_raw_score"})
        if not MIN_RESULTS <= config.max_results <= MAX_RESULTS:
            raise ConfigError(
                f"scoring.max_results must be between {MIN_RESULTS} and {MAX_RESULTS}, got {config.max_results}",
                context={"key": "max_results"},
            )
        return config


def _replace_fields(current: Any, values: Mapping[str, Any], prefix: str) -> Any:
    known = {f.name for f in fields(current)}
    changes = {}
    for key, value in values.items():
        if key not in known:
            raise ConfigError(f"Unknown scoring option: {prefix}.{key}", context={"key": key})
        changes[key] = _coerce(getattr(current, key), value, f"{prefix}.{key}")
    return replace(current, **changes)


def _coerce(current: Any, value: Any, name: str) -> Any:
    """Coerce a config value (possibly an env var string) to the default's type."""
    try:
        if isinstance(current, bool):
            if isinstance(value, str):
                return value.strip().lower() in ("true", "1", "yes")
            return bool(value)
        if isinstance(current, int):
            return int(value)
        if isinstance(current, float):
            return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}: {value!r}", context={"key": name}) from e
    return str(value)


DEFAULT_CONFIG = ScoringConfig()
