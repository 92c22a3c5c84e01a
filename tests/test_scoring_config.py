"""Tests for overridable scoring constants."""
import pytest

from toolscout.errors import ConfigError
from toolscout.scoring.config import DEFAULT_CONFIG, ScoringConfig


def test_empty_mapping_gives_defaults():
    assert ScoringConfig.from_dict({}) == DEFAULT_CONFIG
    assert ScoringConfig.from_dict(None) == DEFAULT_CONFIG


def test_nested_override_keeps_siblings():
    config = ScoringConfig.from_dict({"multipliers": {"official": 1.5}, "similarity": {"min_cooccurrence": "2"}})
    assert config.multipliers.official == 1.5
    assert config.multipliers.low_security == 0.7
    assert config.similarity.min_cooccurrence == 2


def test_env_strings_coerced():
    config = ScoringConfig.from_dict({"enable_context_scoring": "no", "max_raw_score": "40"})
    assert config.enable_context_scoring is False
    assert config.max_raw_score == 40.0


@pytest.mark.parametrize(
    "data, match",
    [
        ({"weights": 3}, "must be a table"),
        ({"weights": {"colour": 1}}, "scoring.weights.colour"),
        ({"max_results": "lots"}, "max_results"),
        ({"tie_break": "random"}, "tie_break"),
        ({"max_raw_score": 0}, "positive"),
        ({"max_results": 0}, "max_results"),
        ({"max_results": 500}, "max_results"),
    ],
)
def test_invalid(data, match):
    with pytest.raises(ConfigError, match=match):
        ScoringConfig.from_dict(data)
