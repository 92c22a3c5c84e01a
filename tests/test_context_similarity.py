"""Tests for context and tag-similarity bonuses."""

from pathlib import Path

import pytest

from toolscout.analyzers.models import ProjectFingerprint, ProjectMetadata
from toolscout.scoring.config import ContextWeights, SimilarityThresholds
from toolscout.scoring.context import calculate_context_score
from toolscout.scoring.similarity import (
    build_similarity_matrix,
    calculate_similarity_score,
    extract_project_tags,
    jaccard_similarity,
)


def metadata(size="medium", kind="application", team=1):
    return ProjectMetadata(
        size=size, kind=kind, estimated_team_size=team, file_count=0, language_count=0
    )


class TestContextScore:
    def test_monorepo_bonus(self, make_entry):
        entry = make_entry("m", tags=["turborepo"])
        score, reasons = calculate_context_score(entry, metadata(kind="monorepo"), ContextWeights())
        assert score == 3.0
        assert reasons == ["monorepo support"]

    def test_large_project_tags(self, make_entry):
        entry = make_entry("l", tags=["ci/cd"])
        score, reasons = calculate_context_score(entry, metadata(size="enterprise"), ContextWeights())
        assert score == 2.0
        assert reasons == ["suited to enterprise projects"]

    def test_small_project_tags(self, make_entry):
        entry = make_entry("s", tags=["lightweight"])
        score, _ = calculate_context_score(entry, metadata(size="small"), ContextWeights())
        assert score == 2.0

    def test_team_bonus(self, make_entry):
        entry = make_entry("t", tags=["code-review"])
        score, reasons = calculate_context_score(entry, metadata(team=10), ContextWeights())
        assert score == 1.5
        assert reasons == ["team size fit"]

    def test_no_bonus(self, make_entry):
        entry = make_entry("n", tags=["testing"])
        assert calculate_context_score(entry, metadata(), ContextWeights()) == (0.0, [])


class TestSimilarity:
    @pytest.fixture
    def catalog(self, make_entry, make_catalog):
        entries = [make_entry(f"r{i}", tags=["react", "nextjs"]) for i in range(3)]
        entries.append(make_entry("v", tags=["vue"]))
        entries.append(make_entry("target", tags=["nextjs", "vercel"]))
        return make_catalog(*entries)

    def test_matrix_counts(self, catalog):
        matrix = build_similarity_matrix(catalog)
        assert matrix.pair_count("react", "nextjs") == 3
        assert matrix.pair_count("nextjs", "react") == 3
        assert matrix.tag_counts["nextjs"] == 4
        assert matrix.pair_count("vue", "react") == 0

    def test_jaccard(self, catalog):
        matrix = build_similarity_matrix(catalog)
        thresholds = SimilarityThresholds()
        # 3 together / (3 react + 4 nextjs - 3)
        assert jaccard_similarity("react", "nextjs", matrix, thresholds) == pytest.approx(0.75)
        assert jaccard_similarity("react", "react", matrix, thresholds) == 1.0
        assert jaccard_similarity("react", "vue", matrix, thresholds) == 0.0

    def test_score_for_related_tag(self, catalog):
        matrix = build_similarity_matrix(catalog)
        target = catalog.find("target")
        score, reasons = calculate_similarity_score(target, ["react"], matrix, SimilarityThresholds())
        assert score == pytest.approx(0.75)
        assert reasons == ["similar tag: react ~ nextjs"]

    def test_bonus_capped(self, make_entry):
        entry = make_entry("e", tags=["a", "b", "c", "d", "e", "f"])
        matrix = build_similarity_matrix([entry])
        score, _ = calculate_similarity_score(
            entry, ["a", "b", "c", "d", "e", "f"], matrix, SimilarityThresholds()
        )
        assert score == 5.0

    def test_project_tags(self):
        fp = ProjectFingerprint(
            path=Path("/p"),
            languages={"TypeScript"},
            frameworks={"react"},
            dependencies={f"dep{i:02d}" for i in range(15)},
        )
        tags = extract_project_tags(fp)
        assert tags[:2] == ["typescript", "react"]
        assert len(tags) == 12
        assert tags[-1] == "dep09"
