"""Tests for the recommendation service layer."""

import pytest

from toolscout.catalog import CatalogRepository
from toolscout.core.recommendation_service import (
    RecommendationService,
    validate_max_results,
    validate_types,
)
from toolscout.errors import ConfigError, EntryNotFoundError, InvalidInputError
from toolscout.scoring.config import ScoringConfig


@pytest.fixture
def service(catalog_dir):
    return RecommendationService(repository=CatalogRepository(data_dir=catalog_dir))


class TestValidation:
    @pytest.mark.parametrize("value", [0, 51, -3])
    def test_max_results_out_of_range(self, value):
        with pytest.raises(InvalidInputError, match="between 1 and 50"):
            validate_max_results(value, 20)

    @pytest.mark.parametrize("value", ["10", 2.5, True])
    def test_max_results_not_an_int(self, value):
        with pytest.raises(InvalidInputError):
            validate_max_results(value, 20)

    def test_max_results_default(self):
        assert validate_max_results(None, 20) == 20
        assert validate_max_results(50, 20) == 50

    def test_types(self):
        assert validate_types(None) is None
        assert validate_types([]) is None
        assert validate_types(["MCP-Server", "skill"]) == {"mcp", "skill"}
        assert validate_types("plugin") == {"plugin"}

    def test_unknown_type(self):
        with pytest.raises(InvalidInputError, match="Unknown type 'widget'"):
            validate_types(["widget"])


class TestRecommend:
    def test_ranks_node_project(self, service, node_project):
        result = service.recommend(str(node_project))
        ids = [r.item.id for r in result.recommendations]
        assert ids == ["react-kit", "jest-helper", "postgres"]
        assert result.total_found == 3
        assert result.project.path == str(node_project.resolve())
        assert "typescript" in result.project.languages
        assert "1. React Kit (official)" in result.formatted

    def test_wire_shape(self, service, node_project):
        data = service.recommend(str(node_project), max_results=1).to_dict()
        assert data["totalFound"] == 1
        rec = data["recommendations"][0]
        assert set(rec) == {"name", "type", "description", "score", "reasons", "url", "install", "isOfficial"}
        assert rec["name"] == "React Kit"
        assert rec["isOfficial"] is True
        assert data["project"]["dependencyCount"] >= 4

    def test_description_adds_keyword_signal(self, service, node_project):
        plain = service.recommend(str(node_project), types=["mcp"])
        boosted = service.recommend(str(node_project), "I need a database dashboard", types=["mcp"])
        assert boosted.recommendations[0].score > plain.recommendations[0].score
        assert "keyword match: database" in boosted.recommendations[0].reasons

    def test_types_filter(self, service, node_project):
        result = service.recommend(str(node_project), types=["plugin"])
        assert [r.item.type for r in result.recommendations] == ["plugin"]

    def test_empty_project(self, service, tmp_path):
        result = service.recommend(str(tmp_path / "missing"))
        assert result.recommendations == []
        assert result.to_dict()["totalFound"] == 0

    def test_unknown_user_home_is_empty(self, service):
        result = service.recommend("~no_such_user_zz/project")
        assert result.recommendations == []

    def test_rejects_blank_path(self, service):
        with pytest.raises(InvalidInputError, match="project_path"):
            service.recommend("   ")

    def test_rejects_bad_description(self, service, node_project):
        with pytest.raises(InvalidInputError, match="description"):
            service.recommend(str(node_project), description=42)

    def test_similarity_matrix_cached_per_catalog(self, service, node_project):
        service.recommend(str(node_project))
        first = service._similarity[1]
        service.recommend(str(node_project))
        assert service._similarity[1] is first
        service.repository.reload()
        service.recommend(str(node_project))
        assert service._similarity[1] is not first

    def test_similarity_disabled(self, catalog_dir, node_project):
        svc = RecommendationService(
            repository=CatalogRepository(data_dir=catalog_dir),
            config=ScoringConfig(enable_similarity_scoring=False),
        )
        svc.recommend(str(node_project))
        assert svc._similarity is None


class TestAnalyze:
    def test_metadata_attached(self, service, node_project):
        data = service.analyze(str(node_project)).to_dict()
        assert "react" in data["frameworks"]
        assert set(data["metadata"]) == {"size", "kind", "estimatedTeamSize", "workspaceCount"}
        assert data["metadata"]["size"] == "small"


class TestCatalogQueries:
    def test_search(self, service):
        result = service.search("database")
        assert [r.item.id for r in result.results] == ["postgres"]
        assert result.to_dict()["results"][0]["category"] == "database"

    def test_search_blank_query(self, service):
        with pytest.raises(InvalidInputError, match="query"):
            service.search("")

    def test_details_by_name_or_id(self, service):
        assert service.details("postgres helper").entry["id"] == "postgres"
        detail = service.details("REACT-KIT").to_dict()
        assert detail["name"] == "React Kit"
        assert detail["qualityTier"] in ("excellent", "good", "fair", "low")
        assert isinstance(detail["qualityScore"], float)

    def test_details_not_found(self, service):
        with pytest.raises(EntryNotFoundError):
            service.details("ghost")

    def test_list_categories(self, make_entry, make_catalog):
        catalog = make_catalog(
            make_entry("a", category="testing"),
            make_entry("b", category="database", type="mcp"),
            make_entry("c", category="database"),
            make_entry("d", category="frontend"),
        )
        repo = CatalogRepository()
        repo._catalog = catalog
        repo._loaded_at = float("inf")
        listing = RecommendationService(repository=repo).list_categories()
        assert [(c.name, c.count) for c in listing.categories] == [
            ("database", 2),
            ("testing", 1),
            ("frontend", 1),
        ]
        assert listing.categories[0].types == ["mcp", "skill"]
        assert listing.total_items == 4

    def test_stats(self, service):
        stats = service.stats().to_dict()
        assert stats["totalItems"] == 4
        assert stats["byType"] == {"plugin": 1, "mcp": 1, "skill": 2}
        assert stats["bySource"] == {"official": 1, "community": 3}
        assert stats["officialCount"] == 1
        assert stats["lastUpdated"] == "2026-01-01"


def test_defaults_come_from_config(monkeypatch, catalog_dir):
    monkeypatch.setenv("TOOLSCOUT_CATALOG_DIR", str(catalog_dir))
    monkeypatch.setenv("TOOLSCOUT_MAX_DEPTH", "2")
    monkeypatch.setenv("TOOLSCOUT_MAX_RESULTS", "3")
    svc = RecommendationService()
    assert svc.repository.data_dir == catalog_dir
    assert svc.max_depth == 2
    assert svc.config.max_results == 3
    assert len(svc.catalog) == 4


def test_configured_max_results_out_of_range(monkeypatch, catalog_dir):
    monkeypatch.setenv("TOOLSCOUT_CATALOG_DIR", str(catalog_dir))
    monkeypatch.setenv("TOOLSCOUT_MAX_RESULTS", "500")
    with pytest.raises(ConfigError, match="max_results"):
        RecommendationService()
