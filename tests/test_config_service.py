"""Tests for the layered configuration service."""

import tomllib

import pytest

from toolscout.core.config_service import (
    ConfigService,
    assign,
    flatten,
    get_config_service,
    load_table,
    lookup,
    merge_tables,
    reset_config_service,
    save_table,
)
from toolscout.errors import ConfigError

# ─── Helper utilities ───


class TestMergeTables:
    def test_simple_merge(self):
        result = merge_tables({"a": 1, "b": 2}, {"b": 3, "c": 4})
        assert result == {"a": 1, "b": 3, "c": 4}

    def test_nested_merge(self):
        base = {"scan": {"max_depth": 5, "max_files": 1000}}
        override = {"scan": {"max_depth": 2}}
        result = merge_tables(base, override)
        assert result["scan"] == {"max_depth": 2, "max_files": 1000}

    def test_override_replaces_non_dict(self):
        assert merge_tables({"a": {"nested": 1}}, {"a": "flat"})["a"] == "flat"

    def test_does_not_mutate_base(self):
        base = {"a": 1}
        merge_tables(base, {"b": 2})
        assert "b" not in base


class TestLookupAssign:
    def test_get_dotted(self):
        assert lookup({"scoring": {"weights": {"language": 6}}}, "scoring.weights.language") == 6

    def test_get_missing_returns_default(self):
        assert lookup({"a": 1}, "b.c", "fallback") == "fallback"

    def test_get_through_non_dict(self):
        assert lookup({"a": 1}, "a.b", "fallback") == "fallback"

    def test_set_dotted_creates_intermediates(self):
        data = {}
        assign(data, "scoring.weights.language", 6)
        assert data == {"scoring": {"weights": {"language": 6}}}

    def test_set_overwrites_non_dict_intermediate(self):
        data = {"scoring": "oops"}
        assign(data, "scoring.min_score", 2)
        assert data == {"scoring": {"min_score": 2}}

    def test_flatten(self):
        table = {"scan": {"max_depth": 5}, "scoring": {"weights": {"file": 2}}, "flag": True}
        assert dict(flatten(table)) == {
            "scan.max_depth": 5,
            "scoring.weights.file": 2,
            "flag": True,
        }


class TestTomlIO:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "sub" / "config.toml"
        save_table({"scan": {"max_depth": 3}}, path)
        assert load_table(path) == {"scan": {"max_depth": 3}}

    def test_missing_file(self, tmp_path):
        assert load_table(tmp_path / "nope.toml") == {}

    def test_invalid_toml_returns_empty(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("not = [valid")
        assert load_table(path) == {}


# ─── Layering ───


class TestResolve:
    def test_defaults(self):
        svc = ConfigService()
        assert svc.get_max_depth() == 5
        assert svc.get_max_files() == 1000
        assert svc.get_catalog_dir() is None
        assert svc.get_catalog_file() is None
        assert svc.get_cache_ttl() == 3600.0
        assert svc.is_plain_output() is False

    def test_global_config(self, isolated_config):
        save_table({"scan": {"max_depth": 3}}, isolated_config / ".config" / "toolscout" / "config.toml")
        svc = ConfigService()
        assert svc.get_max_depth() == 3
        assert svc.get_max_files() == 1000

    def test_project_overrides_global(self, isolated_config, tmp_path):
        save_table({"scan": {"max_depth": 3}}, isolated_config / ".config" / "toolscout" / "config.toml")
        save_table({"scan": {"max_depth": 7}}, tmp_path / "work" / ".toolscout.toml")
        assert ConfigService().get_max_depth() == 7

    def test_env_overrides_files(self, tmp_path, monkeypatch):
        save_table({"scan": {"max_files": 10}}, tmp_path / "work" / ".toolscout.toml")
        monkeypatch.setenv("TOOLSCOUT_MAX_FILES", "25")
        assert ConfigService().get_max_files() == 25

    def test_dotenv_file(self, tmp_path, monkeypatch):
        (tmp_path / "work" / ".env").write_text("TOOLSCOUT_MAX_DEPTH=2\n")
        # load_dotenv writes into os.environ; let monkeypatch restore it
        monkeypatch.setenv("TOOLSCOUT_MAX_DEPTH", "")
        monkeypatch.delenv("TOOLSCOUT_MAX_DEPTH")
        assert ConfigService().get_max_depth() == 2

    def test_invalid_int_raises(self, monkeypatch):
        monkeypatch.setenv("TOOLSCOUT_MAX_DEPTH", "deep")
        with pytest.raises(ConfigError):
            ConfigService().get_max_depth()

    def test_plain_from_env(self, monkeypatch):
        monkeypatch.setenv("TOOLSCOUT_PLAIN", "yes")
        assert ConfigService().is_plain_output() is True

    def test_catalog_dir_expands_user(self, isolated_config, monkeypatch):
        monkeypatch.setenv("TOOLSCOUT_CATALOG_DIR", "~/catalog")
        assert ConfigService().get_catalog_dir() == isolated_config / "catalog"

    def test_resolve_is_cached(self, tmp_path):
        svc = ConfigService()
        assert svc.get_max_depth() == 5
        save_table({"scan": {"max_depth": 9}}, tmp_path / "work" / ".toolscout.toml")
        assert svc.get_max_depth() == 5
        assert svc.resolve(force=True).get("scan.max_depth") == 9


class TestScoringConfig:
    def test_defaults(self):
        config = ConfigService().get_scoring_config()
        assert config.weights.language == 5.0
        assert config.enable_context_scoring is True

    def test_project_overrides(self, tmp_path):
        save_table(
            {"scoring": {"max_results": 5, "weights": {"keyword": 2}}},
            tmp_path / "work" / ".toolscout.toml",
        )
        config = ConfigService().get_scoring_config()
        assert config.max_results == 5
        assert config.weights.keyword == 2.0
        assert config.weights.language == 5.0

    def test_env_toggles(self, monkeypatch):
        monkeypatch.setenv("TOOLSCOUT_SIMILARITY_SCORING", "false")
        monkeypatch.setenv("TOOLSCOUT_MAX_RESULTS", "7")
        config = ConfigService().get_scoring_config()
        assert config.enable_similarity_scoring is False
        assert config.max_results == 7

    def test_env_max_results_out_of_range(self, monkeypatch):
        monkeypatch.setenv("TOOLSCOUT_MAX_RESULTS", "500")
        with pytest.raises(ConfigError, match="max_results"):
            ConfigService().get_scoring_config()

    def test_unknown_key(self, tmp_path):
        save_table({"scoring": {"bogus": 1}}, tmp_path / "work" / ".toolscout.toml")
        with pytest.raises(ConfigError, match="bogus"):
            ConfigService().get_scoring_config()


# ─── Writing ───


class TestWriting:
    def test_set_global(self, isolated_config):
        svc = ConfigService()
        svc.set_global("scan.max_depth", 4)
        path = isolated_config / ".config" / "toolscout" / "config.toml"
        with open(path, "rb") as f:
            assert tomllib.load(f) == {"scan": {"max_depth": 4}}
        assert svc.get_max_depth() == 4

    def test_init_project_config(self, tmp_path):
        svc = ConfigService()
        path = svc.init_project_config()
        assert path == tmp_path / "work" / ".toolscout.toml"
        assert load_table(path) == {"scan": {"max_depth": 5, "max_files": 1000}}

    def test_init_project_config_refuses_overwrite(self):
        svc = ConfigService()
        svc.init_project_config()
        with pytest.raises(ConfigError, match="already exists"):
            svc.init_project_config()

    def test_show_reports_sources(self, tmp_path):
        svc = ConfigService()
        assert svc.show()["sources"] == {"global_config": None, "project_config": None}
        svc.init_project_config()
        shown = svc.show()
        assert shown["sources"]["project_config"] == str(tmp_path / "work" / ".toolscout.toml")
        assert shown["resolved"]["scan"]["max_depth"] == 5

    def test_show_reports_origins(self, isolated_config, tmp_path, monkeypatch):
        save_table({"scan": {"max_files": 50}}, isolated_config / ".config" / "toolscout" / "config.toml")
        save_table({"scan": {"max_depth": 3}}, tmp_path / "work" / ".toolscout.toml")
        monkeypatch.setenv("TOOLSCOUT_PLAIN", "1")
        origins = ConfigService().show()["origins"]
        assert origins["scan.max_files"] == "global"
        assert origins["scan.max_depth"] == "project"
        assert origins["ui.plain_output"] == "env"
        assert origins["catalog.cache_ttl"] == "default"

    def test_config_paths(self, tmp_path, monkeypatch):
        paths = ConfigService().config_paths()
        assert paths["catalog"] == "bundled"
        assert paths["project_config"].endswith("(not found)")

        monkeypatch.setenv("TOOLSCOUT_CATALOG_FILE", str(tmp_path / "catalog.yaml"))
        paths = ConfigService().config_paths()
        assert paths["catalog"] == f"{tmp_path / 'catalog.yaml'} (not found)"


def test_singleton_reset():
    first = get_config_service()
    assert get_config_service() is first
    reset_config_service()
    assert get_config_service() is not first
