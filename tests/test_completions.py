"""Tests for shell completion functions."""
from toolscout.completions import complete_config_key, complete_entry_name, complete_type


class TestCompleteType:
    def test_prefix(self):
        assert complete_type("m") == ["mcp"]

    def test_all_on_empty(self):
        assert "agent" in complete_type("")
        assert len(complete_type("")) == 7

    def test_no_match(self):
        assert complete_type("zzz") == []


class TestCompleteEntryName:
    def test_uses_configured_catalog(self, monkeypatch, catalog_dir):
        monkeypatch.setenv("TOOLSCOUT_CATALOG_DIR", str(catalog_dir))
        assert complete_entry_name("re") == ["React Kit"]

    def test_case_insensitive(self, monkeypatch, catalog_dir):
        monkeypatch.setenv("TOOLSCOUT_CATALOG_DIR", str(catalog_dir))
        assert complete_entry_name("JEST") == ["Jest Helper"]

    def test_no_match(self, monkeypatch, catalog_dir):
        monkeypatch.setenv("TOOLSCOUT_CATALOG_DIR", str(catalog_dir))
        assert complete_entry_name("zzz") == []


def test_complete_config_key():
    keys = complete_config_key("scan.")
    assert keys == ["scan.max_depth", "scan.max_files"]
    assert "scoring.tie_break" in complete_config_key("scoring")
