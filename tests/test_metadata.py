"""Tests for project metadata derivation."""

from pathlib import Path

from toolscout.analyzers.metadata import (
    analyze_metadata,
    classify_size,
    count_workspaces,
    detect_kind,
    estimate_team_size,
)
from toolscout.analyzers.models import ProjectFingerprint


def fingerprint(files=(), deps=(), languages=(), frameworks=()):
    return ProjectFingerprint(
        path=Path("/project"),
        files=list(files),
        dependencies=set(deps),
        languages=set(languages),
        frameworks=set(frameworks),
    )


class TestClassifySize:
    def test_buckets(self):
        assert classify_size(10, 5) == "small"
        assert classify_size(100, 10) == "small"
        assert classify_size(101, 5) == "medium"
        assert classify_size(50, 11) == "medium"
        assert classify_size(1500, 80) == "large"
        assert classify_size(2001, 0) == "enterprise"
        assert classify_size(0, 101) == "enterprise"

    def test_custom_thresholds(self):
        thresholds = {"small": (1, 1), "medium": (2, 2), "large": (3, 3)}
        assert classify_size(2, 0, thresholds) == "medium"


class TestDetectKind:
    def test_monorepo_marker(self):
        assert detect_kind(fingerprint(files=["pnpm-workspace.yaml"])) == "monorepo"

    def test_workspace_prefix(self):
        assert detect_kind(fingerprint(files=["packages/ui/index.ts"])) == "monorepo"

    def test_library(self):
        assert detect_kind(fingerprint(files=["tsup.config.ts"])) == "library"

    def test_application(self):
        assert detect_kind(fingerprint(frameworks=["react"])) == "application"
        assert detect_kind(fingerprint(files=["src/pages/index.tsx"])) == "application"

    def test_unknown(self):
        assert detect_kind(fingerprint(files=["README.md"])) == "unknown"


class TestTeamSize:
    def test_solo(self):
        assert estimate_team_size(fingerprint(files=["a.py"], languages=["python"])) == 1

    def test_scales_up(self):
        big = fingerprint(
            files=[f"f{i}.py" for i in range(1500)],
            deps=[f"d{i}" for i in range(100)],
            languages=["python", "go"],
        )
        assert estimate_team_size(big) == 25


def test_count_workspaces():
    fp = fingerprint(files=[
        "packages/ui/index.ts",
        "packages/ui/button.ts",
        "packages/api/index.ts",
        "apps/web/page.tsx",
        "packages/README.md",
    ])
    assert count_workspaces(fp) == 3


def test_analyze_metadata():
    fp = fingerprint(files=["turbo.json", "apps/web/page.tsx"], languages=["typescript"])
    meta = analyze_metadata(fp)
    assert meta.kind == "monorepo"
    assert meta.size == "small"
    assert meta.workspace_count == 1
    assert meta.file_count == 2
    assert meta.language_count == 1


def test_workspace_count_only_for_monorepos():
    assert analyze_metadata(fingerprint(files=["a.py"])).workspace_count is None
