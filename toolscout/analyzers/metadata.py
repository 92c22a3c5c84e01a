"""Derive size, kind and team-scale metadata from a fingerprint."""

from __future__ import annotations

from typing import Mapping, Optional

from .models import ProjectFingerprint, ProjectMetadata

# size -> (max files, max dependencies); anything larger is "enterprise"
PROJECT_SIZE_THRESHOLDS: dict[str, tuple[int, int]] = {
    "small": (100, 10),
    "medium": (500, 30),
    "large": (2000, 100),
}

MONOREPO_MARKERS = ("pnpm-workspace.yaml", "lerna.json", "nx.json", "turbo.json")
WORKSPACE_PREFIXES = ("packages/", "apps/")
LIBRARY_MARKERS = ("tsup.config.ts", "rollup.config.js", "vite.config.lib.ts")
APP_PATH_HINTS = ("src/app", "src/pages", "src/routes")


def classify_size(
    file_count: int,
    dep_count: int,
    thresholds: Optional[Mapping[str, tuple[int, int]]] = None,
) -> str:
    """Return the first bucket whose file and dependency ceilings both hold."""
    thresholds = thresholds or PROJECT_SIZE_THRESHOLDS
    for size in ("small", "medium", "large"):
        max_files, max_deps = thresholds[size]
        if file_count <= max_files and dep_count <= max_deps:
            return size
    return "enterprise"


def detect_kind(fingerprint: ProjectFingerprint) -> str:
    files = fingerprint.files
    if any(f in MONOREPO_MARKERS or f.startswith(WORKSPACE_PREFIXES) for f in files):
        return "monorepo"
    if any(f in LIBRARY_MARKERS or "dist/index" in f for f in files):
        return "library"
    if fingerprint.frameworks or any(hint in f for f in files for hint in APP_PATH_HINTS):
        return "application"
    return "unknown"


def estimate_team_size(fingerprint: ProjectFingerprint) -> int:
    """Rough team size: 1 solo, 3 small, 10 medium, 25 large."""
    score = (
        len(fingerprint.files) / 50
        + len(fingerprint.dependencies) / 10
        + len(fingerprint.languages) * 2
    )
    if score < 5:
        return 1
    if score < 15:
        return 3
    if score < 40:
        return 10
    return 25


def count_workspaces(fingerprint: ProjectFingerprint) -> int:
    """Number of distinct ``packages/<name>`` / ``apps/<name>`` directories."""
    dirs = {
        "/".join(f.split("/")[:2])
        for f in fingerprint.files
        if f.startswith(WORKSPACE_PREFIXES) and f.count("/") >= 2
    }
    return len(dirs)


def analyze_metadata(
    fingerprint: ProjectFingerprint,
    size_thresholds: Optional[Mapping[str, tuple[int, int]]] = None,
) -> ProjectMetadata:
    kind = detect_kind(fingerprint)
    return ProjectMetadata(
        size=classify_size(
            len(fingerprint.files), len(fingerprint.dependencies), size_thresholds
        ),
        kind=kind,
        estimated_team_size=estimate_team_size(fingerprint),
        file_count=len(fingerprint.files),
        language_count=len(fingerprint.languages),
        workspace_count=count_workspaces(fingerprint) if kind == "monorepo" else None,
    )
