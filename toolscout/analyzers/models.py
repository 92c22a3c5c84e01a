"""Data models for project analysis results."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class ManifestContribution:
    """What a single manifest reader learned about a project."""
    dependencies: set[str] = field(default_factory=set)
    frameworks: set[str] = field(default_factory=set)
    description: Optional[str] = None

    @classmethod
    def empty(cls) -> ManifestContribution:
        return cls()

    def is_empty(self) -> bool:
        return not (self.dependencies or self.frameworks or self.description)


@dataclass
class ProjectFingerprint:
    """Structural summary of a project used for matching catalog entries."""
    path: Path
    languages: set[str] = field(default_factory=set)
    frameworks: set[str] = field(default_factory=set)
    dependencies: set[str] = field(default_factory=set)
    files: list[str] = field(default_factory=list)  # relative POSIX paths, scan order
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "languages": sorted(self.languages),
            "frameworks": sorted(self.frameworks),
            "dependencies": sorted(self.dependencies),
            "files": list(self.files),
            "description": self.description,
        }


@dataclass
class ProjectMetadata:
    """Derived characteristics used by context-aware scoring."""
    size: str  # small, medium, large, enterprise
    kind: str  # monorepo, library, application, unknown
    estimated_team_size: int
    file_count: int
    language_count: int
    workspace_count: Optional[int] = None
