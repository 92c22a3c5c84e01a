"""Project analysis: fingerprinting a directory tree."""

from .metadata import analyze_metadata
from .models import ManifestContribution, ProjectFingerprint, ProjectMetadata
from .project_analyzer import ProjectAnalyzer

__all__ = [
    "ManifestContribution",
    "ProjectAnalyzer",
    "ProjectFingerprint",
    "ProjectMetadata",
    "analyze_metadata",
]
