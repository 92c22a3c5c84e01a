"""Manifest readers, one per ecosystem.

Readers run as an ordered, non-interacting batch; their contributions are
folded together by :func:`merge_contributions`. Third-party readers
registered under the ``toolscout.manifest_readers`` entry-point group run
after the built-in ones.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from ..models import ManifestContribution
from .base import ManifestReader, fails_soft
from .infrastructure import read_docker_compose, read_env_templates
from .javascript import read_package_json
from .jvm import read_build_gradle, read_pom_xml
from .python import read_pyproject_toml, read_requirements_txt
from .scripting import read_composer_json, read_gemfile
from .systems import read_cargo_toml, read_go_mod

DEFAULT_READERS: tuple[ManifestReader, ...] = (
    read_package_json,
    read_requirements_txt,
    read_pyproject_toml,
    read_go_mod,
    read_cargo_toml,
    read_gemfile,
    read_composer_json,
    read_pom_xml,
    read_build_gradle,
    read_docker_compose,
    read_env_templates,
)


def merge_contributions(contributions: Iterable[ManifestContribution]) -> ManifestContribution:
    """Fold contributions: dependencies and frameworks accumulate, first description wins."""
    merged = ManifestContribution.empty()
    for contribution in contributions:
        merged.dependencies |= contribution.dependencies
        merged.frameworks |= contribution.frameworks
        if merged.description is None and contribution.description:
            merged.description = contribution.description
    return merged


def run_readers(root: Path, readers: Sequence[ManifestReader]) -> ManifestContribution:
    """Run every reader against ``root`` and merge the results."""
    return merge_contributions(reader(root) for reader in readers)


def all_readers() -> tuple[ManifestReader, ...]:
    """Built-in readers followed by any registered through entry points."""
    from toolscout.plugins import discover_readers

    extra = tuple(fails_soft(reader) for reader in discover_readers().values())
    return DEFAULT_READERS + extra


__all__ = [
    "DEFAULT_READERS",
    "ManifestReader",
    "all_readers",
    "merge_contributions",
    "run_readers",
]
