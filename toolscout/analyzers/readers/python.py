"""Python requirements.txt and pyproject.toml readers."""

from __future__ import annotations

import re
import tomllib
from pathlib import Path
from typing import Any, Iterable

from ..models import ManifestContribution
from .base import clean_description, fails_soft, map_frameworks, read_first

REQUIREMENTS_FRAMEWORKS: dict[str, str] = {
    "django": "django",
    "flask": "flask",
    "fastapi": "fastapi",
    "pytorch": "pytorch",
    "torch": "pytorch",
    "tensorflow": "tensorflow",
    "pandas": "pandas",
    "numpy": "numpy",
    "scikit-learn": "sklearn",
}

PYPROJECT_FRAMEWORKS: dict[str, str] = {
    **REQUIREMENTS_FRAMEWORKS,
    "starlette": "starlette",
    "sklearn": "sklearn",
    "pydantic": "pydantic",
    "sqlalchemy": "sqlalchemy",
    "celery": "celery",
    "pytest": "pytest",
    "streamlit": "streamlit",
    "gradio": "gradio",
}

_REQUIREMENT_NAME = re.compile(r"^\s*([A-Za-z0-9_-]+)")


def _requirement_names(specs: Iterable[Any]) -> set[str]:
    """Extract lower-cased distribution names from PEP 508 requirement strings."""
    names: set[str] = set()
    for spec in specs:
        if not isinstance(spec, str):
            continue
        match = _REQUIREMENT_NAME.match(spec)
        if match:
            names.add(match.group(1).lower())
    return names


@fails_soft
def read_requirements_txt(root: Path) -> ManifestContribution:
    found = read_first(root, ["requirements.txt"])
    if found is None:
        return ManifestContribution.empty()
    _, text = found

    lines = [line.strip() for line in text.splitlines()]
    # Skip comments and pip options (-r, -e, --index-url ...)
    deps = _requirement_names(
        line for line in lines if line and not line.startswith(("#", "-"))
    )
    return ManifestContribution(
        dependencies=deps,
        frameworks=map_frameworks(deps, REQUIREMENTS_FRAMEWORKS),
    )


@fails_soft
def read_pyproject_toml(root: Path) -> ManifestContribution:
    """Read PEP 621 and Poetry dependency tables from pyproject.toml."""
    found = read_first(root, ["pyproject.toml"])
    if found is None:
        return ManifestContribution.empty()
    _, text = found
    data = tomllib.loads(text)

    deps: set[str] = set()

    project = data.get("project", {})
    deps |= _requirement_names(project.get("dependencies", []))
    for group in (project.get("optional-dependencies") or {}).values():
        deps |= _requirement_names(group)

    poetry = data.get("tool", {}).get("poetry", {})
    poetry_tables = [poetry.get("dependencies", {}), poetry.get("dev-dependencies", {})]
    for group in (poetry.get("group") or {}).values():
        if isinstance(group, dict):
            poetry_tables.append(group.get("dependencies", {}))
    for table in poetry_tables:
        if isinstance(table, dict):
            deps |= {name.lower() for name in table if name.lower() != "python"}

    description = clean_description(project.get("description")) or clean_description(
        poetry.get("description")
    )
    return ManifestContribution(
        dependencies=deps,
        frameworks=map_frameworks(deps, PYPROJECT_FRAMEWORKS),
        description=description,
    )
