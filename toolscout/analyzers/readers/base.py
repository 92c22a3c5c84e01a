"""Shared helpers for manifest readers.

A manifest reader is any callable ``read(root: Path) -> ManifestContribution``.
Readers fail soft: a missing file or malformed content yields an empty
contribution, never an exception.
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional, Sequence

from ..models import ManifestContribution

logger = logging.getLogger("toolscout.readers")

ManifestReader = Callable[[Path], ManifestContribution]


def fails_soft(func: ManifestReader) -> ManifestReader:
    """Decorator that turns any reader error into an empty contribution."""

    @functools.wraps(func)
    def wrapper(root: Path) -> ManifestContribution:
        try:
            return func(root)
        except Exception as e:
            logger.debug("Reader %s failed for %s: %s", func.__name__, root, e)
            return ManifestContribution.empty()

    return wrapper


def read_first(root: Path, names: Sequence[str]) -> Optional[tuple[Path, str]]:
    """Return (path, text) for the first of ``names`` that exists under root."""
    for name in names:
        path = root / name
        if not path.is_file():
            continue
        return path, path.read_text(encoding="utf-8")
    return None


def map_frameworks(deps: Iterable[str], mapping: Mapping[str, str]) -> set[str]:
    """Map dependency names to framework ids by exact name."""
    return {mapping[dep] for dep in deps if dep in mapping}


def clean_description(value: object) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
