"""Extra manifest readers contributed by other installed packages.

A package registers a reader under the ``toolscout.manifest_readers``
entry-point group::

    [project.entry-points."toolscout.manifest_readers"]
    mix_exs = "toolscout_elixir:read_mix_exs"

The target must be callable as ``read(root: Path) -> ManifestContribution``.
Registered readers run after the built-in ones on every analysis.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib.metadata import EntryPoint, entry_points
from typing import Any, Optional

logger = logging.getLogger("toolscout.plugins")

READER_GROUP = "toolscout.manifest_readers"


@dataclass
class PluginInfo:
    """Load status of one registered entry point, for ``toolscout readers``."""

    name: str
    group: str
    module: str
    loaded: bool = False
    error: str = ""


def _load(ep: EntryPoint) -> tuple[Optional[Any], str]:
    """Import an entry point target; returns ``(obj, "")`` or ``(None, error)``."""
    try:
        return ep.load(), ""
    except Exception as e:
        return None, str(e) or type(e).__name__


def discover_plugins(group: str) -> dict[str, Any]:
    """Load every entry point in ``group``, skipping the ones that fail to import."""
    loaded = {}
    for ep in entry_points(group=group):
        obj, error = _load(ep)
        if error:
            logger.warning("Skipping plugin %s (%s): %s", ep.name, ep.value, error)
            continue
        logger.debug("Loaded plugin %s from %s", ep.name, ep.value)
        loaded[ep.name] = obj
    return loaded


def discover_readers() -> dict[str, Any]:
    """Registered manifest readers by name; non-callable targets are dropped."""
    readers = {}
    for name, obj in discover_plugins(READER_GROUP).items():
        if not callable(obj):
            logger.warning("Plugin %s is not a callable reader, skipping", name)
            continue
        readers[name] = obj
    return readers


def list_all_plugins() -> list[PluginInfo]:
    infos = []
    for ep in entry_points(group=READER_GROUP):
        _, error = _load(ep)
        infos.append(
            PluginInfo(name=ep.name, group=READER_GROUP, module=ep.value, loaded=not error, error=error)
        )
    return infos
