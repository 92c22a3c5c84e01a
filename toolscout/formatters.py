"""Plain-text rendering of recommendation results.

Used for the ``formatted`` field of MCP responses and ``--plain`` CLI
output, where rich tables are not available.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from toolscout.models import RECOMMENDATION_TYPES, CatalogEntry, ScoredEntry

MAX_PER_TYPE = 5
DESCRIPTION_WIDTH = 60
RULE = "=" * 40

TYPE_LABELS = {
    "plugin": "Plugins (editor extensions)",
    "mcp": "MCP servers (external service integrations)",
    "skill": "Skills (reusable instruction sets)",
    "workflow": "Workflows (multi-step automation)",
    "hook": "Hooks (event-driven handlers)",
    "command": "Commands (custom commands)",
    "agent": "Agents (specialised task runners)",
}

# Where manually installed entries go, relative to the project root
INSTALL_PATHS = {
    "skill": ".claude/skills/",
    "workflow": ".claude/workflows/",
    "hook": ".claude/hooks/",
    "command": ".claude/commands/",
    "agent": ".claude/agents/",
}


def score_label(score: float) -> str:
    if score >= 80:
        return "strongly recommended"
    if score >= 50:
        return "good fit"
    if score >= 20:
        return "worth a look"
    return "weak fit"


def security_label(score: float) -> str:
    if score >= 80:
        return "high"
    if score >= 50:
        return "medium"
    return "low"


def _truncate(text: str, width: int = DESCRIPTION_WIDTH) -> str:
    return text[:width] + "..." if len(text) > width else text


def install_instructions(entry: CatalogEntry) -> list[str]:
    if entry.type == "plugin":
        if entry.install.command:
            return [f"   install: {entry.install.command}"]
        return [f"   url: {entry.url}"]

    if entry.type == "mcp":
        if entry.install.command:
            return [
                f"   install: {entry.install.command}",
                "   then add the server to your client's MCP configuration",
            ]
        return [f"   url: {entry.url}"]

    target = INSTALL_PATHS.get(entry.type, ".claude/")
    return [
        f"   install: download from {entry.url}",
        f"            and place it in {target}",
    ]


def group_by_type(results: list[ScoredEntry]) -> dict[str, list[ScoredEntry]]:
    groups: dict[str, list[ScoredEntry]] = {}
    for result in results:
        groups.setdefault(result.item.type, []).append(result)
    return groups


def _bonus_weight(entry: CatalogEntry, now: datetime) -> float:
    weight = 0.0
    if entry.metrics.official:
        weight += 100
    if entry.metrics.stars:
        weight += min(entry.metrics.stars / 10, 50)
    if entry.metrics.security_score is not None and entry.metrics.security_score >= 80:
        weight += 30
    if _recently_updated(entry, now):
        weight += 20
    return weight


def _recently_updated(entry: CatalogEntry, now: datetime) -> bool:
    if not entry.metrics.last_updated:
        return False
    try:
        updated = datetime.fromisoformat(entry.metrics.last_updated.replace("Z", "+00:00"))
    except ValueError:
        return False
    if updated.tzinfo is None:
        updated = updated.replace(tzinfo=timezone.utc)
    return updated > now - timedelta(days=182)


def bonus_label(entry: CatalogEntry, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    if entry.metrics.official:
        return "official pick"
    if entry.metrics.stars and entry.metrics.stars >= 100:
        return "popular"
    if entry.metrics.security_score is not None and entry.metrics.security_score >= 80:
        return "high quality"
    if _recently_updated(entry, now):
        return "trending"
    return "recommended"


def select_bonus(
    candidates: list[ScoredEntry],
    shown_ids: set[str],
    now: Optional[datetime] = None,
    limit: int = 2,
) -> list[ScoredEntry]:
    """Pick popular entries that were not already displayed."""
    now = now or datetime.now(timezone.utc)
    remaining = [c for c in candidates if c.item.id not in shown_ids]
    remaining.sort(key=lambda c: -_bonus_weight(c.item, now))
    return remaining[:limit]


def format_recommendations(
    results: list[ScoredEntry],
    extra: Optional[list[ScoredEntry]] = None,
) -> str:
    """Render results grouped by type, at most five per type.

    ``extra`` is a wider candidate pool for a trailing "popular" section.
    """
    if not results:
        return "No recommendations matched this project."

    groups = group_by_type(results)
    shown: set[str] = set()
    lines: list[str] = []

    for entry_type in RECOMMENDATION_TYPES:
        items = groups.get(entry_type)
        if not items:
            continue
        visible = items[:MAX_PER_TYPE]
        lines.append(f"\n{TYPE_LABELS[entry_type]} ({len(visible)} recommended)")
        lines.append(RULE)

        for index, result in enumerate(visible, 1):
            entry = result.item
            shown.add(entry.id)
            badge = " (official)" if entry.metrics.official else ""
            lines.append(f"\n{index}. {entry.name}{badge}")
            lines.append(f"   about: {_truncate(entry.description)}")
            lines.append(f"   score: {result.score:g} - {score_label(result.score)}")
            security = entry.metrics.security_score
            if security is not None:
                lines.append(f"   security: {security_label(security)} ({security:g}/100)")
            if result.reasons:
                lines.append(f"   matched: {', '.join(result.reasons)}")
            lines.extend(install_instructions(entry))

        if len(items) > MAX_PER_TYPE:
            lines.append(f"\n   {len(items) - MAX_PER_TYPE} more candidates not shown")
        lines.append("")

    if extra:
        bonus = select_bonus(extra, shown)
        if bonus:
            lines.append("\nPopular picks")
            lines.append(RULE)
            for index, result in enumerate(bonus, 1):
                entry = result.item
                lines.append(f"\n{index}. {entry.name} ({bonus_label(entry)})")
                lines.append(f"   about: {_truncate(entry.description)}")
                if entry.metrics.stars:
                    lines.append(f"   stars: {entry.metrics.stars}")
                lines.extend(install_instructions(entry))

    return "\n".join(lines)
