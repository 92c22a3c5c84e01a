"""Node.js package.json reader."""

from __future__ import annotations

import json
from pathlib import Path

from ..models import ManifestContribution
from .base import clean_description, fails_soft, map_frameworks, read_first

FRAMEWORK_MAPPINGS: dict[str, str] = {
    "next": "nextjs",
    "react": "react",
    "vue": "vue",
    "@angular/core": "angular",
    "svelte": "svelte",
    "@remix-run/react": "remix",
    "astro": "astro",
    "express": "express",
    "fastify": "fastify",
    "koa": "koa",
    "nestjs": "nestjs",
    "@nestjs/core": "nestjs",
    "prisma": "prisma",
    "@prisma/client": "prisma",
    "drizzle-orm": "drizzle",
    "typeorm": "typeorm",
    "mongoose": "mongoose",
    "tailwindcss": "tailwind",
    "@supabase/supabase-js": "supabase",
    "firebase": "firebase",
}

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")


@fails_soft
def read_package_json(root: Path) -> ManifestContribution:
    """Collect dependency names from every dependency section of package.json."""
    found = read_first(root, ["package.json"])
    if found is None:
        return ManifestContribution.empty()
    _, text = found
    pkg = json.loads(text)
    if not isinstance(pkg, dict):
        return ManifestContribution.empty()

    deps: set[str] = set()
    for section in DEPENDENCY_SECTIONS:
        table = pkg.get(section) or {}
        if isinstance(table, dict):
            deps.update(table.keys())

    return ManifestContribution(
        dependencies=deps,
        frameworks=map_frameworks(deps, FRAMEWORK_MAPPINGS),
        description=clean_description(pkg.get("description")),
    )
