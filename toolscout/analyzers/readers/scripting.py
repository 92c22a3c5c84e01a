"""Ruby Gemfile and PHP composer.json readers."""

from __future__ import annotations

import json
import re
from pathlib import Path

from ..models import ManifestContribution
from .base import clean_description, fails_soft, map_frameworks, read_first

GEM_FRAMEWORKS: dict[str, str] = {
    "rails": "rails",
    "sinatra": "sinatra",
    "hanami": "hanami",
    "padrino": "padrino",
    "grape": "grape",
    "roda": "roda",
    "rspec": "rspec",
    "minitest": "minitest",
    "capybara": "capybara",
    "devise": "devise",
    "activerecord": "activerecord",
    "sequel": "sequel",
    "sidekiq": "sidekiq",
    "puma": "puma",
    "unicorn": "unicorn",
    "pg": "postgresql",
    "mysql2": "mysql",
    "redis": "redis",
    "mongoid": "mongodb",
    "elasticsearch": "elasticsearch",
}

COMPOSER_FRAMEWORKS: dict[str, str] = {
    "laravel/framework": "laravel",
    "symfony/symfony": "symfony",
    "symfony/framework-bundle": "symfony",
    "codeigniter4/framework": "codeigniter",
    "cakephp/cakephp": "cakephp",
    "yiisoft/yii2": "yii",
    "slim/slim": "slim",
    "wordpress": "wordpress",
    "drupal": "drupal",
    "guzzlehttp/guzzle": "guzzle",
    "phpunit/phpunit": "phpunit",
    "doctrine/orm": "doctrine",
}

_GEM_LINE = re.compile(r"""^gem\s+['"]([^'"]+)['"]""")


@fails_soft
def read_gemfile(root: Path) -> ManifestContribution:
    """Read ``gem 'name'`` declarations.

    Besides exact names, a gem named ``<dep>-<suffix>`` also maps to the
    framework of ``<dep>`` (``rspec-rails`` yields ``rspec``).
    """
    found = read_first(root, ["Gemfile"])
    if found is None:
        return ManifestContribution.empty()
    _, text = found

    deps: set[str] = set()
    for line in text.splitlines():
        match = _GEM_LINE.match(line.strip())
        if match:
            deps.add(match.group(1).lower())

    frameworks = {
        framework
        for gem, framework in GEM_FRAMEWORKS.items()
        if gem in deps or any(d.startswith(f"{gem}-") for d in deps)
    }
    return ManifestContribution(dependencies=deps, frameworks=frameworks)


@fails_soft
def read_composer_json(root: Path) -> ManifestContribution:
    found = read_first(root, ["composer.json"])
    if found is None:
        return ManifestContribution.empty()
    _, text = found
    composer = json.loads(text)
    if not isinstance(composer, dict):
        return ManifestContribution.empty()

    deps: set[str] = set()
    for section in ("require", "require-dev"):
        table = composer.get(section) or {}
        if isinstance(table, dict):
            deps.update(table.keys())

    return ManifestContribution(
        dependencies=deps,
        frameworks=map_frameworks(deps, COMPOSER_FRAMEWORKS),
        description=clean_description(composer.get("description")),
    )
