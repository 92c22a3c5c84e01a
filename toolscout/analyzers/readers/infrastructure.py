"""Container compose and environment template readers.

These readers contribute frameworks (infrastructure services) only; neither
reports dependencies.
"""

from __future__ import annotations

import re
from pathlib import Path

import yaml

from ..models import ManifestContribution
from .base import fails_soft, read_first

COMPOSE_FILES = ("docker-compose.yml", "docker-compose.yaml", "compose.yml", "compose.yaml")

# Only template files: a real .env holds secrets and is never read
ENV_TEMPLATE_FILES = (".env.example", ".env.template", ".env.sample", ".env.dist")

SERVICE_MAPPINGS: dict[str, str] = {
    "postgres": "postgresql",
    "postgresql": "postgresql",
    "mysql": "mysql",
    "mariadb": "mysql",
    "redis": "redis",
    "mongodb": "mongodb",
    "mongo": "mongodb",
    "elasticsearch": "elasticsearch",
    "nginx": "nginx",
    "httpd": "apache",
    "apache": "apache",
    "rabbitmq": "rabbitmq",
    "kafka": "kafka",
    "memcached": "memcached",
    "minio": "minio",
    "grafana": "grafana",
    "prometheus": "prometheus",
    "jaeger": "jaeger",
    "zipkin": "zipkin",
    "consul": "consul",
    "vault": "vault",
    "traefik": "traefik",
    "caddy": "caddy",
    "mailhog": "mailhog",
    "localstack": "aws",
    "azurite": "azure",
}

ENV_SERVICE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(pattern, re.IGNORECASE), service)
    for pattern, service in [
        (r"^SUPABASE_", "supabase"),
        (r"^OPENAI_", "openai"),
        (r"^ANTHROPIC_", "anthropic"),
        (r"^AWS_", "aws"),
        (r"^AZURE_", "azure"),
        (r"^GCP_", "gcp"),
        (r"^GOOGLE_", "google-cloud"),
        (r"^STRIPE_", "stripe"),
        (r"^TWILIO_", "twilio"),
        (r"^SENDGRID_", "sendgrid"),
        (r"^FIREBASE_", "firebase"),
        (r"^VERCEL_", "vercel"),
        (r"^NETLIFY_", "netlify"),
        (r"^CLOUDFLARE_", "cloudflare"),
        (r"^GITHUB_", "github"),
        (r"^GITLAB_", "gitlab"),
        (r"^SLACK_", "slack"),
        (r"^DISCORD_", "discord"),
        (r"^DATABASE_URL", "database"),
        (r"^POSTGRES", "postgresql"),
        (r"^MYSQL", "mysql"),
        (r"^MONGODB", "mongodb"),
        (r"^REDIS_", "redis"),
        (r"^ELASTICSEARCH_", "elasticsearch"),
        (r"^ALGOLIA_", "algolia"),
        (r"^SENTRY_", "sentry"),
        (r"^DATADOG_", "datadog"),
        (r"^NEW_RELIC_", "newrelic"),
        (r"^MAILGUN_", "mailgun"),
        (r"^POSTMARK_", "postmark"),
        (r"^RESEND_", "resend"),
    ]
]

_ENV_VAR = re.compile(r"^(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)")


def _image_name(image: str) -> str:
    """``docker.io/bitnami/redis:7.2`` -> ``redis``."""
    return image.rsplit("/", 1)[-1].split(":", 1)[0].split("@", 1)[0].lower()


@fails_soft
def read_docker_compose(root: Path) -> ManifestContribution:
    """Detect infrastructure services from the first compose file found."""
    found = read_first(root, COMPOSE_FILES)
    if found is None:
        return ManifestContribution.empty()
    _, text = found
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        return ManifestContribution.empty()

    frameworks: set[str] = {"docker"}
    services = data.get("services") or {}
    if isinstance(services, dict):
        for service_name, service in services.items():
            name = str(service_name).lower()
            if name in SERVICE_MAPPINGS:
                frameworks.add(SERVICE_MAPPINGS[name])
            image = service.get("image") if isinstance(service, dict) else None
            if isinstance(image, str) and _image_name(image) in SERVICE_MAPPINGS:
                frameworks.add(SERVICE_MAPPINGS[_image_name(image)])

    return ManifestContribution(frameworks=frameworks)


@fails_soft
def read_env_templates(root: Path) -> ManifestContribution:
    """Detect external services from variable names in .env template files."""
    frameworks: set[str] = set()
    for name in ENV_TEMPLATE_FILES:
        found = read_first(root, [name])
        if found is None:
            continue
        _, text = found
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            match = _ENV_VAR.match(line)
            if not match:
                continue
            for pattern, service in ENV_SERVICE_PATTERNS:
                if pattern.match(match.group(1)):
                    frameworks.add(service)
                    break
    return ManifestContribution(frameworks=frameworks)
