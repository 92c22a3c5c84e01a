"""Maven pom.xml and Gradle build file readers.

JVM artifact names carry their variant as a suffix (``spring-boot-starter-web``,
``hibernate-core``), so both readers also apply the ``<dep>-<suffix>``
convention when mapping artifacts to frameworks.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Optional

from ..models import ManifestContribution
from .base import clean_description, fails_soft, read_first

JVM_FRAMEWORKS: dict[str, str] = {
    "spring-boot": "spring-boot",
    "org.springframework.boot": "spring-boot",
    "spring-web": "spring",
    "spring-webmvc": "spring",
    "spring-context": "spring",
    "org.springframework": "spring",
    "ktor": "ktor",
    "io.ktor": "ktor",
    "hibernate": "hibernate",
    "org.hibernate": "hibernate",
    "junit": "junit",
    "junit-jupiter": "junit",
    "org.junit.jupiter": "junit",
    "mockito": "mockito",
    "org.mockito": "mockito",
    "mockk": "mockk",
    "lombok": "lombok",
    "guava": "guava",
    "jackson": "jackson",
    "com.fasterxml.jackson.core": "jackson",
    "postgresql": "postgresql",
    "mysql-connector-java": "mysql",
    "mysql-connector-j": "mysql",
    "h2": "h2",
    "kafka": "kafka",
    "kafka-clients": "kafka",
    "spring-kafka": "kafka",
    "jedis": "redis",
    "lettuce-core": "redis",
    "mongodb-driver-sync": "mongodb",
    "org.mongodb": "mongodb",
    "exposed": "exposed",
    "org.jetbrains.exposed": "exposed",
}

_GRADLE_CONFIGURATIONS = r"(?:implementation|api|compile|compileOnly|testImplementation|runtimeOnly|kapt)"
_GRADLE_STRING_NOTATION = re.compile(
    _GRADLE_CONFIGURATIONS + r"""\s*\(?\s*['"]([^'":\s]+):([^'":\s]+)(?::[^'"]*)?['"]"""
)
_GRADLE_MAP_NOTATION = re.compile(
    _GRADLE_CONFIGURATIONS
    + r"""\s*\(?\s*group\s*[:=]\s*['"]([^'"]+)['"]\s*,\s*name\s*[:=]\s*['"]([^'"]+)['"]"""
)


def _framework_for(name: str) -> Optional[str]:
    if name in JVM_FRAMEWORKS:
        return JVM_FRAMEWORKS[name]
    for key, framework in JVM_FRAMEWORKS.items():
        if name.startswith(f"{key}-"):
            return framework
    return None


def _frameworks(coordinates: Iterable[tuple[str, str]]) -> set[str]:
    frameworks: set[str] = set()
    for group, artifact in coordinates:
        framework = _framework_for(artifact) or _framework_for(group)
        if framework:
            frameworks.add(framework)
    return frameworks


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


@fails_soft
def read_pom_xml(root: Path) -> ManifestContribution:
    """Read ``<dependency>`` artifactIds from a Maven POM (namespace-agnostic)."""
    found = read_first(root, ["pom.xml"])
    if found is None:
        return ManifestContribution.empty()
    _, text = found
    project = ET.fromstring(text)

    coordinates: list[tuple[str, str]] = []
    for element in project.iter():
        if _local_name(element.tag) != "dependency":
            continue
        fields = {_local_name(child.tag): (child.text or "").strip() for child in element}
        artifact = fields.get("artifactId", "").lower()
        if artifact:
            coordinates.append((fields.get("groupId", "").lower(), artifact))

    description = None
    for child in project:
        if _local_name(child.tag) == "description":
            description = clean_description(child.text)

    return ManifestContribution(
        dependencies={artifact for _, artifact in coordinates},
        frameworks=_frameworks(coordinates),
        description=description,
    )


@fails_soft
def read_build_gradle(root: Path) -> ManifestContribution:
    """Read ``group:artifact`` coordinates from a Groovy or Kotlin DSL build file."""
    found = read_first(root, ["build.gradle", "build.gradle.kts"])
    if found is None:
        return ManifestContribution.empty()
    _, text = found

    coordinates = [
        (group.lower(), artifact.lower())
        for pattern in (_GRADLE_STRING_NOTATION, _GRADLE_MAP_NOTATION)
        for group, artifact in pattern.findall(text)
    ]
    return ManifestContribution(
        dependencies={f"{group}:{artifact}" for group, artifact in coordinates},
        frameworks=_frameworks(coordinates),
    )
