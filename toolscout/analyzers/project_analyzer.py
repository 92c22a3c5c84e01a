"""Project analyzer.

Walks a project tree (bounded by depth and file count), classifies files by
extension and by well-known configuration filenames, and merges every
manifest reader's contribution into a ProjectFingerprint.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from .models import ProjectFingerprint
from .readers import ManifestReader, all_readers, run_readers

logger = logging.getLogger("toolscout.analyzer")

DEFAULT_MAX_DEPTH = 5
DEFAULT_MAX_FILES = 1000

# Directories never descended into (anything starting with "." is skipped too)
SKIP_DIRS: frozenset[str] = frozenset({
    "node_modules",
    ".git",
    "dist",
    "build",
    "out",
    ".next",
    ".nuxt",
    "coverage",
    ".cache",
    ".vscode",
    ".idea",
    "__pycache__",
    "venv",
    ".venv",
    "target",
    "vendor",
})

# Configuration file (or directory) name -> what it tells us
CONFIG_FILE_MAPPINGS: dict[str, dict[str, str]] = {
    "package.json": {"language": "javascript"},
    "tsconfig.json": {"language": "typescript"},
    "next.config.js": {"framework": "nextjs"},
    "next.config.mjs": {"framework": "nextjs"},
    "next.config.ts": {"framework": "nextjs"},
    "nuxt.config.ts": {"framework": "nuxt"},
    "nuxt.config.js": {"framework": "nuxt"},
    "vite.config.ts": {"framework": "vite"},
    "vite.config.js": {"framework": "vite"},
    "svelte.config.js": {"framework": "svelte"},
    "angular.json": {"framework": "angular"},
    "vue.config.js": {"framework": "vue"},
    "remix.config.js": {"framework": "remix"},
    "astro.config.mjs": {"framework": "astro"},
    "requirements.txt": {"language": "python"},
    "pyproject.toml": {"language": "python"},
    "setup.py": {"language": "python"},
    "Cargo.toml": {"language": "rust"},
    "go.mod": {"language": "go"},
    "Gemfile": {"language": "ruby"},
    "composer.json": {"language": "php"},
    "pom.xml": {"language": "java"},
    "build.gradle": {"language": "java"},
    "build.gradle.kts": {"language": "kotlin"},
    "Dockerfile": {"framework": "docker"},
    "docker-compose.yml": {"framework": "docker"},
    "docker-compose.yaml": {"framework": "docker"},
    "kubernetes.yml": {"framework": "kubernetes"},
    "k8s.yml": {"framework": "kubernetes"},
    "k8s": {"framework": "kubernetes"},
    "vercel.json": {"framework": "vercel"},
    "netlify.toml": {"framework": "netlify"},
    "prisma/schema.prisma": {"framework": "prisma"},
    "drizzle.config.ts": {"framework": "drizzle"},
    "terraform": {"framework": "terraform"},
    "CLAUDE.md": {"framework": "claude-code"},
}

EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".py": "python",
    ".rs": "rust",
    ".go": "go",
    ".rb": "ruby",
    ".php": "php",
    ".java": "java",
    ".kt": "kotlin",
    ".kts": "kotlin",
    ".cs": "csharp",
    ".csproj": "csharp",
    ".swift": "swift",
    ".lua": "lua",
    ".c": "c",
    ".cpp": "cpp",
    ".h": "c",
    ".hpp": "cpp",
    ".tf": "terraform",
}


def should_skip_dir(name: str) -> bool:
    """Check if a directory should be skipped during scanning."""
    return name in SKIP_DIRS or name.startswith(".")


def match_config_file(relative_path: str) -> Optional[dict[str, str]]:
    """Find the config mapping for a path: exact match or ``/<key>`` suffix."""
    for key, mapping in CONFIG_FILE_MAPPINGS.items():
        if relative_path == key or relative_path.endswith(f"/{key}"):
            return mapping
    return None


class ProjectAnalyzer:
    """Builds a ProjectFingerprint from a directory tree.

    Args:
        max_depth: Deepest directory level (root = 0) that is listed.
        max_files: Cap on the number of paths recorded in ``files``.
        readers: Manifest readers to run; defaults to the built-in readers
            plus any registered through entry points.
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_files: int = DEFAULT_MAX_FILES,
        readers: Optional[Sequence[ManifestReader]] = None,
    ):
        self.max_depth = max_depth
        self.max_files = max_files
        self._readers = tuple(readers) if readers is not None else None

    @property
    def readers(self) -> tuple[ManifestReader, ...]:
        if self._readers is None:
            self._readers = all_readers()
        return self._readers

    def analyze(self, project_path: Union[str, Path]) -> ProjectFingerprint:
        """Analyze a project directory and return its fingerprint.

        Never raises for a missing or unreadable path; the fingerprint is
        simply empty.
        """
        root = Path(project_path)
        try:
            root = root.expanduser()
        except RuntimeError as e:
            # ~user for an unknown user; keep the literal path
            logger.debug("Cannot expand %s: %s", root, e)
        root = root.resolve()
        fingerprint = ProjectFingerprint(path=root)
        logger.info("Analyzing project: %s", root)

        self._walk(root, root, fingerprint, depth=0)
        if len(fingerprint.files) >= self.max_files:
            logger.warning("Hit file limit (%d), later files were not recorded", self.max_files)

        contribution = run_readers(root, self.readers)
        fingerprint.dependencies |= contribution.dependencies
        fingerprint.frameworks |= contribution.frameworks
        fingerprint.description = contribution.description

        logger.debug(
            "Fingerprint: %d languages, %d frameworks, %d dependencies, %d files",
            len(fingerprint.languages),
            len(fingerprint.frameworks),
            len(fingerprint.dependencies),
            len(fingerprint.files),
        )
        return fingerprint

    def _walk(
        self,
        root: Path,
        current: Path,
        fingerprint: ProjectFingerprint,
        depth: int,
    ) -> None:
        """Recursively scan a directory, recording files and detection signals."""
        if depth > self.max_depth:
            return

        try:
            entries = sorted(current.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.debug("Cannot list %s: %s", current, e)
            return

        for entry in entries:
            try:
                is_dir = entry.is_dir() and not entry.is_symlink()
                is_file = not is_dir and entry.is_file()
            except OSError:
                continue

            if is_dir:
                if should_skip_dir(entry.name):
                    continue
                self._record(CONFIG_FILE_MAPPINGS.get(entry.name), fingerprint)
                self._walk(root, entry, fingerprint, depth + 1)
            elif is_file:
                relative = entry.relative_to(root).as_posix()
                if len(fingerprint.files) < self.max_files:
                    fingerprint.files.append(relative)
                self._record(match_config_file(relative), fingerprint)
                language = EXTENSION_TO_LANGUAGE.get(entry.suffix.lower())
                if language:
                    fingerprint.languages.add(language)

    @staticmethod
    def _record(mapping: Optional[dict[str, str]], fingerprint: ProjectFingerprint) -> None:
        if not mapping:
            return
        if "framework" in mapping:
            fingerprint.frameworks.add(mapping["framework"])
        if "language" in mapping:
            fingerprint.languages.add(mapping["language"])
