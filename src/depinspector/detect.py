"""Auto-detect the build tool and display name of a project."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from depinspector.parsing.grammar import Dialect

logger = logging.getLogger(__name__)

GRADLE_FILES = ("build.gradle.kts", "build.gradle", "settings.gradle.kts", "settings.gradle")
MAVEN_FILES = ("pom.xml",)


def is_gradle_project(project_dir: Path) -> bool:
    return any((project_dir / name).exists() for name in GRADLE_FILES)


def is_maven_project(project_dir: Path) -> bool:
    return any((project_dir / name).exists() for name in MAVEN_FILES)


def detect_dialect(project_dir: Path) -> Dialect | None:
    """Return the dialect for *project_dir*, or None if it is not a JVM build."""
    if is_gradle_project(project_dir):
        return Dialect.GRADLE
    if is_maven_project(project_dir):
        return Dialect.MAVEN
    return None


def guess_project_name(project_dir: Path) -> str:
    """Guess the project display name from Gradle settings, pom.xml, or the directory."""
    for settings_name in ("settings.gradle.kts", "settings.gradle"):
        settings_path = project_dir / settings_name
        if settings_path.exists():
            name = _guess_gradle_name(settings_path)
            if name:
                return name

    pom_path = project_dir / "pom.xml"
    if pom_path.exists():
        name = _guess_maven_name(pom_path)
        if name:
            return name

    return project_dir.name


def _guess_gradle_name(settings_path: Path) -> str | None:
    """Extract rootProject.name from settings.gradle(.kts)."""
    try:
        content = settings_path.read_text(encoding="utf-8")
    except OSError:
        return None

    # Groovy allows single quotes: rootProject.name = 'app'
    m = re.search(r"""rootProject\.name\s*=\s*["']([^"']+)["']""", content)
    if m:
        return m.group(1)
    return None


def _guess_maven_name(pom_path: Path) -> str | None:
    """Extract the artifactId (or name) from pom.xml using jgo."""
    try:
        from jgo.maven import POM

        pom = POM(pom_path)
        return pom.artifactId or pom.name
    except (ImportError, OSError, ValueError, KeyError, AttributeError) as e:
        logger.debug("Could not read project name from %s: %s", pom_path, e)
        return None
