"""Run the build tool's dependency-listing command."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

from depinspector.config import Settings
from depinspector.parsing.grammar import Dialect

logger = logging.getLogger(__name__)


def build_command(project_dir: Path, dialect: Dialect, settings: Settings) -> list[str]:
    """Return the argv that prints the dependency tree for *project_dir*."""
    if dialect is Dialect.GRADLE:
        executable = _wrapper_or(project_dir, "gradlew", "gradle")
        return [
            executable,
            settings.gradle_task,
            "--configuration",
            settings.gradle_configuration,
            "-q",
        ]
    executable = _wrapper_or(project_dir, "mvnw", "mvn")
    # no -q: Maven prints the tree at INFO level
    return [executable, "-B", "dependency:tree", "-DoutputType=text", *settings.maven_args]


def _wrapper_or(project_dir: Path, wrapper: str, fallback: str) -> str:
    if os.name == "nt" and (project_dir / f"{wrapper}.bat").exists():
        return str(project_dir / f"{wrapper}.bat")
    if (project_dir / wrapper).exists():
        return str(project_dir / wrapper)
    return shutil.which(fallback) or fallback


def run_dependency_listing(
    project_dir: Path, dialect: Dialect, settings: Settings
) -> str | None:
    """Return combined stdout/stderr of the listing command, or None on failure."""
    cmd = build_command(project_dir, dialect, settings)
    logger.debug("Running %s in %s", " ".join(cmd), project_dir)

    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            cwd=str(project_dir),
            timeout=settings.timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Could not run %s: %s", cmd[0], e)
        return None

    if result.returncode != 0:
        logger.warning(
            "%s exited with status %d: %s",
            Path(cmd[0]).name,
            result.returncode,
            _tail(result.stdout) or "unknown error",
        )
        return None

    return result.stdout


def _tail(output: str | None, lines: int = 5) -> str:
    if not output:
        return ""
    return "\n".join(output.strip().splitlines()[-lines:])
