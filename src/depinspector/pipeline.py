"""Orchestrator: detect → run build tool → parse."""

from __future__ import annotations

import logging
from pathlib import Path

from depinspector.config import Settings, load_settings
from depinspector.detect import detect_dialect, guess_project_name
from depinspector.model import ModuleInfo
from depinspector.parsing import Dialect, parse_output
from depinspector.runner import run_dependency_listing

logger = logging.getLogger(__name__)


def analyze_text(
    text: str,
    dialect: Dialect,
    project_name: str,
    settings: Settings | None = None,
) -> tuple[ModuleInfo, ...]:
    """Parse an already-captured dependency listing."""
    settings = settings or Settings()
    return parse_output(
        text, dialect, project_name, indent_width=settings.indent_width
    )


def analyze(
    project_dir: Path,
    *,
    settings: Settings | None = None,
    name: str | None = None,
) -> tuple[ModuleInfo, ...]:
    """Run the dependency listing for *project_dir* and return its modules.

    Unknown project types and build-tool failures yield an empty tuple.
    """
    project_dir = project_dir.resolve()
    dialect = detect_dialect(project_dir)
    if dialect is None:
        logger.info("Unknown project type in %s; cannot analyze dependencies.", project_dir)
        return ()

    settings = settings or load_settings(project_dir)
    project_name = name or guess_project_name(project_dir)
    logger.debug("Project: %s (%s)", project_name, dialect.value)

    output = run_dependency_listing(project_dir, dialect, settings)
    if output is None:
        return ()

    return analyze_text(output, dialect, project_name, settings)
