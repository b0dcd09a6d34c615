"""Parse build-tool dependency trees into merged module records."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from depinspector.model import ModuleInfo
from depinspector.parsing.grammar import (
    DEFAULT_GRADLE_INDENT,
    ClassifiedLine,
    Dialect,
    GradleGrammar,
    Grammar,
    MavenGrammar,
    grammar_for,
)
from depinspector.parsing.merge import merge_edges, merge_nodes
from depinspector.parsing.tree import Edge, scan_edges

logger = logging.getLogger(__name__)

__all__ = [
    "ClassifiedLine",
    "Dialect",
    "Edge",
    "GradleGrammar",
    "Grammar",
    "MavenGrammar",
    "grammar_for",
    "merge_edges",
    "merge_nodes",
    "parse_output",
    "resolved_versions",
    "scan_edges",
]


def parse_output(
    text: str,
    dialect: Dialect,
    project_name: str,
    *,
    indent_width: int = DEFAULT_GRADLE_INDENT,
) -> tuple[ModuleInfo, ...]:
    """Parse one dependency listing into module records.

    Returns an empty tuple when *text* holds no recognizable dependency.
    """
    grammar = grammar_for(dialect, indent_width=indent_width)
    dependencies = merge_edges(scan_edges(text, grammar))
    if not dependencies:
        logger.debug("No %s dependencies found in output", dialect.value)
        return ()

    module = ModuleInfo(name=project_name, dependencies=tuple(dependencies))
    logger.debug(
        "%s: %d dependencies, %d conflicts",
        module.name,
        len(module.dependencies),
        module.conflict_count,
    )
    return (module,)


def resolved_versions(modules: Sequence[ModuleInfo]) -> dict[str, str]:
    """Map ``group:artifact`` to resolved version, from the last module."""
    if not modules:
        return {}
    return {d.coordinate.key: d.resolved_version for d in modules[-1].dependencies}
