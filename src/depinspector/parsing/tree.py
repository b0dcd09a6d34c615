"""Recover dependency edges from indentation-structured tree text."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from depinspector.model import Coordinate, Requester
from depinspector.parsing.grammar import ClassifiedLine, Grammar

ROOT_REQUESTER = "Project Root"
MAVEN_REQUESTER = "Project"


@dataclass(frozen=True)
class Edge:
    """One parent → child occurrence in the printed tree."""

    coordinate: Coordinate
    requested_version: str
    resolved_version: str
    requester: Requester
    depth: int = 0

    @property
    def is_conflict(self) -> bool:
        return self.requested_version != self.resolved_version


def classify_lines(lines: Iterable[str], grammar: Grammar) -> Iterator[ClassifiedLine]:
    """Yield every line *grammar* recognizes, skipping the rest."""
    for line in lines:
        classified = grammar.classify(line)
        if classified is not None:
            yield classified


def scan_edges(text: str, grammar: Grammar) -> Iterator[Edge]:
    """Yield dependency edges found in *text* in output order."""
    classified = classify_lines(text.splitlines(), grammar)
    if grammar.tracks_depth:
        return _scan_nested(classified)
    return _scan_flat(classified)


def _scan_nested(lines: Iterable[ClassifiedLine]) -> Iterator[Edge]:
    # Ancestor chain for the current line: (label, depth), innermost last.
    stack: list[tuple[str, int]] = []

    for line in lines:
        while stack and stack[-1][1] >= line.depth:
            stack.pop()

        if stack:
            requester_name, is_direct = stack[-1][0], False
        else:
            requester_name, is_direct = ROOT_REQUESTER, True

        resolved = line.effective_version
        yield Edge(
            coordinate=Coordinate(line.group_id, line.artifact_id),
            requested_version=line.requested_version,
            resolved_version=resolved,
            requester=Requester(requester_name, line.requested_version, is_direct),
            depth=line.depth,
        )

        stack.append((f"{line.artifact_id}:{resolved}", line.depth))


def _scan_flat(lines: Iterable[ClassifiedLine]) -> Iterator[Edge]:
    for line in lines:
        version = line.effective_version
        yield Edge(
            coordinate=Coordinate(line.group_id, line.artifact_id),
            requested_version=line.requested_version,
            resolved_version=version,
            requester=Requester(MAVEN_REQUESTER, line.requested_version, True),
            depth=0,
        )
