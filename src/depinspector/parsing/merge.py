"""Deduplicate dependency edges into per-coordinate nodes."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from depinspector.model import DependencyNode, DependencyStatus
from depinspector.parsing.tree import Edge

logger = logging.getLogger(__name__)


def node_from_edge(edge: Edge) -> DependencyNode:
    """Build the node for the first sighting of a coordinate."""
    conflict = edge.is_conflict
    return DependencyNode(
        coordinate=edge.coordinate,
        resolved_version=edge.resolved_version,
        requested_version=edge.requested_version if conflict else None,
        status=DependencyStatus.CONFLICT if conflict else DependencyStatus.RESOLVED,
        requested_by=(edge.requester,),
    )


def merge_status(a: DependencyStatus, b: DependencyStatus) -> DependencyStatus:
    """Join two statuses; CONFLICT absorbs everything else."""
    if DependencyStatus.CONFLICT in (a, b):
        return DependencyStatus.CONFLICT
    return a


def merge_nodes(existing: DependencyNode, incoming: DependencyNode) -> DependencyNode:
    """Return *existing* widened with the new requesters of *incoming*.

    Requesters keep first-seen order and are unique by (name, requested
    version).  Only requesters that were actually added can escalate the
    status, judged against the resolved version of *existing*.  The first
    recorded requested version wins.
    """
    if existing.coordinate != incoming.coordinate:
        raise ValueError(
            f"Cannot merge {existing.coordinate} with {incoming.coordinate}"
        )

    seen = {r.identity for r in existing.requested_by}
    requested_by = list(existing.requested_by)
    added = []
    for requester in incoming.requested_by:
        if requester.identity not in seen:
            seen.add(requester.identity)
            requested_by.append(requester)
            added.append(requester)

    mismatched = [
        r.requested_version
        for r in added
        if r.requested_version != existing.resolved_version
    ]
    status = existing.status
    if mismatched:
        status = merge_status(status, DependencyStatus.CONFLICT)

    return DependencyNode(
        coordinate=existing.coordinate,
        resolved_version=existing.resolved_version,
        requested_version=existing.requested_version or next(iter(mismatched), None),
        status=status,
        requested_by=tuple(requested_by),
    )


def merge_edges(edges: Iterable[Edge]) -> list[DependencyNode]:
    """Fold *edges* into one node per coordinate, in first-seen order."""
    nodes: dict[str, DependencyNode] = {}
    count = 0
    for edge in edges:
        count += 1
        incoming = node_from_edge(edge)
        key = edge.coordinate.key
        existing = nodes.get(key)
        nodes[key] = incoming if existing is None else merge_nodes(existing, incoming)

    logger.debug("Merged %d edges into %d dependencies", count, len(nodes))
    return list(nodes.values())
