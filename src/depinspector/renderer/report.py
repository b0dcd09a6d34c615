"""Render module records as text, JSON, or YAML reports."""

from __future__ import annotations

import json
from collections.abc import Sequence

import yaml

from depinspector.catalog import VersionHint
from depinspector.model import DependencyNode, ModuleInfo, Requester


def _requester_to_dict(req: Requester) -> dict:
    return {
        "name": req.name,
        "requested_version": req.requested_version,
        "direct": req.is_direct,
    }


def _node_to_dict(node: DependencyNode) -> dict:
    d: dict = {
        "coordinate": node.coordinate.key,
        "resolved_version": node.resolved_version,
        "status": node.status.value,
        "requested_by": [_requester_to_dict(r) for r in node.requested_by],
    }
    if node.requested_version is not None:
        d["requested_version"] = node.requested_version
    return d


def _visible(module: ModuleInfo, conflicts_only: bool) -> Sequence[DependencyNode]:
    return module.conflicts if conflicts_only else module.dependencies


def to_dict(
    modules: Sequence[ModuleInfo],
    *,
    conflicts_only: bool = False,
    hints: Sequence[VersionHint] = (),
) -> dict:
    """Serialize *modules* into plain data for JSON/YAML output."""
    data: dict = {
        "modules": [
            {
                "name": m.name,
                "conflict_count": m.conflict_count,
                "dependencies": [_node_to_dict(d) for d in _visible(m, conflicts_only)],
            }
            for m in modules
        ]
    }
    if hints:
        data["catalog_hints"] = [
            {
                "line": h.line,
                "coordinate": h.coordinate,
                "declared": h.declared,
                "resolved": h.resolved,
            }
            for h in hints
        ]
    return data


def render_json(modules: Sequence[ModuleInfo], **kwargs) -> str:
    return json.dumps(to_dict(modules, **kwargs), indent=2)


def render_yaml(modules: Sequence[ModuleInfo], **kwargs) -> str:
    return yaml.safe_dump(to_dict(modules, **kwargs), sort_keys=False)


def render_text(
    modules: Sequence[ModuleInfo],
    *,
    conflicts_only: bool = False,
    hints: Sequence[VersionHint] = (),
) -> str:
    """Human-readable tree: module → dependency → requesters."""
    if not modules:
        return "No dependencies found.\n"

    lines: list[str] = []
    for module in modules:
        lines.append(
            f"{module.name} ({len(module.dependencies)} dependencies, "
            f"{module.conflict_count} conflicts)"
        )
        for node in _visible(module, conflicts_only):
            if node.requested_version is not None:
                header = f"{node.coordinate}:{node.requested_version} -> {node.resolved_version}"
            else:
                header = node.full_coordinate
            lines.append(f"  {header} [{node.status.value.upper()}]")
            if not node.requested_by:
                lines.append("      no conflicts detected")
            for req in node.requested_by:
                direct = " (direct)" if req.is_direct else ""
                lines.append(f"      <- {req.name} wants {req.requested_version}{direct}")

    if hints:
        lines.append("")
        lines.append("Version catalog:")
        for h in hints:
            lines.append(f"  line {h.line}: {h.coordinate} {h.declared} → {h.resolved}")

    return "\n".join(lines) + "\n"
