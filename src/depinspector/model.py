"""Data model for resolved dependency graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DependencyStatus(str, Enum):
    """Resolution status of a dependency."""

    RESOLVED = "resolved"
    CONFLICT = "conflict"
    MISSING = "missing"
    OUTDATED = "outdated"


@dataclass(frozen=True)
class Coordinate:
    """Version-independent identity of a dependency."""

    group_id: str
    artifact_id: str

    @property
    def key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    def with_version(self, version: str) -> str:
        return f"{self.key}:{version}"

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class Requester:
    """Who asked for a dependency, and which version they asked for."""

    name: str
    requested_version: str
    is_direct: bool = False

    @property
    def identity(self) -> tuple[str, str]:
        return (self.name, self.requested_version)


@dataclass(frozen=True)
class DependencyNode:
    """A deduplicated dependency with everyone who requested it."""

    coordinate: Coordinate
    resolved_version: str
    requested_version: str | None = None  # only set when it differs from resolved
    status: DependencyStatus = DependencyStatus.RESOLVED
    requested_by: tuple[Requester, ...] = field(default_factory=tuple)

    @property
    def full_coordinate(self) -> str:
        return self.coordinate.with_version(self.resolved_version)

    @property
    def has_conflict(self) -> bool:
        return self.status is DependencyStatus.CONFLICT or any(
            r.requested_version != self.resolved_version for r in self.requested_by
        )


@dataclass(frozen=True)
class ModuleInfo:
    """A project module and its merged dependency list."""

    name: str
    dependencies: tuple[DependencyNode, ...] = field(default_factory=tuple)

    @property
    def conflict_count(self) -> int:
        return sum(1 for d in self.dependencies if d.has_conflict)

    @property
    def conflicts(self) -> list[DependencyNode]:
        return [d for d in self.dependencies if d.has_conflict]
