"""Line grammars for build-tool dependency tree output."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

# Gradle indents each tree level with a fixed-width column ("+--- " or "|    ").
# This is not a documented contract of Gradle's renderer.
DEFAULT_GRADLE_INDENT = 5


class Dialect(str, Enum):
    """Supported dependency-tree text formats."""

    GRADLE = "gradle"
    MAVEN = "maven"


@dataclass(frozen=True)
class ClassifiedLine:
    """A single dependency edge recognized in tool output."""

    depth: int
    group_id: str
    artifact_id: str
    requested_version: str
    resolved_version: str | None = None  # set only when the tool printed "->"
    marker: str | None = None  # "*", "c", "n", ...

    @property
    def effective_version(self) -> str:
        return self.resolved_version or self.requested_version


# Branch marker: "+---" for inner children, "\---" for the last child.
_GRADLE_BRANCH_RE = re.compile(r"[+\\]---")

# group:artifact:version [-> resolved] [(marker)]
#   +--- com.google.code.gson:gson:2.8.6 -> 2.8.9 (*)
#   \--- org.jetbrains.kotlin:kotlin-stdlib:1.5.0 -> 1.6.0 (c)
#   +--- org.jetbrains.kotlin:kotlin-stdlib:{strictly 1.8.0} -> 1.8.0 (c)
_GRADLE_DEP_RE = re.compile(
    r"[+\\]---\s+([\w.\-]+):([\w.\-]+):(\{[^}]*\}|[^\s:{]+)"
    r"(?:\s+->\s+(\S+))?"
    r"(?:\s+\(([^)]+)\))?"
)

_RICH_VERSION_KEYWORDS = ("strictly", "require", "prefer")


def _plain_version(token: str) -> str:
    """Reduce a rich version such as ``{strictly 1.8.0}`` to ``1.8.0``."""
    if not token.startswith("{"):
        return token
    clause = token.strip("{}").split(";")[0].strip()
    keyword, _, rest = clause.partition(" ")
    if keyword in _RICH_VERSION_KEYWORDS and rest.strip():
        return rest.strip()
    return clause or token


# [INFO] +- group:artifact:packaging[:classifier]:version:scope
_MAVEN_DEP_RE = re.compile(
    r"^(?:\[\w+\]\s*)?[\s|]*[+\\|`\-]+\s*"
    r"([\w.\-]+):([\w.\-]+):[\w.\-]+:(?:[\w.\-]+:)?([\w.\-]+):[\w.\-]+"
)


@dataclass(frozen=True)
class GradleGrammar:
    """``gradle dependencies`` tree output."""

    tracks_depth: ClassVar[bool] = True

    indent_width: int = DEFAULT_GRADLE_INDENT

    def __post_init__(self) -> None:
        if self.indent_width < 1:
            raise ValueError(f"indent_width must be positive, got {self.indent_width}")

    def classify(self, line: str) -> ClassifiedLine | None:
        if not line.strip():
            return None
        branch = _GRADLE_BRANCH_RE.search(line)
        if branch is None:
            return None
        m = _GRADLE_DEP_RE.match(line, branch.start())
        if m is None:
            return None
        return ClassifiedLine(
            depth=branch.start() // self.indent_width,
            group_id=m.group(1),
            artifact_id=m.group(2),
            requested_version=_plain_version(m.group(3)),
            resolved_version=m.group(4),
            marker=m.group(5),
        )


@dataclass(frozen=True)
class MavenGrammar:
    """``mvn dependency:tree -DoutputType=text`` output, flattened to one level."""

    tracks_depth: ClassVar[bool] = False

    def classify(self, line: str) -> ClassifiedLine | None:
        stripped = line.strip()
        if not stripped:
            return None
        m = _MAVEN_DEP_RE.match(stripped)
        if m is None:
            return None
        return ClassifiedLine(
            depth=0,
            group_id=m.group(1),
            artifact_id=m.group(2),
            requested_version=m.group(3),
        )


Grammar = Union[GradleGrammar, MavenGrammar]


def grammar_for(dialect: Dialect, *, indent_width: int = DEFAULT_GRADLE_INDENT) -> Grammar:
    """Return the line grammar for *dialect*."""
    if dialect is Dialect.GRADLE:
        return GradleGrammar(indent_width=indent_width)
    if dialect is Dialect.MAVEN:
        return MavenGrammar()
    raise ValueError(f"Unsupported dialect: {dialect!r}")
