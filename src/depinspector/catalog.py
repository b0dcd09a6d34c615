"""Annotate a Gradle version catalog with actually-resolved versions."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]

# gson = "com.google.code.gson:gson:2.8.6"
_INLINE_RE = re.compile(r'^\s*[\w-]+\s*=\s*"([\w.-]+):([\w.-]+):([\w.-]+)"\s*$')

# gson = { module = "com.google.code.gson:gson", version.ref = "gson" }
_MODULE_REF_RE = re.compile(
    r'^\s*[\w-]+\s*=\s*\{[^}]*module\s*=\s*"([\w.-]+):([\w.-]+)"'
    r'[^}]*version\.ref\s*=\s*"([\w.-]+)"[^}]*\}'
)

# gson = { version.ref = "gson", module = "com.google.code.gson:gson" }
_REF_MODULE_RE = re.compile(
    r'^\s*[\w-]+\s*=\s*\{[^}]*version\.ref\s*=\s*"([\w.-]+)"'
    r'[^}]*module\s*=\s*"([\w.-]+):([\w.-]+)"[^}]*\}'
)


@dataclass(frozen=True)
class VersionHint:
    """A catalog declaration whose resolved version differs from the declared one."""

    line: int  # 1-based
    coordinate: str
    declared: str
    resolved: str


def parse_versions_table(text: str) -> dict[str, str]:
    """Return the ``[versions]`` table of a catalog as alias -> version."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        logger.debug("Could not parse version catalog: %s", e)
        return {}

    versions: dict[str, str] = {}
    for alias, ver in data.get("versions", {}).items():
        if isinstance(ver, str):
            versions[alias] = ver
        elif isinstance(ver, dict):
            # Rich versions: { strictly = "1.0" } / { require = "1.0" } / { prefer = ... }
            for key in ("strictly", "require", "prefer"):
                if isinstance(ver.get(key), str):
                    versions[alias] = ver[key]
                    break
    return versions


def parse_declaration(line: str, versions: Mapping[str, str]) -> tuple[str, str] | None:
    """Return (``group:artifact``, declared version) for one catalog line."""
    m = _INLINE_RE.match(line)
    if m:
        return f"{m.group(1)}:{m.group(2)}", m.group(3)

    m = _MODULE_REF_RE.match(line)
    if m:
        ref = m.group(3)
        return f"{m.group(1)}:{m.group(2)}", versions.get(ref, ref)

    m = _REF_MODULE_RE.match(line)
    if m:
        ref = m.group(1)
        return f"{m.group(2)}:{m.group(3)}", versions.get(ref, ref)

    return None


def annotate_catalog(text: str, resolved: Mapping[str, str]) -> list[VersionHint]:
    """Return a hint for every declaration in *text* that resolved differently."""
    versions = parse_versions_table(text)
    hints: list[VersionHint] = []

    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "[")) or ":" not in stripped:
            continue
        parsed = parse_declaration(line, versions)
        if parsed is None:
            continue
        coordinate, declared = parsed
        actual = resolved.get(coordinate)
        if actual is not None and actual != declared:
            hints.append(VersionHint(lineno, coordinate, declared, actual))

    logger.debug("Version catalog: %d hints", len(hints))
    return hints


def annotate_catalog_file(path: Path, resolved: Mapping[str, str]) -> list[VersionHint]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Could not read %s: %s", path, e)
        return []
    return annotate_catalog(text, resolved)


def find_catalog(project_dir: Path) -> Path | None:
    """Locate gradle/libs.versions.toml in *project_dir* or up to three parents."""
    candidates = [project_dir / "gradle" / "libs.versions.toml"]
    parent = project_dir.parent
    for _ in range(3):
        candidates.append(parent / "gradle" / "libs.versions.toml")
        parent = parent.parent

    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None
