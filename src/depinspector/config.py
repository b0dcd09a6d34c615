"""Per-project settings read from .depinspector.toml or pyproject.toml."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from depinspector.parsing.grammar import DEFAULT_GRADLE_INDENT

logger = logging.getLogger(__name__)

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]


@dataclass(frozen=True)
class Settings:
    """How to invoke the build tool and read its output."""

    gradle_task: str = "dependencies"
    gradle_configuration: str = "runtimeClasspath"
    indent_width: int = DEFAULT_GRADLE_INDENT
    timeout: float = 120.0
    maven_args: tuple[str, ...] = field(default_factory=tuple)

    def updated(self, **overrides: Any) -> Settings:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_settings(project_dir: Path) -> Settings:
    """Read settings for *project_dir*, falling back to defaults."""
    table = _read_config_table(project_dir)
    if not table:
        return Settings()
    return _settings_from_table(table)


def _read_config_table(project_dir: Path) -> dict[str, Any] | None:
    # .depinspector.toml wins over [tool.depinspector] in pyproject.toml
    own_toml = project_dir / ".depinspector.toml"
    if own_toml.exists():
        try:
            with open(own_toml, "rb") as f:
                data = tomllib.load(f)
            return data.get("depinspector", {})
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Could not read %s: %s", own_toml, e)

    pyproject = project_dir / "pyproject.toml"
    if pyproject.exists():
        try:
            with open(pyproject, "rb") as f:
                data = tomllib.load(f)
            return data.get("tool", {}).get("depinspector", {})
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.debug("Could not read %s: %s", pyproject, e)

    return None


def _settings_from_table(table: dict[str, Any]) -> Settings:
    known = {f.name for f in fields(Settings)}
    values: dict[str, Any] = {}

    for key, value in table.items():
        if key not in known:
            logger.warning("Ignoring unknown setting %r", key)
            continue
        values[key] = value

    if "maven_args" in values:
        args = values["maven_args"]
        if isinstance(args, list) and all(isinstance(a, str) for a in args):
            values["maven_args"] = tuple(args)
        else:
            logger.warning("maven_args must be a list of strings; ignoring")
            del values["maven_args"]

    width = values.get("indent_width")
    if width is not None and (
        isinstance(width, bool) or not isinstance(width, int) or width < 1
    ):
        logger.warning("indent_width must be a positive integer, got %r", width)
        del values["indent_width"]

    timeout = values.get("timeout")
    if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
        logger.warning("timeout must be a positive number, got %r", timeout)
        del values["timeout"]

    for key in ("gradle_task", "gradle_configuration"):
        if key in values and not isinstance(values[key], str):
            logger.warning("%s must be a string, got %r", key, values[key])
            del values[key]

    return Settings(**values)
