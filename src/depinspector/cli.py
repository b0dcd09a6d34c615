"""Command-line interface for depinspector."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from depinspector.catalog import annotate_catalog_file, find_catalog
from depinspector.config import Settings, load_settings
from depinspector.detect import detect_dialect, guess_project_name
from depinspector.parsing import Dialect, resolved_versions
from depinspector.pipeline import analyze, analyze_text
from depinspector.renderer import render_json, render_text, render_yaml

logger = logging.getLogger(__name__)

_RENDERERS = {
    "text": render_text,
    "json": render_json,
    "yaml": render_yaml,
}

# --catalog given without a value
_FIND_CATALOG = object()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depinspector",
        description="Report dependency version conflicts in Gradle and Maven projects.",
    )
    parser.add_argument(
        "project_dir",
        type=Path,
        nargs="?",
        default=Path("."),
        help="Path to the Gradle or Maven project (default: current directory)",
    )
    parser.add_argument(
        "-i",
        "--input",
        default=None,
        help="Parse a saved dependency listing instead of running the build tool ('-' for stdin)",
    )
    parser.add_argument(
        "--dialect",
        choices=[d.value for d in Dialect],
        default=None,
        help="Format of --input (default: detect from project_dir)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=sorted(_RENDERERS),
        default="text",
        help="Report format (default: text)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the report to this file instead of stdout",
    )
    parser.add_argument(
        "--conflicts-only",
        action="store_true",
        help="Only list dependencies with a version conflict",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        nargs="?",
        const=_FIND_CATALOG,
        default=None,
        help=(
            "Version catalog to annotate with resolved versions "
            "(without a value: look for gradle/libs.versions.toml)"
        ),
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Module display name (default: auto-detect from build files)",
    )
    parser.add_argument(
        "--configuration",
        dest="gradle_configuration",
        default=None,
        help="Gradle configuration to list (default: runtimeClasspath)",
    )
    parser.add_argument(
        "--indent-width",
        type=int,
        default=None,
        help="Characters per nesting level in Gradle output (default: 5)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for the build tool (default: 120)",
    )
    parser.add_argument(
        "--fail-on-conflict",
        action="store_true",
        help="Exit with status 1 if any conflict is found",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("depinspector").setLevel(logging.DEBUG)

    if args.indent_width is not None and args.indent_width < 1:
        parser.error("--indent-width must be a positive integer")

    project_dir: Path = args.project_dir
    settings = load_settings(project_dir) if project_dir.is_dir() else Settings()
    settings = settings.updated(
        gradle_configuration=args.gradle_configuration,
        indent_width=args.indent_width,
        timeout=args.timeout,
    )

    if args.input is not None:
        dialect = Dialect(args.dialect) if args.dialect else detect_dialect(project_dir)
        if dialect is None:
            parser.error("--dialect is required when project_dir is not a Gradle or Maven project")
        try:
            text = _read_input(args.input)
        except OSError as e:
            parser.error(f"cannot read {args.input}: {e}")
        name = args.name or guess_project_name(project_dir.resolve())
        modules = analyze_text(text, dialect, name, settings)
    else:
        modules = analyze(project_dir, settings=settings, name=args.name)

    hints = []
    catalog = args.catalog
    if catalog is _FIND_CATALOG:
        catalog = find_catalog(project_dir.resolve())
        if catalog is None:
            logger.warning("No version catalog found under %s", project_dir)
    if catalog is not None:
        hints = annotate_catalog_file(catalog, resolved_versions(modules))

    report = _RENDERERS[args.format](
        modules, conflicts_only=args.conflicts_only, hints=hints
    )

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(report, encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(report)
        if args.format != "text" and not report.endswith("\n"):
            sys.stdout.write("\n")

    if args.fail_on_conflict and any(m.conflict_count for m in modules):
        return 1
    return 0
