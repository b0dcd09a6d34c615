"""Surface dependency version conflicts from Gradle and Maven dependency trees."""

from depinspector.model import (
    Coordinate,
    DependencyNode,
    DependencyStatus,
    ModuleInfo,
    Requester,
)
from depinspector.parsing import Dialect, parse_output, resolved_versions
from depinspector.service import AnalysisService

__version__ = "0.1.0"

__all__ = [
    "AnalysisService",
    "Coordinate",
    "DependencyNode",
    "DependencyStatus",
    "Dialect",
    "ModuleInfo",
    "Requester",
    "parse_output",
    "resolved_versions",
]
