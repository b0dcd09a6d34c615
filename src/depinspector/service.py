"""Run analysis passes in the background and publish finished snapshots."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from depinspector.config import Settings
from depinspector.model import ModuleInfo
from depinspector.parsing import resolved_versions
from depinspector.pipeline import analyze

logger = logging.getLogger(__name__)

Listener = Callable[[tuple[ModuleInfo, ...]], None]


class AnalysisService:
    """Owns one project's latest analysis result.

    Each ``refresh()`` runs a full, independent pass on a single worker
    thread.  The result replaces the previous snapshot only once complete.
    """

    def __init__(
        self,
        project_dir: Path,
        *,
        settings: Settings | None = None,
        name: str | None = None,
        analyzer: Callable[..., tuple[ModuleInfo, ...]] = analyze,
    ):
        self.project_dir = project_dir
        self.settings = settings
        self.name = name
        self._analyzer = analyzer
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="depinspector")
        self._lock = threading.Lock()
        self._snapshot: tuple[ModuleInfo, ...] = ()
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> tuple[ModuleInfo, ...]:
        with self._lock:
            return self._snapshot

    def resolved_versions(self) -> dict[str, str]:
        return resolved_versions(self.snapshot)

    def add_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def refresh(self) -> Future[tuple[ModuleInfo, ...]]:
        """Schedule a new pass; the future resolves to the published snapshot."""
        return self._executor.submit(self._run_pass)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> AnalysisService:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _run_pass(self) -> tuple[ModuleInfo, ...]:
        try:
            modules = self._analyzer(
                self.project_dir, settings=self.settings, name=self.name
            )
        except Exception:
            logger.exception("Dependency analysis failed for %s", self.project_dir)
            return self.snapshot

        with self._lock:
            self._snapshot = modules
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(modules)
            except Exception:
                logger.exception("Snapshot listener %r failed", listener)
        return modules
