"""Job implementation registry and loading utilities."""

from __future__ import annotations

import hashlib
import importlib.util
import sys
from importlib import metadata
from pathlib import Path
from types import ModuleType
from typing import Dict, Iterable, List, Sequence, Union

from .discovery import resolve_candidates
from .errors import JobLoadError
from .logging import get_logger
from .models import JobImplementation

_ENTRY_POINT_GROUP = "dashjobs.jobs"
JOB_ITEM_TYPE = "jobs"
JOB_EXTENSION = ".py"

JobCandidate = Union[str, JobImplementation]


class JobRegistry:
    """Maps job names to implementations discovered in the package tree.

    File candidates come from the package scanner. Jobs may also be
    registered in-process or through the ``dashjobs.jobs`` entry-point group;
    those are consulted after the files.
    """

    def __init__(self, job_paths: Sequence[str] = ()) -> None:
        self.job_paths: List[str] = list(job_paths)
        self._registered: Dict[str, JobImplementation] = {}
        self._loaded: Dict[str, JobImplementation] = {}
        self.logger = get_logger("registry")

    def register(self, name: str, export: object) -> JobImplementation:
        """Register a job export under ``name``; later registrations replace earlier ones."""
        implementation = JobImplementation.from_export(export)
        self._registered[name] = implementation
        return implementation

    def load_entry_points(self) -> int:
        """Register every job published under the ``dashjobs.jobs`` group."""
        count = 0
        for entry in _iter_entry_points():
            try:
                loaded = entry.load()
            except Exception as exc:
                raise JobLoadError(f"Failed to load job entry point '{entry.name}': {exc}") from exc
            self.register(entry.name, loaded)
            count += 1
        return count

    def candidates(self, name: str) -> List[JobCandidate]:
        found: List[JobCandidate] = list(
            resolve_candidates(self.job_paths, name, JOB_ITEM_TYPE, JOB_EXTENSION)
        )
        if name in self._registered:
            found.append(self._registered[name])
        return found

    def load(self, candidate: JobCandidate) -> JobImplementation:
        """Return the normalized implementation behind a candidate."""
        if isinstance(candidate, JobImplementation):
            return candidate
        cached = self._loaded.get(candidate)
        if cached is not None:
            return cached
        module = _import_job_file(Path(candidate))
        implementation = JobImplementation.from_export(getattr(module, "job", module))
        self._loaded[candidate] = implementation
        self.logger.debug("Loaded job implementation from %s", candidate)
        return implementation


def _module_name_for(path: Path) -> str:
    digest = hashlib.sha1(path.as_posix().encode("utf-8")).hexdigest()[:12]
    return f"_dashjobs_job_{path.stem}_{digest}"


def _import_job_file(path: Path) -> ModuleType:
    module_name = _module_name_for(path)
    existing = sys.modules.get(module_name)
    if existing is not None:
        return existing

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise JobLoadError(f"Cannot import job file {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise JobLoadError(f"Failed to import job file {path}: {exc}") from exc
    return module


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


__all__ = ["JOB_EXTENSION", "JOB_ITEM_TYPE", "JobCandidate", "JobRegistry"]
