"""Aggregation pipeline producing the job manifest for all dashboards."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from functools import partial, reduce
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Sequence

from .config import load_global_config, resolve_job_config
from .dashboard import read_dashboard
from .discovery import PackageScanner, PackagesPath
from .filters import match_dashboard_filter
from .logging import get_logger
from .models import Filters, JobDescriptor
from .registry import JOB_EXTENSION, JOB_ITEM_TYPE, JobRegistry
from .resolver import resolve_dashboard_jobs

DASHBOARD_ITEM_TYPE = "dashboards"
DASHBOARD_EXTENSION = ".json"


@dataclass
class JobManagerOptions:
    """Inputs for a single aggregation run."""

    packages_path: PackagesPath
    config_path: Optional[Path | str] = None
    filters: Optional[Filters] = None


def _default_registry_factory(job_paths: Sequence[str]) -> JobRegistry:
    return JobRegistry(job_paths)


class JobManager:
    """Collects the jobs of every dashboard found in the package tree."""

    def __init__(
        self,
        scanner: PackageScanner | None = None,
        registry_factory: Callable[[Sequence[str]], JobRegistry] = _default_registry_factory,
        *,
        entry_points: bool = False,
    ) -> None:
        self.scanner = scanner or PackageScanner()
        self.registry_factory = registry_factory
        self.entry_points = entry_points
        self.logger = get_logger("manager")

    async def get_jobs(self, options: JobManagerOptions) -> List[JobDescriptor]:
        """Return the jobs for all available dashboards in all the packages.

        Any failure while loading config, scanning, reading a dashboard or
        resolving its jobs aborts the whole run; no partial manifest is
        returned.
        """
        filters = options.filters or Filters()
        loop = asyncio.get_running_loop()

        # The general config is optional, but when present it must be valid.
        global_config = await loop.run_in_executor(
            None, load_global_config, options.config_path
        )

        dashboard_files = await self.scanner.get_async(
            options.packages_path, DASHBOARD_ITEM_TYPE, DASHBOARD_EXTENSION
        )
        job_files = await self.scanner.get_async(
            options.packages_path, JOB_ITEM_TYPE, JOB_EXTENSION
        )
        self.logger.info(
            "Found %d dashboards and %d job files", len(dashboard_files), len(job_files)
        )

        registry = self.registry_factory(job_files)
        if self.entry_points:
            registry.load_entry_points()

        fold = partial(self._collect_dashboard, registry, global_config, filters)
        # Dashboard reads and job imports stay off the event loop thread.
        jobs: List[JobDescriptor] = await loop.run_in_executor(
            None, reduce, fold, dashboard_files, []
        )
        self.logger.info("Resolved %d jobs", len(jobs))
        return jobs

    def _collect_dashboard(
        self,
        registry: JobRegistry,
        global_config: Mapping[str, Any],
        filters: Filters,
        collected: List[JobDescriptor],
        dashboard_path: str,
    ) -> List[JobDescriptor]:
        if not match_dashboard_filter(dashboard_path, filters.dashboard_filter):
            self.logger.debug("Skipping dashboard %s (filtered)", dashboard_path)
            return collected

        dashboard = read_dashboard(dashboard_path)
        dashboard_jobs = resolve_dashboard_jobs(registry, dashboard, filters)
        for job in dashboard_jobs:
            job.config = resolve_job_config(job.config_key, global_config, dashboard.config)

        self.logger.debug("Dashboard %s contributed %d jobs", dashboard.name, len(dashboard_jobs))
        return collected + dashboard_jobs


async def get_jobs(options: JobManagerOptions) -> List[JobDescriptor]:
    """Aggregate jobs with the default scanner and registry."""
    return await JobManager().get_jobs(options)


def load_jobs(options: JobManagerOptions, manager: JobManager | None = None) -> List[JobDescriptor]:
    """Blocking wrapper around :meth:`JobManager.get_jobs`."""
    return asyncio.run((manager or JobManager()).get_jobs(options))


__all__ = [
    "DASHBOARD_EXTENSION",
    "DASHBOARD_ITEM_TYPE",
    "JobManager",
    "JobManagerOptions",
    "get_jobs",
    "load_jobs",
]
