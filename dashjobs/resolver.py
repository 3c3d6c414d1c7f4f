"""Resolving a dashboard's widgets into job descriptors."""

from __future__ import annotations

from typing import List

from .errors import UnresolvedJobError
from .filters import match_job_filter
from .logging import get_logger
from .models import DashboardDefinition, Filters, JobDescriptor
from .registry import JobRegistry

_LOGGER = get_logger("resolver")

_UNRESOLVED_HINT = """
ERROR RESOLVING JOB
No job file found for "%s" in %s
Have you pulled all the packages dependencies? (They are git submodules.)

$ git submodule init
$ git submodule update
"""


def resolve_dashboard_jobs(
    registry: JobRegistry,
    dashboard: DashboardDefinition,
    filters: Filters | None = None,
) -> List[JobDescriptor]:
    """Return descriptors for the dashboard's job widgets, in widget order.

    Widgets without a ``job`` only display static content and are skipped.
    """
    filters = filters or Filters()
    jobs: List[JobDescriptor] = []

    for widget in dashboard.widgets:
        job_name = widget.get("job") if isinstance(widget, dict) else None
        if not job_name:
            continue
        if not match_job_filter(job_name, filters.job_filter):
            continue

        candidates = registry.candidates(job_name)
        if not candidates:
            _LOGGER.error(_UNRESOLVED_HINT, job_name, dashboard.path)
            raise UnresolvedJobError(
                f'No job file found for "{job_name}" in {dashboard.path}'
            )

        implementation = registry.load(candidates[0])
        jobs.append(
            JobDescriptor(
                config_key=widget.get("config"),
                dashboard_name=dashboard.name,
                job_name=job_name,
                widget_item=widget,
                on_run=implementation.on_run,
                on_init=implementation.on_init,
            )
        )

    return jobs


__all__ = ["resolve_dashboard_jobs"]
