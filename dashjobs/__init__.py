"""Aggregate dashboard jobs from package trees into a ready-to-run manifest."""

from .errors import DashJobsError
from .manager import JobManager, JobManagerOptions, get_jobs, load_jobs
from .models import Filters, JobDescriptor, JobImplementation

__all__ = [
    "DashJobsError",
    "Filters",
    "JobDescriptor",
    "JobImplementation",
    "JobManager",
    "JobManagerOptions",
    "get_jobs",
    "load_jobs",
]
