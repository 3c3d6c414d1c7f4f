"""Exception types raised while building the job manifest."""

from __future__ import annotations


class DashJobsError(RuntimeError):
    """Base class for every failure surfaced by dashjobs."""


class ConfigParseError(DashJobsError):
    """Raised when dashboard_common.json exists but cannot be used."""


class SettingsError(DashJobsError):
    """Raised when the .dashjobs.yml settings file cannot be parsed."""


class DiscoveryError(DashJobsError):
    """Raised when scanning the package tree fails."""


class MalformedDashboardError(DashJobsError):
    """Raised when a dashboard file is not a JSON object."""


class DashboardStructureError(DashJobsError):
    """Raised when a dashboard lacks its layout or widgets."""


class UnresolvedJobError(DashJobsError):
    """Raised when a job reference has no implementation to load."""


class JobLoadError(DashJobsError):
    """Raised when a job implementation fails to import."""


class InvalidFilterError(DashJobsError, ValueError):
    """Raised when a dashboard or job filter is not a valid pattern."""


__all__ = [
    "ConfigParseError",
    "DashJobsError",
    "DashboardStructureError",
    "DiscoveryError",
    "InvalidFilterError",
    "JobLoadError",
    "MalformedDashboardError",
    "SettingsError",
    "UnresolvedJobError",
]
