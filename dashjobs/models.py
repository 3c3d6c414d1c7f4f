"""Core data models shared across dashjobs components."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .errors import DashboardStructureError, InvalidFilterError

ConfigKey = Union[str, List[str], None]
FilterPattern = Union[str, re.Pattern[str]]
JobCallable = Callable[..., Any]


def noop(*_args: Any, **_kwargs: Any) -> None:
    """Default behaviour for jobs that export no run or init callable."""
    return None


@dataclass
class Filters:
    """Optional patterns restricting which dashboards and jobs are processed."""

    dashboard_filter: Optional[FilterPattern] = None
    job_filter: Optional[FilterPattern] = None

    def __post_init__(self) -> None:
        self.dashboard_filter = _compile_filter("dashboard", self.dashboard_filter)
        self.job_filter = _compile_filter("job", self.job_filter)

    @classmethod
    def from_options(
        cls,
        dashboard_filter: Optional[FilterPattern] = None,
        job_filter: Optional[FilterPattern] = None,
    ) -> "Filters":
        """Build filters from loose option values such as CLI flags or query params."""
        return cls(dashboard_filter=dashboard_filter, job_filter=job_filter)


def _compile_filter(kind: str, pattern: Optional[FilterPattern]) -> Optional[re.Pattern[str]]:
    if pattern is None or pattern == "":
        return None
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(str(pattern))
    except re.error as exc:
        raise InvalidFilterError(f"Invalid {kind} filter {pattern!r}: {exc}") from exc


@dataclass
class DashboardDefinition:
    """A parsed dashboard file and the path it was read from."""

    path: str
    data: Dict[str, Any]

    @property
    def name(self) -> str:
        """Base file name with the .json extension stripped."""
        base = Path(self.path).name
        return base[: -len(".json")] if base.endswith(".json") else base

    @property
    def layout(self) -> Optional[Mapping[str, Any]]:
        layout = self.data.get("layout")
        return layout if isinstance(layout, Mapping) else None

    @property
    def widgets(self) -> List[Dict[str, Any]]:
        layout = self.layout
        if layout is None:
            raise DashboardStructureError(f"No layout field found in {self.path}")
        widgets = layout.get("widgets")
        if not isinstance(widgets, list):
            raise DashboardStructureError(f"No widgets field found in {self.path}")
        return widgets

    @property
    def config(self) -> Mapping[str, Any]:
        config = self.data.get("config")
        return config if isinstance(config, Mapping) else {}


@dataclass(frozen=True)
class JobImplementation:
    """Normalized job export with its run and init behaviour."""

    on_run: JobCallable
    on_init: Optional[JobCallable] = None

    @classmethod
    def run_only(cls, fn: JobCallable) -> "JobImplementation":
        return cls(on_run=fn, on_init=None)

    @classmethod
    def structured(
        cls,
        on_run: Optional[JobCallable] = None,
        on_init: Optional[JobCallable] = None,
    ) -> "JobImplementation":
        return cls(on_run=on_run or noop, on_init=on_init or noop)

    @classmethod
    def from_export(cls, export: object) -> "JobImplementation":
        """Normalize a bare callable, an object exposing hooks, or anything else."""
        if isinstance(export, JobImplementation):
            return export
        if isinstance(export, Mapping):
            return cls.structured(
                _as_callable(export.get("on_run")),
                _as_callable(export.get("on_init")),
            )
        if callable(export) and not isinstance(export, type):
            return cls.run_only(export)
        # Widgets may intentionally carry no behaviour, so unknown shapes are accepted.
        return cls.structured(
            _as_callable(getattr(export, "on_run", None)),
            _as_callable(getattr(export, "on_init", None)),
        )


def _as_callable(value: object) -> Optional[JobCallable]:
    return value if callable(value) else None


@dataclass
class JobDescriptor:
    """A resolved job ready to be wired into a scheduler."""

    config_key: ConfigKey
    dashboard_name: str
    job_name: str
    widget_item: Dict[str, Any]
    on_run: JobCallable
    on_init: Optional[JobCallable] = None
    config: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-safe summary of the descriptor."""
        return {
            "dashboard_name": self.dashboard_name,
            "job_name": self.job_name,
            "config_key": self.config_key,
            "config": dict(self.config or {}),
            "widget_item": self.widget_item,
            "on_run": _callable_name(self.on_run),
            "on_init": _callable_name(self.on_init),
        }


def _callable_name(fn: Optional[JobCallable]) -> Optional[str]:
    if fn is None:
        return None
    return getattr(fn, "__qualname__", None) or type(fn).__name__


def as_path_list(value: Union[str, Path, Sequence[Union[str, Path]]]) -> List[Path]:
    """Accept one packages path or several and return them as Path objects."""
    if isinstance(value, (str, Path)):
        return [Path(value)]
    return [Path(item) for item in value]
