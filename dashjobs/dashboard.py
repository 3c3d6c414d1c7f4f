"""Reading dashboard definition files."""

from __future__ import annotations

import json
from pathlib import Path

from .errors import MalformedDashboardError
from .logging import get_logger
from .models import DashboardDefinition

_LOGGER = get_logger("dashboard")


def read_dashboard(path: str | Path) -> DashboardDefinition:
    """Parse a dashboard file.

    Missing ``layout`` or ``layout.widgets`` is logged but not raised here;
    the definition is returned as parsed and the failure surfaces once the
    widgets are accessed.
    """
    dashboard_path = str(path)
    try:
        data = json.loads(Path(dashboard_path).read_text(encoding="utf-8"))
    except ValueError as exc:
        raise MalformedDashboardError(f"Invalid JSON in dashboard {dashboard_path}: {exc}") from exc
    except OSError as exc:
        raise MalformedDashboardError(f"Unable to read dashboard {dashboard_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedDashboardError(f"Dashboard {dashboard_path} must contain a JSON object")

    dashboard = DashboardDefinition(path=dashboard_path, data=data)
    if dashboard.layout is None:
        _LOGGER.error("No layout field found in %s", dashboard_path)
    elif not isinstance(dashboard.layout.get("widgets"), list):
        _LOGGER.error("No widgets field found in %s", dashboard_path)

    return dashboard


__all__ = ["read_dashboard"]
