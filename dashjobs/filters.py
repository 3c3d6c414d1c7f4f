"""Name filters applied to dashboards and jobs."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from .models import FilterPattern


def matches(candidate_name: str, pattern: Optional[FilterPattern]) -> bool:
    """Return True when no pattern is set or the pattern is found in the name."""
    if pattern is None:
        return True
    if isinstance(pattern, re.Pattern):
        return pattern.search(candidate_name) is not None
    return re.search(pattern, candidate_name) is not None


def match_dashboard_filter(dashboard_path: str, pattern: Optional[FilterPattern]) -> bool:
    """Test the dashboard's base file name, extension included."""
    return matches(Path(dashboard_path).name, pattern)


def match_job_filter(job_name: str, pattern: Optional[FilterPattern]) -> bool:
    return matches(job_name, pattern)


__all__ = ["match_dashboard_filter", "match_job_filter", "matches"]
