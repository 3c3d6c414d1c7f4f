"""Settings loading for dashjobs (.dashjobs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import SettingsError

SETTINGS_FILENAME = ".dashjobs.yml"


@dataclass
class FilterSettings:
    """Default dashboard and job filters."""

    dashboard: Optional[str] = None
    job: Optional[str] = None


@dataclass
class DashJobsSettings:
    """Represents the settings defined in .dashjobs.yml."""

    root: Path
    packages: List[Path] = field(default_factory=list)
    config_path: Optional[Path] = None
    filters: FilterSettings = field(default_factory=FilterSettings)
    log_file: Optional[Path] = None
    entry_points: bool = False


def load_settings(settings_path: Path) -> DashJobsSettings:
    """Load settings from disk; a missing file yields defaults."""
    settings_file = _resolve_settings_path(settings_path)
    root = settings_file.parent.resolve()

    if not settings_file.exists():
        return DashJobsSettings(root=root)

    data = _read_settings(settings_file)
    if not isinstance(data, dict):
        raise SettingsError(f"{settings_file.name} must contain a mapping at the root")

    packages = [root / item for item in _as_str_list(data.get("packages"))]

    config_path_str = _as_str(data.get("config_path"))
    config_path = root / config_path_str if config_path_str else None

    filters = FilterSettings()
    filter_data = _as_dict(data.get("filters"))
    if filter_data:
        filters.dashboard = _as_str(filter_data.get("dashboard"))
        filters.job = _as_str(filter_data.get("job"))

    log_file_str = _as_str(data.get("log_file"))
    log_file = root / log_file_str if log_file_str else None

    return DashJobsSettings(
        root=root,
        packages=packages,
        config_path=config_path,
        filters=filters,
        log_file=log_file,
        entry_points=_as_bool(data.get("entry_points")) or False,
    )


def _resolve_settings_path(settings_path: Path) -> Path:
    settings_path = settings_path.expanduser()
    if settings_path.is_dir():
        return (settings_path / SETTINGS_FILENAME).resolve()
    return settings_path.resolve()


def _read_settings(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["DashJobsSettings", "FilterSettings", "SETTINGS_FILENAME", "load_settings"]
