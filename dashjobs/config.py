"""Global dashboard configuration loading and per-job config merging."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigParseError
from .logging import get_logger
from .models import ConfigKey

GLOBAL_CONFIG_FILENAME = "dashboard_common.json"

_LOGGER = get_logger("config")


def merge_config(*layers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Shallow-merge layers left to right; the last layer wins on shared keys."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        if isinstance(layer, Mapping):
            merged.update(layer)
    return merged


def resolve_job_config(
    config_key: ConfigKey,
    global_config: Mapping[str, Any],
    dashboard_config: Mapping[str, Any],
) -> Dict[str, Any]:
    """Resolve the config for a widget's job.

    Dashboard-local values override global ones for the same key. When the
    widget lists several keys, each is resolved on its own and the results are
    merged in order, so later keys override earlier ones.
    """
    if isinstance(config_key, list):
        resolved = [_resolve_key(key, global_config, dashboard_config) for key in config_key]
        return merge_config(*resolved)
    return _resolve_key(config_key, global_config, dashboard_config)


def _resolve_key(
    key: object,
    global_config: Mapping[str, Any],
    dashboard_config: Mapping[str, Any],
) -> Dict[str, Any]:
    if not isinstance(key, str):
        return {}
    return merge_config(global_config.get(key), dashboard_config.get(key))


def global_config_path(config_path: Path | str) -> Path:
    return Path(config_path).expanduser() / GLOBAL_CONFIG_FILENAME


def load_global_config(config_path: Path | str | None) -> Dict[str, Any]:
    """Load the optional dashboard_common.json found under ``config_path``.

    A missing file yields an empty mapping. A file that exists must be a JSON
    object with a ``config`` object, otherwise ``ConfigParseError`` is raised.
    """
    if config_path is None:
        return {}

    path = global_config_path(config_path)
    if not path.exists():
        _LOGGER.debug("No global config at %s; using empty config", path)
        return {}

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigParseError(f"ERROR reading general config file {path}: {exc}") from exc

    config = payload.get("config") if isinstance(payload, dict) else None
    if not isinstance(config, dict):
        _LOGGER.error("invalid format. config property not found in %s", path)
        raise ConfigParseError(f"ERROR reading general config file {path}: config property not found")

    return config


__all__ = [
    "GLOBAL_CONFIG_FILENAME",
    "global_config_path",
    "load_global_config",
    "merge_config",
    "resolve_job_config",
]
