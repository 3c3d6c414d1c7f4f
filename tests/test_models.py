"""Tests for dashjobs.models."""

from __future__ import annotations

from types import SimpleNamespace

from dashjobs.models import DashboardDefinition, JobDescriptor, JobImplementation, noop


def _run(config, dependencies, job_callback):  # pragma: no cover - never invoked
    job_callback(None, {})


def _init(config, dependencies):  # pragma: no cover - never invoked
    return None


def test_from_export_bare_callable_is_run_only() -> None:
    implementation = JobImplementation.from_export(_run)

    assert implementation.on_run is _run
    assert implementation.on_init is None


def test_from_export_structured_object_keeps_both_hooks() -> None:
    implementation = JobImplementation.from_export(SimpleNamespace(on_run=_run, on_init=_init))

    assert implementation.on_run is _run
    assert implementation.on_init is _init


def test_from_export_mapping_defaults_missing_hooks() -> None:
    implementation = JobImplementation.from_export({"on_init": _init})

    assert implementation.on_run is noop
    assert implementation.on_init is _init


def test_from_export_unknown_shape_defaults_to_noop() -> None:
    implementation = JobImplementation.from_export(42)

    assert implementation.on_run is noop
    assert implementation.on_init is noop


def test_from_export_ignores_non_callable_hooks() -> None:
    implementation = JobImplementation.from_export(SimpleNamespace(on_run="nope"))

    assert implementation.on_run is noop


def test_dashboard_name_strips_json_extension() -> None:
    assert DashboardDefinition(path="/p/x/dashboards/sales.json", data={}).name == "sales"
    assert DashboardDefinition(path="/p/x/dashboards/sales.yaml", data={}).name == "sales.yaml"


def test_job_descriptor_to_dict_names_callables() -> None:
    descriptor = JobDescriptor(
        config_key=["a", "b"],
        dashboard_name="main",
        job_name="weather",
        widget_item={"job": "weather", "row": 1},
        on_run=_run,
        config={"city": "Porto"},
    )

    assert descriptor.to_dict() == {
        "dashboard_name": "main",
        "job_name": "weather",
        "config_key": ["a", "b"],
        "config": {"city": "Porto"},
        "widget_item": {"job": "weather", "row": 1},
        "on_run": "_run",
        "on_init": None,
    }
