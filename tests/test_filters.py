"""Tests for dashjobs.filters."""

from __future__ import annotations

import re

import pytest

from dashjobs.errors import InvalidFilterError
from dashjobs.filters import match_dashboard_filter, match_job_filter, matches
from dashjobs.models import Filters


def test_missing_pattern_matches_everything() -> None:
    assert matches("anything", None)
    assert match_dashboard_filter("/p/default/dashboards/main.json", None)
    assert match_job_filter("weather", None)


def test_pattern_uses_unanchored_regex_search() -> None:
    assert matches("weather-forecast", "cast")
    assert matches("weather-forecast", re.compile(r"^weather"))
    assert not matches("weather-forecast", r"^cast")


def test_dashboard_filter_tests_base_name_with_extension() -> None:
    path = "/srv/packages/default/dashboards/sales.json"

    assert match_dashboard_filter(path, r"sales\.json$")
    assert not match_dashboard_filter(path, "default")


def test_job_filter_tests_job_name_verbatim() -> None:
    assert match_job_filter("mypackage#weather", "^mypackage#")
    assert not match_job_filter("weather", "^mypackage#")


def test_filters_from_options_compiles_patterns() -> None:
    filters = Filters.from_options(dashboard_filter="^main", job_filter=None)

    assert isinstance(filters.dashboard_filter, re.Pattern)
    assert filters.job_filter is None


def test_filters_from_options_treats_empty_string_as_unset() -> None:
    filters = Filters.from_options(dashboard_filter="", job_filter="")

    assert filters.dashboard_filter is None
    assert filters.job_filter is None


def test_filters_from_options_rejects_invalid_regex() -> None:
    with pytest.raises(InvalidFilterError) as excinfo:
        Filters.from_options(job_filter="(unclosed")

    assert "job filter" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)


def test_filters_constructed_directly_compile_patterns() -> None:
    filters = Filters(dashboard_filter=r"^main\.json$")

    assert isinstance(filters.dashboard_filter, re.Pattern)
    assert match_dashboard_filter("/p/default/dashboards/main.json", filters.dashboard_filter)


def test_filters_constructed_directly_reject_invalid_regex() -> None:
    with pytest.raises(InvalidFilterError) as excinfo:
        Filters(dashboard_filter="[unclosed")

    assert "dashboard filter" in str(excinfo.value)
