"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dashjobs.cli import _build_parser, main
from tests._fixtures.package_builder import RUN_ONLY_JOB, STRUCTURED_JOB, PackageBuilder


def _tree(builder: PackageBuilder) -> None:
    builder.job("default", "weather", STRUCTURED_JOB)
    builder.job("default", "clock", RUN_ONLY_JOB)
    builder.dashboard(
        "default",
        "main",
        {
            "layout": {"widgets": [{"job": "weather", "config": "weather"}, {"job": "clock"}]},
            "config": {"weather": {"city": "Porto"}},
        },
    )
    builder.global_config({"config": {"weather": {"units": "metric"}}})


def test_cli_accepts_verbose_before_command() -> None:
    args = _build_parser().parse_args(["--verbose", "list"])
    assert args.verbose is True
    assert args.command == "list"


def test_cli_accepts_verbose_after_command() -> None:
    args = _build_parser().parse_args(["list", "--verbose"])
    assert args.verbose is True


def test_cli_accepts_filters_and_packages() -> None:
    args = _build_parser().parse_args(
        ["list", "a", "b", "--dashboard-filter", "main", "--job-filter", "^w", "--json"]
    )
    assert args.packages == ["a", "b"]
    assert args.dashboard_filter == "main"
    assert args.job_filter == "^w"
    assert args.json is True


def test_cli_list_prints_json_manifest(
    package_builder: PackageBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _tree(package_builder)

    main(
        [
            "--settings",
            str(tmp_path),
            "list",
            str(package_builder.root),
            "--config-path",
            str(package_builder.config_dir),
            "--json",
        ]
    )

    payload = json.loads(capsys.readouterr().out)
    assert [item["job_name"] for item in payload] == ["weather", "clock"]
    assert payload[0]["config"] == {"units": "metric", "city": "Porto"}
    assert payload[0]["on_init"] == "on_init"
    assert payload[1]["on_init"] is None


def test_cli_list_uses_settings_defaults(
    package_builder: PackageBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _tree(package_builder)
    (tmp_path / ".dashjobs.yml").write_text(
        "packages: packages\nconfig_path: config\nfilters:\n  job: clock\n",
        encoding="utf-8",
    )

    main(["--settings", str(tmp_path), "list"])

    out = capsys.readouterr().out
    assert out.strip() == "main\tclock\t-"


def test_cli_list_exits_on_pipeline_error(
    package_builder: PackageBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _tree(package_builder)
    package_builder.global_config("{ broken")

    with pytest.raises(SystemExit) as excinfo:
        main(
            [
                "--settings",
                str(tmp_path),
                "list",
                str(package_builder.root),
                "--config-path",
                str(package_builder.config_dir),
            ]
        )

    assert excinfo.value.code == 1
    assert "dashjobs list failed" in capsys.readouterr().err


def test_cli_list_exits_on_invalid_filter(
    package_builder: PackageBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--settings", str(tmp_path), "list", str(package_builder.root), "--job-filter", "("])

    assert excinfo.value.code == 1
    assert "Invalid job filter" in capsys.readouterr().err
