"""CLI entrypoints for dashjobs commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .errors import DashJobsError
from .logging import configure_logging
from .manager import JobManager, JobManagerOptions, load_jobs
from .models import Filters, JobDescriptor
from .settings import SETTINGS_FILENAME, DashJobsSettings, load_settings

_DEFAULT_PACKAGES = "packages"
_DEFAULT_CONFIG = "config"


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dashjobs",
        description="Collect the jobs referenced by dashboards across a package tree.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--settings",
        default=SETTINGS_FILENAME,
        help=f"Settings file or directory containing {SETTINGS_FILENAME}.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list",
        help="Print the resolved job manifest.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    list_parser.add_argument(
        "packages",
        nargs="*",
        help=f"Package roots to scan (defaults to settings or ./{_DEFAULT_PACKAGES}).",
    )
    list_parser.add_argument(
        "--config-path",
        default=None,
        help=f"Directory holding dashboard_common.json (defaults to ./{_DEFAULT_CONFIG}).",
    )
    list_parser.add_argument(
        "--dashboard-filter",
        default=None,
        help="Regular expression matched against dashboard file names.",
    )
    list_parser.add_argument(
        "--job-filter",
        default=None,
        help="Regular expression matched against job names.",
    )
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the manifest as JSON.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve the job manifest over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="0.0.0.0", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def _build_options(args: argparse.Namespace, settings: DashJobsSettings) -> JobManagerOptions:
    if args.packages:
        packages: List[Path] = [Path(item) for item in args.packages]
    elif settings.packages:
        packages = list(settings.packages)
    else:
        packages = [Path(_DEFAULT_PACKAGES)]

    if args.config_path:
        config_path = Path(args.config_path)
    else:
        config_path = settings.config_path or Path(_DEFAULT_CONFIG)

    filters = Filters.from_options(
        dashboard_filter=args.dashboard_filter or settings.filters.dashboard,
        job_filter=args.job_filter or settings.filters.job,
    )
    return JobManagerOptions(packages_path=packages, config_path=config_path, filters=filters)


def _render_table(jobs: List[JobDescriptor]) -> str:
    if not jobs:
        return "No jobs found"
    lines = []
    for job in jobs:
        config_key = job.config_key
        if isinstance(config_key, list):
            config_key = ",".join(config_key)
        lines.append(f"{job.dashboard_name}\t{job.job_name}\t{config_key or '-'}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for dashjobs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(Path(args.settings))
    except DashJobsError as exc:
        parser.exit(1, f"{exc}\n")

    # Service mode only reports warnings and errors unless --verbose is given.
    configure_logging(
        verbose=bool(args.verbose),
        quiet=args.command == "serve",
        log_file=settings.log_file,
    )

    if args.command == "list":
        try:
            options = _build_options(args, settings)
            jobs = load_jobs(options, JobManager(entry_points=settings.entry_points))
        except DashJobsError as exc:
            parser.exit(1, f"dashjobs list failed: {exc}\nRun with --verbose for more details.\n")
        if args.json:
            print(json.dumps([job.to_dict() for job in jobs], indent=2, default=str))
        else:
            print(_render_table(jobs))
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(Path(args.settings), host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
