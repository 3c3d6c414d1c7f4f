"""FastAPI application serving the dashjobs manifest."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..errors import DashJobsError
from ..manager import JobManager, JobManagerOptions
from ..models import Filters
from ..settings import load_settings


class JobSummary(BaseModel):
    dashboard_name: str
    job_name: str
    config_key: Optional[Union[str, List[str]]] = None
    config: Dict[str, Any] = {}
    widget_item: Dict[str, Any] = {}
    on_run: Optional[str] = None
    on_init: Optional[str] = None


class JobsResponse(BaseModel):
    jobs: List[JobSummary]


class HealthResponse(BaseModel):
    status: str


def create_app(
    packages_path: Union[str, Path, List[Union[str, Path]]],
    config_path: Optional[Union[str, Path]] = None,
    manager_factory: Callable[[], JobManager] = JobManager,
) -> FastAPI:
    """Create the FastAPI application serving jobs for the given package roots."""

    app = FastAPI(title="DashJobs Service", version="1.0.0")

    async def get_manager() -> JobManager:
        # New manager per request; runs share no state.
        return manager_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/jobs", response_model=JobsResponse)
    async def list_jobs(
        dashboard_filter: Optional[str] = None,
        job_filter: Optional[str] = None,
        manager: JobManager = Depends(get_manager),
    ) -> JobsResponse:
        options = JobManagerOptions(
            packages_path=packages_path,
            config_path=config_path,
            filters=Filters.from_options(dashboard_filter, job_filter),
        )
        jobs = await manager.get_jobs(options)
        return JobsResponse(jobs=[JobSummary(**job.to_dict()) for job in jobs])

    @app.exception_handler(DashJobsError)
    async def dashjobs_error_handler(_: Any, exc: DashJobsError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    settings_path: Path = Path("."), host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    settings = load_settings(settings_path)
    app = create_app(
        settings.packages or [settings.root / "packages"],
        settings.config_path,
        manager_factory=lambda: JobManager(entry_points=settings.entry_points),
    )
    uvicorn.run(app, host=host, port=port)
