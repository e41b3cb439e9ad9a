"""REST API adapter for controldata.

This module provides a FastAPI-based REST API that exposes a cluster's
control file as (name, setting) rows.

Endpoints:
    GET /health - Health check
    GET /controldata - All 30 rows for a data directory
    GET /controldata/{name} - A single row by label
    GET /metrics - Prometheus exposition

Usage:
    from controldata.adapters.inbound.rest_api import create_app
    from controldata.application import ControlDataView

    view = ControlDataView.create()
    app = create_app(view, default_data_dir="/var/lib/postgresql/data")
    # Run with uvicorn: uvicorn app:app --host 0.0.0.0 --port 8000

References:
    - FastAPI documentation: https://fastapi.tiangolo.com/
"""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field

from controldata import __version__
from controldata.adapters.inbound.tuple_store import TupleStore
from controldata.application import ControlDataView
from controldata.domain.exceptions import (
    ControlDataError,
    ControlFileIOError,
    IntegrityError,
    TimestampOutOfRangeError,
)
from controldata.infrastructure.metrics import MetricsRegistry, get_metrics


class SettingRow(BaseModel):
    """One control data row."""

    name: str = Field(..., description="Field label")
    setting: str = Field(..., description="Rendered value")


class ControlDataResponse(BaseModel):
    """Response model for the full row set."""

    data_dir: str = Field(..., description="Data directory that was read")
    count: int = Field(..., description="Number of rows")
    rows: list[SettingRow] = Field(default_factory=list, description="Rows in canonical order")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")


def _error_status(error: ControlDataError) -> int:
    """Map a control data error to an HTTP status code."""
    if isinstance(error, ControlFileIOError):
        if isinstance(error.__cause__, (FileNotFoundError, NotADirectoryError)):
            return 404
        return 500
    if isinstance(error, (IntegrityError, TimestampOutOfRangeError)):
        return 422
    return 500


def create_app(
    view: ControlDataView,
    default_data_dir: str | Path,
    metrics: MetricsRegistry | None = None,
) -> FastAPI:
    """Create a FastAPI application for controldata.

    Args:
        view: The control data view to serve.
        default_data_dir: Data directory used when a request names none.
        metrics: Metrics registry exposed on /metrics (default: global).

    Returns:
        A configured FastAPI application.
    """
    metrics = metrics or get_metrics()

    app = FastAPI(
        title="Control Data API",
        description="Read-only view of a cluster's pg_control file",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    def _materialize(data_dir: str | None) -> tuple[str, TupleStore]:
        target = data_dir or str(default_data_dir)
        store = TupleStore()
        try:
            view.materialize(target, store)
        except ControlDataError as e:
            raise HTTPException(status_code=_error_status(e), detail=str(e)) from e
        return target, store

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    @app.get("/controldata", response_model=ControlDataResponse, tags=["Control Data"])
    def get_control_data(
        data_dir: str | None = Query(None, description="Data directory (default: configured)"),
    ) -> ControlDataResponse:
        """Return every control data row, in canonical order."""
        target, store = _materialize(data_dir)
        return ControlDataResponse(
            data_dir=target,
            count=len(store),
            rows=[SettingRow(**row) for row in store.as_dicts()],
        )

    @app.get("/controldata/{name:path}", response_model=SettingRow, tags=["Control Data"])
    def get_control_data_row(
        name: str,
        data_dir: str | None = Query(None, description="Data directory (default: configured)"),
    ) -> SettingRow:
        """Return a single row by its label."""
        _, store = _materialize(data_dir)
        for label, setting in store:
            if label == name:
                return SettingRow(name=label, setting=setting)
        raise HTTPException(status_code=404, detail=f"Unknown control data field: {name}")

    @app.get("/metrics", response_class=PlainTextResponse, tags=["System"])
    async def get_prometheus_metrics() -> PlainTextResponse:
        """Prometheus exposition of controldata metrics."""
        return PlainTextResponse(
            generate_latest(metrics.registry), media_type=CONTENT_TYPE_LATEST
        )

    return app


def run_server(
    view: ControlDataView,
    default_data_dir: str | Path,
    host: str = "0.0.0.0",
    port: int = 8000,
) -> None:
    """Run the REST API server.

    Args:
        view: The control data view.
        default_data_dir: Data directory used when a request names none.
        host: Host to bind to.
        port: Port to bind to.
    """
    import uvicorn

    app = create_app(view, default_data_dir)
    uvicorn.run(app, host=host, port=port)
