"""Inbound adapters for controldata.

Inbound adapters handle incoming requests and convert them to
calls on the control data view.

Exports:
    Tuple store:
        - TupleStore: In-memory materialized result sink
    REST API:
        - create_app: Create a FastAPI application
        - run_server: Run the REST API server
        - ControlDataResponse, SettingRow, HealthResponse: Response models
    CLI:
        - main: Command-line entry point
"""

from controldata.adapters.inbound.cli import main
from controldata.adapters.inbound.rest_api import (
    ControlDataResponse,
    HealthResponse,
    SettingRow,
    create_app,
    run_server,
)
from controldata.adapters.inbound.tuple_store import TupleStore

__all__ = [
    # CLI
    "main",
    # REST API
    "create_app",
    "run_server",
    "ControlDataResponse",
    "HealthResponse",
    "SettingRow",
    # Tuple store
    "TupleStore",
]
