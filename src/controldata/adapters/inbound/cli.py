"""Command-line adapter for controldata.

Prints the control data rows of a cluster in the same ``label: value``
layout as the server's own inspection tool, or as JSON.

Usage:
    controldata /var/lib/postgresql/data
    controldata -D /var/lib/postgresql/data --json
    PGDATA=/var/lib/postgresql/data python -m controldata
    controldata --serve
"""

from __future__ import annotations

import argparse
import json
import locale
import os
import sys
from typing import Sequence

from controldata import __version__
from controldata.application import ControlDataView
from controldata.domain.exceptions import ControlDataError
from controldata.domain.services import FIELD_LABELS
from controldata.domain.value_objects import FieldEntry
from controldata.infrastructure.config import Config, get_config
from controldata.infrastructure.container import build_container
from controldata.infrastructure.locale import setup_time_locale
from controldata.infrastructure.logging import get_logger, setup_logging

LABEL_WIDTH = max(len(label) for label in FIELD_LABELS) + 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="controldata",
        description="Display control information of a database cluster",
    )
    parser.add_argument("datadir", nargs="?", help="Data directory")
    parser.add_argument(
        "-D", "--pgdata", dest="pgdata", help="Data directory (overrides DATADIR)"
    )
    parser.add_argument("--json", action="store_true", help="Print rows as JSON")
    parser.add_argument(
        "--serve", action="store_true", help="Run the REST API instead of printing"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: configured)",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_data_dir(args: argparse.Namespace, config: Config) -> str:
    """Pick the data directory: -D, then DATADIR, then $PGDATA, then config."""
    return (
        args.pgdata
        or args.datadir
        or os.environ.get("PGDATA")
        or str(config.control_file.data_dir)
    )


def render_text(entries: Sequence[FieldEntry]) -> str:
    return "\n".join(f"{entry.label + ':':<{LABEL_WIDTH}}{entry.value}" for entry in entries)


def render_json(entries: Sequence[FieldEntry]) -> str:
    return json.dumps(
        [{"name": entry.label, "setting": entry.value} for entry in entries], indent=2
    )


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the command line tool.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        Process exit code: 0 on success, 1 on a control data error
    """
    args = build_parser().parse_args(argv)
    config = get_config()

    setup_logging(
        level=args.log_level or config.observability.log_level,
        log_format=config.observability.log_format,
    )
    logger = get_logger(__name__)

    try:
        setup_time_locale(config.formatting.time_locale)
    except locale.Error as e:
        logger.warning(
            "time_locale_unavailable", locale=config.formatting.time_locale, error=str(e)
        )

    data_dir = resolve_data_dir(args, config)

    if args.serve:
        return _serve(config, data_dir)

    view = build_container(config).resolve(ControlDataView)
    try:
        entries = view.rows(data_dir)
    except ControlDataError as e:
        print(f"controldata: {e}", file=sys.stderr)
        return 1

    print(render_json(entries) if args.json else render_text(entries))
    return 0


def _serve(config: Config, data_dir: str) -> int:
    from controldata.adapters.inbound.rest_api import run_server
    from controldata.infrastructure.metrics import setup_metrics
    from controldata.infrastructure.tracing import setup_tracing

    setup_tracing(
        service_name=config.observability.otel_service_name,
        otlp_endpoint=config.observability.otel_endpoint,
    )
    metrics = setup_metrics(port=config.server.metrics_port)
    view = build_container(config, metrics).resolve(ControlDataView)

    get_logger(__name__).info(
        "server_starting", host=config.server.host, port=config.server.port, data_dir=data_dir
    )
    run_server(view, data_dir, host=config.server.host, port=config.server.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
