"""Infrastructure layer - cross-cutting concerns."""

from controldata.infrastructure.config import Config, get_config
from controldata.infrastructure.container import Container, build_container
from controldata.infrastructure.locale import setup_time_locale
from controldata.infrastructure.logging import setup_logging, get_logger
from controldata.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from controldata.infrastructure.tracing import setup_tracing, get_tracer

__all__ = [
    "Config",
    "get_config",
    "Container",
    "build_container",
    "setup_time_locale",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
]
