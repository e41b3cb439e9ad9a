"""Prometheus metrics for controldata."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all controldata metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Read metrics
        self.reads_total = Counter(
            "controldata_reads_total",
            "Total control file reads",
            ["status"],  # ok, io_error, checksum_mismatch, timestamp_out_of_range
            registry=self._registry,
        )

        self.read_latency_seconds = Histogram(
            "controldata_read_latency_seconds",
            "Control file read and validation latency in seconds",
            buckets=(0.00005, 0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1),
            registry=self._registry,
        )

        self.checksum_failures_total = Counter(
            "controldata_checksum_failures_total",
            "Total control file CRC mismatches",
            registry=self._registry,
        )

        # Output metrics
        self.rows_emitted_total = Counter(
            "controldata_rows_emitted_total",
            "Total (name, setting) rows handed to result sinks",
            registry=self._registry,
        )

        # Server info
        self.info = Info(
            "controldata",
            "controldata build information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """The collector registry these metrics are registered in."""
        return self._registry


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    # Set server info
    from controldata import __version__
    _metrics.info.info({
        "version": __version__,
    })

    # Start HTTP server for Prometheus scraping
    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
