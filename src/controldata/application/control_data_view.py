"""Control data view - unified entry point for reading pg_control as rows.

This module provides the ControlDataView class that ties together the
decoder, the formatter and an optional result sink, and adds logging,
metrics and tracing around each step.

Usage:
    from controldata.application import ControlDataView

    view = ControlDataView.create()

    # Plain rows
    for name, setting in view.rows("/var/lib/postgresql/data"):
        print(name, setting)

    # Materialize into a sink (e.g. a query layer's tuple store)
    store = TupleStore()
    view.materialize("/var/lib/postgresql/data", store)
"""

from __future__ import annotations

import time
from pathlib import Path

import structlog

from controldata.adapters.outbound.file_control_file_source import FileControlFileSource
from controldata.domain.entities import ByteOrder, ControlRecord
from controldata.domain.exceptions import (
    ControlFileIOError,
    IntegrityError,
    TimestampOutOfRangeError,
    UnsupportedContextError,
)
from controldata.domain.services import ControlFileDecoder, FieldFormatter
from controldata.domain.value_objects import FieldEntry
from controldata.infrastructure.logging import get_logger
from controldata.infrastructure.metrics import MetricsRegistry, get_metrics
from controldata.infrastructure.tracing import trace_span
from controldata.ports.inbound.control_data import ControlFileReader, ControlRecordFormatter
from controldata.ports.inbound.result_sink import (
    CONTROL_DATA_COLUMNS,
    ColumnType,
    ResultSink,
    ReturnMode,
)


MATERIALIZE_REQUIRED_MESSAGE = (
    "materialize mode required, but it is not allowed in this context"
)
INCOMPATIBLE_DESCRIPTOR_MESSAGE = (
    "query-specified return tuple and function return type are not compatible"
)


class ControlDataView:
    """Reads a data directory's control file and exposes it as rows.

    Every call decodes the file afresh; nothing is cached between calls and
    no state is shared, so one view can serve concurrent requests.

    Attributes:
        decoder: Reads and validates pg_control
        formatter: Renders a validated record as rows
    """

    def __init__(
        self,
        decoder: ControlFileReader,
        formatter: ControlRecordFormatter,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the view.

        Args:
            decoder: Control file reader (usually a ControlFileDecoder)
            formatter: Record formatter (usually a FieldFormatter)
            metrics: Metrics registry (default: the global registry)
        """
        self.decoder = decoder
        self.formatter = formatter
        self._metrics = metrics or get_metrics()
        self._logger = get_logger(__name__)

    @classmethod
    def create(
        cls,
        byte_order: ByteOrder = "little",
        time_format: str = "%c",
        metrics: MetricsRegistry | None = None,
    ) -> ControlDataView:
        """Build a view that reads from the local file system."""
        return cls(
            decoder=ControlFileDecoder(FileControlFileSource(), byte_order=byte_order),
            formatter=FieldFormatter(time_format=time_format),
            metrics=metrics,
        )

    def read_record(self, data_dir: str | Path) -> ControlRecord:
        """Decode and validate the control file, recording the outcome.

        Raises:
            ControlFileIOError: If the file is missing, unreadable or truncated.
            IntegrityError: If the stored CRC does not match.
        """
        log = self._logger.bind(data_dir=str(data_dir))
        record = self._decode(data_dir, log)
        self._record_ok(record, log)
        return record

    def rows(self, data_dir: str | Path) -> tuple[FieldEntry, ...]:
        """Return the canonical (name, setting) rows for a data directory.

        A read only counts as ok once its timestamps have been rendered.

        Raises:
            ControlFileIOError, IntegrityError: From decoding.
            TimestampOutOfRangeError: From formatting.
        """
        log = self._logger.bind(data_dir=str(data_dir))
        record = self._decode(data_dir, log)

        with trace_span("controldata.format"):
            try:
                entries = self.formatter.format(record)
            except TimestampOutOfRangeError as e:
                self._metrics.reads_total.labels(status="timestamp_out_of_range").inc()
                log.error("control_file_format_failed", field=e.field, value=e.value, error=str(e))
                raise

        self._record_ok(record, log)
        return entries

    def _decode(self, data_dir: str | Path, log: structlog.BoundLogger) -> ControlRecord:
        start = time.perf_counter()

        with trace_span("controldata.decode", {"controldata.data_dir": str(data_dir)}):
            try:
                return self.decoder.decode(data_dir)
            except ControlFileIOError as e:
                self._metrics.reads_total.labels(status="io_error").inc()
                log.warning("control_file_read_failed", error=str(e))
                raise
            except IntegrityError as e:
                self._metrics.reads_total.labels(status="checksum_mismatch").inc()
                self._metrics.checksum_failures_total.inc()
                log.error("control_file_checksum_mismatch", error=str(e))
                raise
            finally:
                self._metrics.read_latency_seconds.observe(time.perf_counter() - start)

    def _record_ok(self, record: ControlRecord, log: structlog.BoundLogger) -> None:
        self._metrics.reads_total.labels(status="ok").inc()
        log.debug(
            "control_file_read",
            pg_control_version=record.pg_control_version,
            catalog_version_no=record.catalog_version_no,
            state=record.state,
        )

    def materialize(self, data_dir: str | Path, sink: ResultSink | None) -> int:
        """Decode, format and push every row into a result sink.

        The sink is checked before the file is touched: it must accept a
        fully materialized result of two text columns.

        Args:
            data_dir: Cluster data directory
            sink: Row consumer

        Returns:
            Number of rows written to the sink

        Raises:
            UnsupportedContextError: If the sink cannot take the result.
            ControlFileIOError, IntegrityError, TimestampOutOfRangeError:
                From decoding and formatting; the sink receives no rows.
        """
        self.check_sink(sink)

        entries = self.rows(data_dir)
        for entry in entries:
            sink.put_row((entry.label, entry.value))
        sink.done()

        self._metrics.rows_emitted_total.inc(len(entries))
        return len(entries)

    @staticmethod
    def check_sink(sink: ResultSink | None) -> None:
        """Verify that a sink can receive the control data result.

        Raises:
            UnsupportedContextError: If the sink does not support materialize
                mode or does not expect exactly two text columns.
        """
        if sink is None or ReturnMode.MATERIALIZE not in sink.allowed_modes:
            raise UnsupportedContextError(MATERIALIZE_REQUIRED_MESSAGE)

        columns = sink.expected_columns
        if len(columns) != len(CONTROL_DATA_COLUMNS) or any(
            column.type is not ColumnType.TEXT for column in columns
        ):
            raise UnsupportedContextError(INCOMPATIBLE_DESCRIPTOR_MESSAGE)
