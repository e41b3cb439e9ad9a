"""Unit tests for ControlDataView."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from controldata.adapters.inbound import TupleStore
from controldata.adapters.outbound import InMemoryControlFileSource
from controldata.application import (
    INCOMPATIBLE_DESCRIPTOR_MESSAGE,
    MATERIALIZE_REQUIRED_MESSAGE,
    ControlDataView,
)
from controldata.domain.entities import ControlRecord
from controldata.domain.exceptions import (
    ControlFileIOError,
    IntegrityError,
    TimestampOutOfRangeError,
    UnsupportedContextError,
)
from controldata.domain.services import ControlFileDecoder, FieldFormatter
from controldata.infrastructure.metrics import MetricsRegistry
from controldata.ports.inbound import ColumnSpec, ColumnType, ReturnMode

DATA_DIR = "/srv/pg"


class RecordingSource(InMemoryControlFileSource):
    """In-memory source that remembers every read."""

    def __init__(self, images: dict[str, bytes] | None = None) -> None:
        super().__init__(images)
        self.reads: list[str] = []

    def read(self, data_dir: str | Path, size: int) -> bytes:
        self.reads.append(str(data_dir))
        return super().read(data_dir, size)


@pytest.fixture
def source(sample_image: bytes) -> RecordingSource:
    return RecordingSource({DATA_DIR: sample_image})


@pytest.fixture
def view(
    source: RecordingSource,
    gmtime_formatter: FieldFormatter,
    metrics_registry: MetricsRegistry,
) -> ControlDataView:
    return ControlDataView(
        decoder=ControlFileDecoder(source),
        formatter=gmtime_formatter,
        metrics=metrics_registry,
    )


def sample(metrics: MetricsRegistry, name: str, labels: dict[str, str] | None = None) -> float:
    return metrics.registry.get_sample_value(name, labels or {}) or 0.0


@pytest.mark.unit
class TestRows:
    """Tests for ControlDataView.rows and read_record."""

    def test_rows(self, view: ControlDataView) -> None:
        rows = view.rows(DATA_DIR)

        assert len(rows) == 30
        assert rows[0] == ("pg_control version number", "903")
        assert rows[-1] == ("Float8 argument passing", "by value")

    def test_each_call_reads_afresh(self, view: ControlDataView, source: RecordingSource) -> None:
        view.rows(DATA_DIR)
        view.rows(DATA_DIR)
        assert source.reads == [DATA_DIR, DATA_DIR]

    def test_success_metrics(self, view: ControlDataView, metrics_registry: MetricsRegistry) -> None:
        view.read_record(DATA_DIR)

        assert sample(metrics_registry, "controldata_reads_total", {"status": "ok"}) == 1.0
        assert sample(metrics_registry, "controldata_read_latency_seconds_count") == 1.0

    def test_io_error_metrics(self, view: ControlDataView, metrics_registry: MetricsRegistry) -> None:
        with pytest.raises(ControlFileIOError):
            view.read_record("/srv/missing")

        assert sample(metrics_registry, "controldata_reads_total", {"status": "io_error"}) == 1.0
        assert sample(metrics_registry, "controldata_reads_total", {"status": "ok"}) == 0.0
        assert sample(metrics_registry, "controldata_read_latency_seconds_count") == 1.0

    def test_checksum_metrics(
        self,
        view: ControlDataView,
        source: RecordingSource,
        sample_record: ControlRecord,
        metrics_registry: MetricsRegistry,
    ) -> None:
        image = bytearray(sample_record.to_bytes())
        image[10] ^= 0x01
        source.add(DATA_DIR, bytes(image))

        with pytest.raises(IntegrityError):
            view.rows(DATA_DIR)

        assert sample(metrics_registry, "controldata_reads_total", {"status": "checksum_mismatch"}) == 1.0
        assert sample(metrics_registry, "controldata_checksum_failures_total") == 1.0

    def test_unrenderable_timestamp_is_logged_and_counted(
        self,
        view: ControlDataView,
        source: RecordingSource,
        sample_record: ControlRecord,
        metrics_registry: MetricsRegistry,
    ) -> None:
        """A record that decodes but cannot be formatted is not counted as ok."""
        source.add(DATA_DIR, dataclasses.replace(sample_record, time=2**62).to_bytes())

        with capture_logs() as logs, pytest.raises(TimestampOutOfRangeError):
            view.rows(DATA_DIR)

        failures = [entry for entry in logs if entry["event"] == "control_file_format_failed"]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "error"
        assert failures[0]["field"] == "pg_control last modified"
        assert failures[0]["value"] == 2**62
        assert not any(entry["event"] == "control_file_read" for entry in logs)
        assert sample(metrics_registry, "controldata_reads_total", {"status": "timestamp_out_of_range"}) == 1.0
        assert sample(metrics_registry, "controldata_reads_total", {"status": "ok"}) == 0.0

    def test_read_record_does_not_format(
        self,
        view: ControlDataView,
        source: RecordingSource,
        sample_record: ControlRecord,
        metrics_registry: MetricsRegistry,
    ) -> None:
        source.add(DATA_DIR, dataclasses.replace(sample_record, time=2**62).to_bytes())

        assert view.read_record(DATA_DIR).time == 2**62
        assert sample(metrics_registry, "controldata_reads_total", {"status": "ok"}) == 1.0

    def test_create_uses_file_system(self, metrics_registry: MetricsRegistry) -> None:
        view = ControlDataView.create(byte_order="big", metrics=metrics_registry)

        assert isinstance(view.decoder, ControlFileDecoder)
        assert view.decoder.byte_order == "big"
        assert isinstance(view.formatter, FieldFormatter)


@pytest.mark.unit
class TestMaterialize:
    """Tests for ControlDataView.materialize."""

    def test_materialize(self, view: ControlDataView, metrics_registry: MetricsRegistry) -> None:
        store = TupleStore()

        count = view.materialize(DATA_DIR, store)

        assert count == 30
        assert len(store) == 30
        assert store.is_done
        assert store.rows[3] == ("Database cluster state", "in production")
        assert sample(metrics_registry, "controldata_rows_emitted_total") == 30.0

    def test_no_sink(self, view: ControlDataView, source: RecordingSource) -> None:
        with pytest.raises(UnsupportedContextError, match=MATERIALIZE_REQUIRED_MESSAGE):
            view.materialize(DATA_DIR, None)
        assert source.reads == []

    def test_sink_without_materialize_mode(self, view: ControlDataView, source: RecordingSource) -> None:
        store = TupleStore(allowed_modes=frozenset({ReturnMode.VALUE_PER_CALL}))

        with pytest.raises(UnsupportedContextError, match=MATERIALIZE_REQUIRED_MESSAGE):
            view.materialize(DATA_DIR, store)
        assert source.reads == []

    @pytest.mark.parametrize(
        "columns",
        [
            (ColumnSpec("name", ColumnType.TEXT),),
            (ColumnSpec("name", ColumnType.TEXT), ColumnSpec("setting", ColumnType.INTEGER)),
            (
                ColumnSpec("name", ColumnType.TEXT),
                ColumnSpec("setting", ColumnType.TEXT),
                ColumnSpec("extra", ColumnType.TEXT),
            ),
        ],
    )
    def test_incompatible_descriptor(
        self, view: ControlDataView, source: RecordingSource, columns: tuple[ColumnSpec, ...]
    ) -> None:
        store = TupleStore(columns=columns)

        with pytest.raises(UnsupportedContextError, match=INCOMPATIBLE_DESCRIPTOR_MESSAGE):
            view.materialize(DATA_DIR, store)
        assert source.reads == []

    def test_failure_leaves_sink_empty(
        self, view: ControlDataView, source: RecordingSource, sample_record: ControlRecord
    ) -> None:
        source.add(DATA_DIR, dataclasses.replace(sample_record, state=2).to_bytes(sign=False))
        store = TupleStore()

        with pytest.raises(IntegrityError):
            view.materialize(DATA_DIR, store)

        assert len(store) == 0
        assert not store.is_done
