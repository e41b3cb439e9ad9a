"""Pytest configuration and fixtures for controldata tests."""

from __future__ import annotations

import tempfile
import time
from pathlib import Path
from typing import Callable, Generator

import pytest
import structlog
from prometheus_client import CollectorRegistry

from controldata.application import ControlDataView
from controldata.domain.entities import CheckPoint, ControlRecord
from controldata.domain.services import ControlFileDecoder, FieldFormatter
from controldata.domain.value_objects import (
    EpochXid,
    LogPosition,
    MultiXactId,
    MultiXactOffset,
    Oid,
    SystemIdentifier,
    TimeLineID,
    TransactionId,
)
from controldata.adapters.outbound import FileControlFileSource
from controldata.infrastructure.config import Config, ControlFileConfig, FormattingConfig
from controldata.infrastructure.container import Container, build_container
from controldata.infrastructure.metrics import MetricsRegistry
from controldata.ports.outbound import control_file_path

# Deterministic timestamp rendering for assertions
TEST_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# 2010-09-20 16:26:40 UTC
SAMPLE_MODIFIED = 1285000000
# 2010-09-20 16:25:00 UTC
SAMPLE_CHECKPOINT_TIME = 1284999900


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def data_dir(temp_dir: Path) -> Path:
    """Provide an (empty) cluster data directory."""
    path = temp_dir / "data"
    path.mkdir()
    return path


@pytest.fixture
def test_config(data_dir: Path) -> Config:
    """Provide a test configuration pointing at the temporary data directory."""
    return Config(
        control_file=ControlFileConfig(data_dir=data_dir),
        formatting=FormattingConfig(time_format=TEST_TIME_FORMAT),
    )


@pytest.fixture
def container(test_config: Config, metrics_registry: MetricsRegistry) -> Generator[Container, None, None]:
    """Provide a fresh DI container for each test."""
    c = build_container(test_config, metrics_registry)
    yield c
    c.clear()


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture(autouse=True)
def _reset_structlog() -> Generator[None, None, None]:
    """Drop logging configuration bound to a test's captured streams."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sample_record() -> ControlRecord:
    """A control record as written by a running 9.0 server."""
    return ControlRecord(
        system_identifier=SystemIdentifier(5480155520546719817),
        pg_control_version=903,
        catalog_version_no=201008051,
        state=5,
        time=SAMPLE_MODIFIED,
        check_point=LogPosition(0x16, 0xB374D848),
        prev_check_point=LogPosition(0x16, 0xB374D7F0),
        check_point_copy=CheckPoint(
            redo=LogPosition(0x16, 0xB374D810),
            this_timeline_id=TimeLineID(1),
            next_xid=EpochXid(0, TransactionId(1042)),
            next_oid=Oid(24576),
            next_multi=MultiXactId(1),
            next_multi_offset=MultiXactOffset(0),
            oldest_xid=TransactionId(654),
            oldest_xid_db=Oid(1),
            time=SAMPLE_CHECKPOINT_TIME,
            oldest_active_xid=TransactionId(0),
        ),
        min_recovery_point=LogPosition(0, 0),
        backup_start_point=LogPosition(0, 0),
        wal_level=0,
        max_connections=100,
        max_prepared_xacts=0,
        max_locks_per_xact=64,
        max_align=8,
        float_format=1234567.0,
        blcksz=8192,
        relseg_size=131072,
        xlog_blcksz=8192,
        xlog_seg_size=16777216,
        name_data_len=64,
        index_max_keys=32,
        toast_max_chunk_size=1996,
        enable_int_times=True,
        float4_by_val=True,
        float8_by_val=True,
        crc=0,
    )


@pytest.fixture
def sample_image(sample_record: ControlRecord) -> bytes:
    """The sample record serialized and signed."""
    return sample_record.to_bytes()


@pytest.fixture
def write_control_file() -> Callable[[Path, ControlRecord | bytes], Path]:
    """Return a helper that writes ``<data_dir>/global/pg_control``."""

    def _write(data_dir: Path, content: ControlRecord | bytes) -> Path:
        image = content.to_bytes() if isinstance(content, ControlRecord) else content
        path = control_file_path(data_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(image)
        return path

    return _write


@pytest.fixture
def gmtime_formatter() -> FieldFormatter:
    """A formatter whose output does not depend on TZ or LC_TIME."""
    return FieldFormatter(time_format=TEST_TIME_FORMAT, localtime=time.gmtime)


@pytest.fixture
def file_view(gmtime_formatter: FieldFormatter, metrics_registry: MetricsRegistry) -> ControlDataView:
    """A view over the local file system with deterministic timestamps."""
    return ControlDataView(
        decoder=ControlFileDecoder(FileControlFileSource()),
        formatter=gmtime_formatter,
        metrics=metrics_registry,
    )


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
