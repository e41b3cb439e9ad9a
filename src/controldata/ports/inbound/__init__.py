"""Inbound ports - API contracts for controldata.

Inbound ports define the interfaces that clients and upper layers
use to decode, format and materialize control data.
"""

from controldata.ports.inbound.control_data import (
    ControlFileReader,
    ControlRecordFormatter,
)
from controldata.ports.inbound.result_sink import (
    CONTROL_DATA_COLUMNS,
    ColumnSpec,
    ColumnType,
    ResultSink,
    ReturnMode,
)

__all__ = [
    # Control data
    "ControlFileReader",
    "ControlRecordFormatter",
    # Result sink
    "CONTROL_DATA_COLUMNS",
    "ColumnSpec",
    "ColumnType",
    "ResultSink",
    "ReturnMode",
]
