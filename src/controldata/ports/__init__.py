"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to clients (e.g., ControlFileReader, ResultSink)
- Outbound ports: Dependencies on external systems (e.g., ControlFileSource)

Adapters implement these ports with concrete functionality.
"""

from controldata.ports.inbound import (
    CONTROL_DATA_COLUMNS,
    ColumnSpec,
    ColumnType,
    ControlFileReader,
    ControlRecordFormatter,
    ResultSink,
    ReturnMode,
)
from controldata.ports.outbound import (
    CONTROL_FILE_RELATIVE_PATH,
    ControlFileSource,
    control_file_path,
)

__all__ = [
    # Inbound ports
    "CONTROL_DATA_COLUMNS",
    "ColumnSpec",
    "ColumnType",
    "ControlFileReader",
    "ControlRecordFormatter",
    "ResultSink",
    "ReturnMode",
    # Outbound ports
    "CONTROL_FILE_RELATIVE_PATH",
    "ControlFileSource",
    "control_file_path",
]
