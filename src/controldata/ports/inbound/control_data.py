"""Control data ports - decoding and formatting contracts.

These inbound ports are what the application layer and the REST/CLI
adapters depend on. The domain services implement them.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Protocol

from controldata.domain.entities import ControlRecord
from controldata.domain.value_objects import FieldEntry


class ControlFileReader(Protocol):
    """Protocol for turning a data directory into a validated record."""

    @abstractmethod
    def decode(self, data_dir: str | Path) -> ControlRecord:
        """Read, size-check and CRC-check pg_control.

        Raises:
            ControlFileIOError: If the file is missing, unreadable or truncated.
            IntegrityError: If the CRC does not match.
        """
        ...


class ControlRecordFormatter(Protocol):
    """Protocol for rendering a validated record as display rows."""

    @abstractmethod
    def format(self, record: ControlRecord) -> tuple[FieldEntry, ...]:
        """Render the record as an ordered, immutable sequence of rows.

        Raises:
            TimestampOutOfRangeError: If a timestamp cannot be converted.
        """
        ...
