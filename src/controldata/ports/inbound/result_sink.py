"""Result sink port for materializing control data rows.

A result sink is whatever consumes the (name, setting) rows: a query
layer's tuple store, an HTTP response, a terminal table. Before any file
I/O happens the producer checks that the sink can take a fully
materialized set of two text columns.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class ReturnMode(Enum):
    """How a sink is willing to receive rows."""

    VALUE_PER_CALL = "value_per_call"
    MATERIALIZE = "materialize"


class ColumnType(Enum):
    """Column types a sink may expect."""

    TEXT = "text"
    INTEGER = "integer"
    BOOLEAN = "boolean"


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """One column of a sink's expected row descriptor."""

    name: str
    type: ColumnType


# Row shape produced by controldata
CONTROL_DATA_COLUMNS = (
    ColumnSpec("name", ColumnType.TEXT),
    ColumnSpec("setting", ColumnType.TEXT),
)


class ResultSink(Protocol):
    """Protocol for consumers of materialized control data rows."""

    @property
    @abstractmethod
    def allowed_modes(self) -> frozenset[ReturnMode]:
        """Return modes this sink supports."""
        ...

    @property
    @abstractmethod
    def expected_columns(self) -> tuple[ColumnSpec, ...]:
        """Row descriptor the sink expects."""
        ...

    @abstractmethod
    def put_row(self, row: tuple[str, str]) -> None:
        """Append one (name, setting) row."""
        ...

    @abstractmethod
    def done(self) -> None:
        """Signal that no more rows follow."""
        ...
