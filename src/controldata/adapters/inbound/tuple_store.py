"""In-memory tuple store implementing the ResultSink protocol.

Collects materialized rows for a caller that wants the whole result set at
once. Rows are validated against the declared column descriptor as they
arrive, and the store is sealed once ``done()`` is called.
"""

from __future__ import annotations

from typing import Iterator

from controldata.ports.inbound.result_sink import (
    CONTROL_DATA_COLUMNS,
    ColumnSpec,
    ColumnType,
    ReturnMode,
)


class TupleStore:
    """Materialized row set.

    Example:
        >>> store = TupleStore()
        >>> store.put_row(("WAL block size", "8192"))
        >>> store.done()
        >>> store.rows
        (('WAL block size', '8192'),)
    """

    def __init__(
        self,
        columns: tuple[ColumnSpec, ...] = CONTROL_DATA_COLUMNS,
        allowed_modes: frozenset[ReturnMode] = frozenset({ReturnMode.MATERIALIZE}),
    ) -> None:
        """Initialize an empty store.

        Args:
            columns: Row descriptor every row must match
            allowed_modes: Return modes this store accepts
        """
        self._columns = tuple(columns)
        self._allowed_modes = frozenset(allowed_modes)
        self._rows: list[tuple[str, ...]] = []
        self._done = False

    @property
    def allowed_modes(self) -> frozenset[ReturnMode]:
        return self._allowed_modes

    @property
    def expected_columns(self) -> tuple[ColumnSpec, ...]:
        return self._columns

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self._columns]

    @property
    def is_done(self) -> bool:
        return self._done

    @property
    def rows(self) -> tuple[tuple[str, ...], ...]:
        """Rows stored so far, in insertion order."""
        return tuple(self._rows)

    def put_row(self, row: tuple[str, ...]) -> None:
        """Append a row.

        Raises:
            RuntimeError: If the store has already been sealed.
            ValueError: If the row does not match the column descriptor.
        """
        if self._done:
            raise RuntimeError("Tuple store is already complete")

        if len(row) != len(self._columns):
            raise ValueError(
                f"Row has {len(row)} values, descriptor has {len(self._columns)} columns"
            )

        for value, column in zip(row, self._columns):
            if column.type is ColumnType.TEXT and not isinstance(value, str):
                raise ValueError(
                    f"Column '{column.name}' expects text, got {type(value).__name__}"
                )

        self._rows.append(tuple(row))

    def done(self) -> None:
        """Seal the store; later put_row calls fail."""
        self._done = True

    def as_dicts(self) -> list[dict[str, str]]:
        """Rows as column-name keyed dictionaries."""
        names = self.column_names
        return [dict(zip(names, row)) for row in self._rows]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[tuple[str, ...]]:
        return iter(self._rows)
