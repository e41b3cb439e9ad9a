"""Core identifiers and type-safe primitives stored in the control file.

These value objects give names to the raw integers found in pg_control so that
a timeline is never confused with a transaction id, and a log position is never
handled as a plain 64-bit number.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType


# Type-safe identifiers using NewType for zero-cost runtime abstraction

SystemIdentifier = NewType("SystemIdentifier", int)
"""Random 64-bit value assigned at initdb time. Unique per cluster, not a counter."""

TimeLineID = NewType("TimeLineID", int)
"""WAL timeline the checkpoint was written on."""

TransactionId = NewType("TransactionId", int)
"""32-bit transaction identifier. Wraps around; see EpochXid for the full value."""

Oid = NewType("Oid", int)
"""32-bit object identifier."""

MultiXactId = NewType("MultiXactId", int)
"""Identifier of a multi-transaction (shared row lock group)."""

MultiXactOffset = NewType("MultiXactOffset", int)
"""Offset into the multi-transaction members storage."""

UINT32_MAX = 0xFFFFFFFF


def _check_uint32(name: str, value: int) -> None:
    if not 0 <= value <= UINT32_MAX:
        raise ValueError(f"{name} must fit in 32 unsigned bits, got {value}")


@dataclass(frozen=True, slots=True)
class LogPosition:
    """Write-ahead log address split into two 32-bit halves.

    The on-disk XLogRecPtr stores the log file id (xlogid) and the byte
    offset inside it (xrecoff).

    Attributes:
        xlogid: High half of the address
        xrecoff: Low half of the address

    Example:
        >>> str(LogPosition(0, 255))
        '0/FF'
    """

    xlogid: int
    xrecoff: int

    def __post_init__(self) -> None:
        """Validate both halves."""
        _check_uint32("xlogid", self.xlogid)
        _check_uint32("xrecoff", self.xrecoff)

    def __str__(self) -> str:
        # Same layout as the producer's "%X/%X": uppercase, unpadded, no prefix
        return f"{self.xlogid:X}/{self.xrecoff:X}"


@dataclass(frozen=True, slots=True)
class EpochXid:
    """Transaction id extended with its wraparound epoch.

    Attributes:
        epoch: Number of times the 32-bit xid counter has wrapped
        xid: The 32-bit transaction id
    """

    epoch: int
    xid: TransactionId

    def __post_init__(self) -> None:
        """Validate both components."""
        _check_uint32("epoch", self.epoch)
        _check_uint32("xid", self.xid)

    def __str__(self) -> str:
        return f"{self.epoch}/{self.xid}"

