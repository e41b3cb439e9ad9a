"""Enumerated values stored in the control file and their display prose.

Each enumeration maps a raw on-disk value to the exact text the producer's own
tooling prints. Unknown state codes are tolerated so that a file written by a
newer server still renders.
"""

from __future__ import annotations

from enum import Enum, IntEnum


UNRECOGNIZED_STATUS = "unrecognized status code"


class DBState(IntEnum):
    """Cluster lifecycle state, stored as a C enum (int32)."""

    STARTUP = 0
    SHUTDOWNED = 1
    SHUTDOWNING = 2
    IN_CRASH_RECOVERY = 3
    IN_ARCHIVE_RECOVERY = 4
    IN_PRODUCTION = 5

    @property
    def description(self) -> str:
        """Human-readable state, as printed by pg_controldata."""
        match self:
            case DBState.STARTUP:
                return "starting up"
            case DBState.SHUTDOWNED:
                return "shut down"
            case DBState.SHUTDOWNING:
                return "shutting down"
            case DBState.IN_CRASH_RECOVERY:
                return "in crash recovery"
            case DBState.IN_ARCHIVE_RECOVERY:
                return "in archive recovery"
            case DBState.IN_PRODUCTION:
                return "in production"
        return UNRECOGNIZED_STATUS

    @classmethod
    def from_code(cls, code: int) -> DBState | None:
        """Return the state for a raw code, or None if the code is unknown."""
        try:
            return cls(code)
        except ValueError:
            return None


def describe_db_state(code: int) -> str:
    """Render a raw state code, falling back for codes from newer producers."""
    state = DBState.from_code(code)
    if state is None:
        return UNRECOGNIZED_STATUS
    return state.description


class DateTimeStorage(str, Enum):
    """How the server stores timestamp values (enableIntTimes)."""

    INTEGER = "64-bit integers"
    FLOATING_POINT = "floating-point numbers"

    @classmethod
    def from_flag(cls, enable_int_times: bool) -> DateTimeStorage:
        return cls.INTEGER if enable_int_times else cls.FLOATING_POINT


class ArgumentPassing(str, Enum):
    """How float4/float8 values are passed to functions (float*ByVal)."""

    BY_VALUE = "by value"
    BY_REFERENCE = "by reference"

    @classmethod
    def from_flag(cls, by_value: bool) -> ArgumentPassing:
        return cls.BY_VALUE if by_value else cls.BY_REFERENCE
