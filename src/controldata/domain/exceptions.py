"""Errors raised while reading and rendering the control file.

All of them are fatal to the current invocation: no partial record and no
partial row set is ever handed back to the caller.
"""

from __future__ import annotations


class ControlDataError(Exception):
    """Base class for all control data errors."""

    pass


class ControlFileIOError(OSError, ControlDataError):
    """Raised when the control file cannot be opened or is too short.

    Also an OSError, so ``except IOError`` handlers catch it.
    """

    pass


class IntegrityError(ControlDataError):
    """Raised when the stored CRC does not match the file contents.

    Any field of a record that fails this check may be garbage, so the
    record is never formatted.
    """

    pass


class UnsupportedContextError(ControlDataError):
    """Raised when the caller cannot accept the row set we produce.

    Checked before any file I/O is attempted.
    """

    pass


class TimestampOutOfRangeError(ControlDataError, ValueError):
    """Raised when a stored timestamp cannot be represented by the platform."""

    def __init__(self, field: str, value: int) -> None:
        super().__init__(f"{field} timestamp {value} is out of range for this platform")
        self.field = field
        self.value = value
