"""Field formatter - render a validated control record as display rows.

The output is a fixed, ordered sequence of 30 (label, value) pairs. Both the
labels and the value layouts match the server's own pg_controldata tool
byte for byte, because operator scripts parse that output:

    Rule                Example
    ------------------  ---------------------------
    unsigned integer    8192
    log position        16/B374D848   (uppercase hex, unpadded)
    epoch/xid           0/1042
    timestamp           strftime("%c") in local time
    cluster state       in production
    flags               64-bit integers / by value
"""

from __future__ import annotations

import time
from typing import Callable

from controldata.domain.entities import ControlRecord
from controldata.domain.exceptions import TimestampOutOfRangeError
from controldata.domain.value_objects import (
    ArgumentPassing,
    DateTimeStorage,
    FieldEntry,
    describe_db_state,
)


# Canonical row order. Position is part of the output contract.
FIELD_LABELS: tuple[str, ...] = (
    "pg_control version number",
    "Catalog version number",
    "Database system identifier",
    "Database cluster state",
    "pg_control last modified",
    "Latest checkpoint location",
    "Prior checkpoint location",
    "Latest checkpoint's REDO location",
    "Latest checkpoint's TimeLineID",
    "Latest checkpoint's NextXID",
    "Latest checkpoint's NextOID",
    "Latest checkpoint's NextMultiXactId",
    "Latest checkpoint's NextMultiOffset",
    "Latest checkpoint's oldestXID",
    "Latest checkpoint's oldestXID's DB",
    "Latest checkpoint's oldestActiveXID",
    "Time of latest checkpoint",
    "Minimum recovery ending location",
    "Backup start location",
    "Maximum data alignment",
    "Database block size",
    "Blocks per segment of large relation",
    "WAL block size",
    "Bytes per WAL segment",
    "Maximum length of identifiers",
    "Maximum columns in an index",
    "Maximum size of a TOAST chunk",
    "Date/time type storage",
    "Float4 argument passing",
    "Float8 argument passing",
)

FIELD_COUNT = len(FIELD_LABELS)


class FieldFormatter:
    """Turns a ControlRecord into the canonical sequence of FieldEntry rows.

    Timestamps go through the process-wide timezone and LC_TIME locale, which
    must be set up before the first call. Everything else is locale-free.

    Thread Safety:
        Stateless apart from the injected format string; safe to share.
    """

    def __init__(
        self,
        time_format: str = "%c",
        localtime: Callable[[float], time.struct_time] = time.localtime,
    ) -> None:
        """Initialize the formatter.

        Args:
            time_format: strftime format for timestamp fields
            localtime: Epoch-to-local-time conversion (swap for time.gmtime
                to get timezone-independent output)
        """
        self._time_format = time_format
        self._localtime = localtime

    def format(self, record: ControlRecord) -> tuple[FieldEntry, ...]:
        """Render every field of the record, in canonical order.

        Args:
            record: A CRC-validated control record (not modified)

        Returns:
            A new tuple of exactly FIELD_COUNT entries

        Raises:
            TimestampOutOfRangeError: If a stored timestamp cannot be
                converted to local time on this platform.
        """
        ckpt = record.check_point_copy

        values = (
            str(record.pg_control_version),
            str(record.catalog_version_no),
            str(record.system_identifier),
            describe_db_state(record.state),
            self.format_timestamp(record.time, "pg_control last modified"),
            str(record.check_point),
            str(record.prev_check_point),
            str(ckpt.redo),
            str(ckpt.this_timeline_id),
            str(ckpt.next_xid),
            str(ckpt.next_oid),
            str(ckpt.next_multi),
            str(ckpt.next_multi_offset),
            str(ckpt.oldest_xid),
            str(ckpt.oldest_xid_db),
            str(ckpt.oldest_active_xid),
            self.format_timestamp(ckpt.time, "Time of latest checkpoint"),
            str(record.min_recovery_point),
            str(record.backup_start_point),
            str(record.max_align),
            str(record.blcksz),
            str(record.relseg_size),
            str(record.xlog_blcksz),
            str(record.xlog_seg_size),
            str(record.name_data_len),
            str(record.index_max_keys),
            str(record.toast_max_chunk_size),
            DateTimeStorage.from_flag(record.enable_int_times).value,
            ArgumentPassing.from_flag(record.float4_by_val).value,
            ArgumentPassing.from_flag(record.float8_by_val).value,
        )

        return tuple(FieldEntry(label, value) for label, value in zip(FIELD_LABELS, values, strict=True))

    def format_timestamp(self, seconds: int, field: str = "timestamp") -> str:
        """Render epoch seconds in local time using the configured format.

        Raises:
            TimestampOutOfRangeError: If the platform cannot represent the value.
        """
        try:
            local = self._localtime(seconds)
        except (OverflowError, OSError, ValueError) as e:
            raise TimestampOutOfRangeError(field, seconds) from e
        return time.strftime(self._time_format, local)


def entries_by_label(entries: tuple[FieldEntry, ...]) -> dict[str, str]:
    """Index rows by label. Labels are unique, so nothing is lost."""
    return {entry.label: entry.value for entry in entries}
