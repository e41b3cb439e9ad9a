"""Binary layout of the pg_control file.

The control file is a single fixed-size C struct (ControlFileData) written by
the server in native byte order and alignment. This module mirrors the layout
of PG_CONTROL_VERSION 903 on an LP64 platform:

    Offset  Field                           Type
    ------  ------------------------------  -----------------------
       0    system_identifier               uint64
       8    pg_control_version              uint32
      12    catalog_version_no              uint32
      16    state                           int32 (DBState)
      24    time                            int64 (pg_time_t)
      32    checkPoint                      XLogRecPtr
      40    prevCheckPoint                  XLogRecPtr
      48    checkPointCopy                  CheckPoint (56 bytes)
     104    minRecoveryPoint                XLogRecPtr
     112    backupStartPoint                XLogRecPtr
     120    wal_level .. max_locks_per_xact 4 x int32
     136    maxAlign                        uint32
     144    floatFormat                     double
     152    blcksz .. toast_max_chunk_size  7 x uint32
     180    enableIntTimes, float4ByVal,
            float8ByVal                     3 x bool
     184    crc                             uint32 (CRC-32 of bytes 0..183)

Gaps between fields are alignment padding and are included in the CRC. The
struct is padded to 192 bytes, which is the number of bytes the server reads.
"""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass
from functools import lru_cache
from typing import ClassVar, Literal

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


ByteOrder = Literal["little", "big"]

# Field layout without byte-order prefix. "x" entries are alignment padding.
CONTROL_FILE_LAYOUT = (
    "Q"  # system_identifier
    "I"  # pg_control_version
    "I"  # catalog_version_no
    "i"  # state
    "4x"
    "q"  # time
    "II"  # checkPoint
    "II"  # prevCheckPoint
    # checkPointCopy
    "II"  # redo
    "I"  # ThisTimeLineID
    "I"  # nextXidEpoch
    "I"  # nextXid
    "I"  # nextOid
    "I"  # nextMulti
    "I"  # nextMultiOffset
    "I"  # oldestXid
    "I"  # oldestXidDB
    "q"  # time
    "I"  # oldestActiveXid
    "4x"
    # end of checkPointCopy
    "II"  # minRecoveryPoint
    "II"  # backupStartPoint
    "i"  # wal_level
    "i"  # MaxConnections
    "i"  # max_prepared_xacts
    "i"  # max_locks_per_xact
    "I"  # maxAlign
    "4x"
    "d"  # floatFormat
    "I"  # blcksz
    "I"  # relseg_size
    "I"  # xlog_blcksz
    "I"  # xlog_seg_size
    "I"  # nameDataLen
    "I"  # indexMaxKeys
    "I"  # toast_max_chunk_size
    "?"  # enableIntTimes
    "?"  # float4ByVal
    "?"  # float8ByVal
    "x"
    "I"  # crc
    "4x"
)

CONTROL_FILE_SIZE = 192
CRC_OFFSET = 184


@lru_cache(maxsize=2)
def control_file_struct(byte_order: ByteOrder = "little") -> struct.Struct:
    """Return the compiled struct for the given byte order."""
    prefix = {"little": "<", "big": ">"}[byte_order]
    layout = struct.Struct(prefix + CONTROL_FILE_LAYOUT)
    if layout.size != CONTROL_FILE_SIZE:
        raise AssertionError(f"Control file layout is {layout.size} bytes, expected {CONTROL_FILE_SIZE}")
    return layout


def compute_crc(data: bytes) -> int:
    """Compute the CRC-32 of everything preceding the crc field.

    zlib.crc32 is the reflected 0x04C11DB7 polynomial with all-ones init and
    final xor, which is bit-compatible with the server's INIT/COMP/FIN_CRC32.
    """
    if len(data) < CRC_OFFSET:
        raise ValueError(f"CRC requires at least {CRC_OFFSET} bytes, got {len(data)}")
    return zlib.crc32(bytes(data[:CRC_OFFSET])) & 0xFFFFFFFF


def stored_crc(data: bytes, byte_order: ByteOrder = "little") -> int:
    """Read the crc field from a raw control file image."""
    fmt = ("<" if byte_order == "little" else ">") + "I"
    return struct.unpack_from(fmt, data, CRC_OFFSET)[0]


@dataclass(frozen=True, slots=True)
class CheckPoint:
    """Copy of the latest checkpoint record kept inside pg_control.

    Attributes:
        redo: Where WAL replay must start
        this_timeline_id: Timeline the checkpoint was written on
        next_xid: Next free transaction id with its epoch
        next_oid: Next free object id
        next_multi: Next free multi-transaction id
        next_multi_offset: Next free multi-transaction member offset
        oldest_xid: Cluster-wide oldest unfrozen xid
        oldest_xid_db: Database holding oldest_xid
        time: Checkpoint time, epoch seconds
        oldest_active_xid: Oldest xid still running at checkpoint time
    """

    redo: LogPosition
    this_timeline_id: TimeLineID
    next_xid: EpochXid
    next_oid: Oid
    next_multi: MultiXactId
    next_multi_offset: MultiXactOffset
    oldest_xid: TransactionId
    oldest_xid_db: Oid
    time: int
    oldest_active_xid: TransactionId


@dataclass(frozen=True, slots=True)
class ControlRecord:
    """Decoded contents of pg_control.

    The record is read-only: it is built once from the file image and then
    only ever turned into display strings. ``state`` keeps the raw integer so
    that codes written by newer servers survive decoding.
    """

    system_identifier: SystemIdentifier
    pg_control_version: int
    catalog_version_no: int
    state: int
    time: int
    check_point: LogPosition
    prev_check_point: LogPosition
    check_point_copy: CheckPoint
    min_recovery_point: LogPosition
    backup_start_point: LogPosition
    wal_level: int
    max_connections: int
    max_prepared_xacts: int
    max_locks_per_xact: int
    max_align: int
    float_format: float
    blcksz: int
    relseg_size: int
    xlog_blcksz: int
    xlog_seg_size: int
    name_data_len: int
    index_max_keys: int
    toast_max_chunk_size: int
    enable_int_times: bool
    float4_by_val: bool
    float8_by_val: bool
    crc: int

    SIZE: ClassVar[int] = CONTROL_FILE_SIZE

    @classmethod
    def from_bytes(cls, data: bytes, byte_order: ByteOrder = "little") -> ControlRecord:
        """Decode a raw control file image.

        Only the first CONTROL_FILE_SIZE bytes are used. The CRC is decoded
        but not verified here.

        Raises:
            ValueError: If fewer than CONTROL_FILE_SIZE bytes are given.
        """
        if len(data) < CONTROL_FILE_SIZE:
            raise ValueError(
                f"ControlRecord requires {CONTROL_FILE_SIZE} bytes, got {len(data)}"
            )

        (
            system_identifier,
            pg_control_version,
            catalog_version_no,
            state,
            time,
            ckpt_xlogid, ckpt_xrecoff,
            prev_xlogid, prev_xrecoff,
            redo_xlogid, redo_xrecoff,
            this_timeline_id,
            next_xid_epoch,
            next_xid,
            next_oid,
            next_multi,
            next_multi_offset,
            oldest_xid,
            oldest_xid_db,
            ckpt_time,
            oldest_active_xid,
            min_recovery_xlogid, min_recovery_xrecoff,
            backup_start_xlogid, backup_start_xrecoff,
            wal_level,
            max_connections,
            max_prepared_xacts,
            max_locks_per_xact,
            max_align,
            float_format,
            blcksz,
            relseg_size,
            xlog_blcksz,
            xlog_seg_size,
            name_data_len,
            index_max_keys,
            toast_max_chunk_size,
            enable_int_times,
            float4_by_val,
            float8_by_val,
            crc,
        ) = control_file_struct(byte_order).unpack_from(data)

        check_point_copy = CheckPoint(
            redo=LogPosition(redo_xlogid, redo_xrecoff),
            this_timeline_id=TimeLineID(this_timeline_id),
            next_xid=EpochXid(next_xid_epoch, TransactionId(next_xid)),
            next_oid=Oid(next_oid),
            next_multi=MultiXactId(next_multi),
            next_multi_offset=MultiXactOffset(next_multi_offset),
            oldest_xid=TransactionId(oldest_xid),
            oldest_xid_db=Oid(oldest_xid_db),
            time=ckpt_time,
            oldest_active_xid=TransactionId(oldest_active_xid),
        )

        return cls(
            system_identifier=SystemIdentifier(system_identifier),
            pg_control_version=pg_control_version,
            catalog_version_no=catalog_version_no,
            state=state,
            time=time,
            check_point=LogPosition(ckpt_xlogid, ckpt_xrecoff),
            prev_check_point=LogPosition(prev_xlogid, prev_xrecoff),
            check_point_copy=check_point_copy,
            min_recovery_point=LogPosition(min_recovery_xlogid, min_recovery_xrecoff),
            backup_start_point=LogPosition(backup_start_xlogid, backup_start_xrecoff),
            wal_level=wal_level,
            max_connections=max_connections,
            max_prepared_xacts=max_prepared_xacts,
            max_locks_per_xact=max_locks_per_xact,
            max_align=max_align,
            float_format=float_format,
            blcksz=blcksz,
            relseg_size=relseg_size,
            xlog_blcksz=xlog_blcksz,
            xlog_seg_size=xlog_seg_size,
            name_data_len=name_data_len,
            index_max_keys=index_max_keys,
            toast_max_chunk_size=toast_max_chunk_size,
            enable_int_times=enable_int_times,
            float4_by_val=float4_by_val,
            float8_by_val=float8_by_val,
            crc=crc,
        )

    def to_bytes(self, byte_order: ByteOrder = "little", *, sign: bool = True) -> bytes:
        """Serialize to the on-disk layout.

        Args:
            byte_order: Byte order of the target platform
            sign: Recompute the CRC over the serialized bytes (default). When
                False the stored ``crc`` attribute is written unchanged.

        Returns:
            Exactly CONTROL_FILE_SIZE bytes, padding zero-filled.
        """
        ckpt = self.check_point_copy
        layout = control_file_struct(byte_order)
        buffer = bytearray(
            layout.pack(
                self.system_identifier,
                self.pg_control_version,
                self.catalog_version_no,
                self.state,
                self.time,
                self.check_point.xlogid, self.check_point.xrecoff,
                self.prev_check_point.xlogid, self.prev_check_point.xrecoff,
                ckpt.redo.xlogid, ckpt.redo.xrecoff,
                ckpt.this_timeline_id,
                ckpt.next_xid.epoch,
                ckpt.next_xid.xid,
                ckpt.next_oid,
                ckpt.next_multi,
                ckpt.next_multi_offset,
                ckpt.oldest_xid,
                ckpt.oldest_xid_db,
                ckpt.time,
                ckpt.oldest_active_xid,
                self.min_recovery_point.xlogid, self.min_recovery_point.xrecoff,
                self.backup_start_point.xlogid, self.backup_start_point.xrecoff,
                self.wal_level,
                self.max_connections,
                self.max_prepared_xacts,
                self.max_locks_per_xact,
                self.max_align,
                self.float_format,
                self.blcksz,
                self.relseg_size,
                self.xlog_blcksz,
                self.xlog_seg_size,
                self.name_data_len,
                self.index_max_keys,
                self.toast_max_chunk_size,
                self.enable_int_times,
                self.float4_by_val,
                self.float8_by_val,
                self.crc,
            )
        )

        if sign:
            fmt = ("<" if byte_order == "little" else ">") + "I"
            struct.pack_into(fmt, buffer, CRC_OFFSET, compute_crc(buffer))

        return bytes(buffer)
