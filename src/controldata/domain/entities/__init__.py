"""Domain entities for control data.

Exports:
    Control File:
        - ControlRecord: Decoded, read-only contents of pg_control
        - CheckPoint: Copy of the latest checkpoint kept in pg_control
        - control_file_struct: Compiled binary layout per byte order
        - compute_crc, stored_crc: CRC helpers over raw file images
        - CONTROL_FILE_SIZE, CRC_OFFSET: Layout constants
"""

from controldata.domain.entities.control_record import (
    CONTROL_FILE_LAYOUT,
    CONTROL_FILE_SIZE,
    CRC_OFFSET,
    ByteOrder,
    CheckPoint,
    ControlRecord,
    compute_crc,
    control_file_struct,
    stored_crc,
)

__all__ = [
    "ByteOrder",
    "CheckPoint",
    "ControlRecord",
    "CONTROL_FILE_LAYOUT",
    "CONTROL_FILE_SIZE",
    "CRC_OFFSET",
    "compute_crc",
    "control_file_struct",
    "stored_crc",
]
