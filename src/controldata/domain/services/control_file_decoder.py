"""Control file decoder - read, validate and decode pg_control.

The decoder is the integrity gate for everything downstream. The control
file layout changes between server versions with no compatibility
guarantees, so a reader/writer mismatch must be caught here rather than
surfacing as garbled output:

    1. Read exactly CONTROL_FILE_SIZE bytes (short read -> ControlFileIOError)
    2. CRC-32 over bytes [0, CRC_OFFSET) must equal the stored crc
       (mismatch -> IntegrityError)
    3. Decode into an immutable ControlRecord

No partially decoded record is ever returned.
"""

from __future__ import annotations

from pathlib import Path

from controldata.domain.entities import (
    CONTROL_FILE_SIZE,
    ByteOrder,
    ControlRecord,
    compute_crc,
    stored_crc,
)
from controldata.domain.exceptions import ControlFileIOError, IntegrityError
from controldata.ports.outbound.control_file_source import ControlFileSource


CHECKSUM_MISMATCH_MESSAGE = "calculated CRC checksum does not match value stored in file"


class ControlFileDecoder:
    """Decodes and validates pg_control for a data directory.

    The decoder keeps no state between calls: each ``decode`` reads the file
    afresh and builds a new record, so one instance can serve concurrent
    callers.

    Example:
        >>> decoder = ControlFileDecoder(FileControlFileSource())
        >>> record = decoder.decode("/var/lib/postgresql/data")
        >>> str(record.check_point)
        '0/16B3748'
    """

    def __init__(self, source: ControlFileSource, byte_order: ByteOrder = "little") -> None:
        """Initialize the decoder.

        Args:
            source: Where raw control file bytes come from
            byte_order: Byte order of the server that wrote the file
        """
        self._source = source
        self._byte_order = byte_order

    @property
    def byte_order(self) -> ByteOrder:
        return self._byte_order

    def path_for(self, data_dir: str | Path) -> Path:
        """Return the control file path that ``decode`` will read."""
        return self._source.path_for(data_dir)

    def decode(self, data_dir: str | Path) -> ControlRecord:
        """Read and validate the control file of a data directory.

        Raises:
            ControlFileIOError: If the file is missing, unreadable or truncated.
            IntegrityError: If the stored CRC does not match the contents.
        """
        data = self._source.read(data_dir, CONTROL_FILE_SIZE)
        return self.decode_bytes(data, path=self._source.path_for(data_dir))

    def decode_bytes(self, data: bytes, path: str | Path = "<memory>") -> ControlRecord:
        """Validate and decode a raw control file image.

        Args:
            data: Raw image; bytes past CONTROL_FILE_SIZE are ignored
            path: Where the image came from, for error messages

        Raises:
            ControlFileIOError: If fewer than CONTROL_FILE_SIZE bytes are given.
            IntegrityError: If the stored CRC does not match the contents.
        """
        if len(data) < CONTROL_FILE_SIZE:
            raise ControlFileIOError(
                f'could not read file "{path}": read {len(data)} of {CONTROL_FILE_SIZE} bytes'
            )

        if compute_crc(data) != stored_crc(data, self._byte_order):
            raise IntegrityError(CHECKSUM_MISMATCH_MESSAGE)

        return ControlRecord.from_bytes(data, self._byte_order)
