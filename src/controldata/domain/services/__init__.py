"""Domain services for control data.

Services implement the decode and format logic. They depend only on
ports and domain types, never on infrastructure.
"""

from controldata.domain.services.control_file_decoder import (
    CHECKSUM_MISMATCH_MESSAGE,
    ControlFileDecoder,
)
from controldata.domain.services.field_formatter import (
    FIELD_COUNT,
    FIELD_LABELS,
    FieldFormatter,
    entries_by_label,
)

__all__ = [
    "CHECKSUM_MISMATCH_MESSAGE",
    "ControlFileDecoder",
    "FIELD_COUNT",
    "FIELD_LABELS",
    "FieldFormatter",
    "entries_by_label",
]
