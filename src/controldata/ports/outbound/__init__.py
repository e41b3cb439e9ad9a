"""Outbound ports - dependencies on external systems.

These define what the decoder needs from the outside world, which is
raw access to the control file.
"""

from controldata.ports.outbound.control_file_source import (
    CONTROL_FILE_RELATIVE_PATH,
    ControlFileSource,
    control_file_path,
)

__all__ = [
    "CONTROL_FILE_RELATIVE_PATH",
    "ControlFileSource",
    "control_file_path",
]
