"""Outbound adapters for controldata.

Exports:
    - FileControlFileSource: Reads global/pg_control from disk
    - InMemoryControlFileSource: Serves control file images held in memory
"""

from controldata.adapters.outbound.file_control_file_source import (
    FileControlFileSource,
    InMemoryControlFileSource,
)

__all__ = [
    "FileControlFileSource",
    "InMemoryControlFileSource",
]
