"""Application layer for controldata.

The application layer orchestrates the domain services to fulfill the
single use case: read a data directory's control file as rows.

Exports:
    - ControlDataView: Decode, format and materialize with observability
    - MATERIALIZE_REQUIRED_MESSAGE, INCOMPATIBLE_DESCRIPTOR_MESSAGE:
      Messages raised for unusable result sinks
"""

from controldata.application.control_data_view import (
    INCOMPATIBLE_DESCRIPTOR_MESSAGE,
    MATERIALIZE_REQUIRED_MESSAGE,
    ControlDataView,
)

__all__ = [
    "ControlDataView",
    "INCOMPATIBLE_DESCRIPTOR_MESSAGE",
    "MATERIALIZE_REQUIRED_MESSAGE",
]
