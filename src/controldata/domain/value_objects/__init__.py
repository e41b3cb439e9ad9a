"""Value objects for the control data domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    Identifiers:
        - SystemIdentifier, TimeLineID, TransactionId, Oid: Type-safe integers
        - MultiXactId, MultiXactOffset: Multi-transaction counters
        - LogPosition: WAL address as a (xlogid, xrecoff) pair
        - EpochXid: Transaction id with its wraparound epoch

    Cluster State:
        - DBState: Cluster lifecycle state
        - DateTimeStorage, ArgumentPassing: Compile-time flag prose
        - describe_db_state: State rendering with forward-compatible fallback

    Rows:
        - FieldEntry: (label, value) display pair
"""

from controldata.domain.value_objects.cluster_state import (
    UNRECOGNIZED_STATUS,
    ArgumentPassing,
    DateTimeStorage,
    DBState,
    describe_db_state,
)
from controldata.domain.value_objects.field_entry import FieldEntry
from controldata.domain.value_objects.identifiers import (
    EpochXid,
    LogPosition,
    MultiXactId,
    MultiXactOffset,
    Oid,
    SystemIdentifier,
    TimeLineID,
    TransactionId,
)

__all__ = [
    # Identifiers
    "SystemIdentifier",
    "TimeLineID",
    "TransactionId",
    "Oid",
    "MultiXactId",
    "MultiXactOffset",
    "LogPosition",
    "EpochXid",
    # Cluster state
    "DBState",
    "DateTimeStorage",
    "ArgumentPassing",
    "UNRECOGNIZED_STATUS",
    "describe_db_state",
    # Rows
    "FieldEntry",
]
