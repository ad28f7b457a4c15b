from . import checks, validation
from .graph import RELATIONS, DanglingReference, LaneGraph, RejectedLane
from .ingest import (
    IngestionResult,
    boundary_from_record,
    boundary_point_from_record,
    enum_from_record,
    identifier_from_record,
    ingest,
    lane_from_record,
    lanes_from_records,
    load_snapshot_json,
    vector_from_record,
)
from .validation import DEFAULT_CHECKS, SnapshotValidator, validate
from .violations import (
    Severity,
    Violation,
    ViolationEncoder,
    ViolationKind,
    format_violations,
)


__all__ = [
    "boundary_from_record",
    "boundary_point_from_record",
    "DanglingReference",
    "DEFAULT_CHECKS",
    "enum_from_record",
    "format_violations",
    "identifier_from_record",
    "ingest",
    "IngestionResult",
    "lane_from_record",
    "lanes_from_records",
    "LaneGraph",
    "load_snapshot_json",
    "RejectedLane",
    "RELATIONS",
    "Severity",
    "SnapshotValidator",
    "validate",
    "vector_from_record",
    "Violation",
    "ViolationEncoder",
    "ViolationKind",
]
