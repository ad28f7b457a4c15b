"""
Turn decoded ground-truth records into lanes, a lane graph and its violations.

Records are plain mappings that use the field names of the ground-truth
schema, as produced by the serialization layer (e.g. a protobuf message
converted with its field names preserved). Identifiers may be bare values or
``{"value": ...}`` mappings, vectors may be ``{"x", "y", "z"}`` mappings or
sequences, and enum values may be integers or (prefixed) member names.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from enum import IntEnum
from pathlib import Path
from typing import Any, Iterable, List, NamedTuple, Optional, Sequence, Type, Union

from lanetruth.config import VALIDATORS, print_log
from lanetruth.environment import (
    BoundaryColor,
    BoundaryLocation,
    BoundaryPoint,
    BoundaryType,
    Lane,
    LaneBoundary,
    LaneFraming,
    LaneType,
)
from lanetruth.exceptions import MalformedShape
from lanetruth.geometry import Point3D

from .graph import LaneGraph, RejectedLane
from .violations import Violation


ENUM_PREFIXES = {
    LaneType: "TYPE_",
    LaneFraming: "LANE_FRAMING_",
    BoundaryLocation: "BOUNDARY_LOCATION_",
    BoundaryType: "TYPE_",
    BoundaryColor: "COLOR_",
}


class IngestionResult(NamedTuple):
    graph: LaneGraph
    violations: List[Violation]
    rejected: tuple


def identifier_from_record(value):
    if isinstance(value, Mapping):
        value = value.get("value")
    # 64-bit ids arrive as strings from JSON exports
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    return value


def enum_from_record(enum_cls: Type[IntEnum], value) -> IntEnum:
    """Decode an enum value; anything unrecognised becomes UNKNOWN"""
    if value is None:
        return enum_cls(0)
    if isinstance(value, str):
        name = value.strip().upper()
        prefix = ENUM_PREFIXES.get(enum_cls, "")
        if name.startswith(prefix):
            name = name[len(prefix):]
        return enum_cls.__members__.get(name, enum_cls(0))
    try:
        return enum_cls(int(value))
    except (TypeError, ValueError):
        return enum_cls(0)


def vector_from_record(value) -> Point3D:
    if isinstance(value, Mapping):
        return Point3D(
            float(value.get("x", 0.0)),
            float(value.get("y", 0.0)),
            float(value.get("z", 0.0)),
        )
    return Point3D.from_array(value)


def boundary_point_from_record(record: Mapping) -> BoundaryPoint:
    return BoundaryPoint(
        position=vector_from_record(record.get("position", {})),
        width=record.get("boundary_width"),
        height=record.get("boundary_height"),
    )


def boundary_from_record(record: Mapping) -> LaneBoundary:
    return LaneBoundary(
        [boundary_point_from_record(p) for p in record.get("boundary_line", [])],
        location=enum_from_record(BoundaryLocation, record.get("location")),
        boundary_type=enum_from_record(BoundaryType, record.get("type")),
        color=enum_from_record(BoundaryColor, record.get("color")),
    )


def _ids(record: Mapping, field: str) -> List:
    return [identifier_from_record(v) for v in record.get(field, [])]


def lane_from_record(record: Mapping) -> Lane:
    ID = identifier_from_record(record.get("id"))
    try:
        hash(ID)
    except TypeError:
        raise MalformedShape(None, f"lane id {ID!r} is not a valid identifier") from None
    try:
        return Lane(
            ID,
            lane_type=enum_from_record(LaneType, record.get("type")),
            center_line=[vector_from_record(v) for v in record.get("center_line", [])],
            lane_boundaries=[
                boundary_from_record(b) for b in record.get("lane_boundary", [])
            ],
            left_adjacent_ids=_ids(record, "left_adjacent_lane_id"),
            right_adjacent_ids=_ids(record, "right_adjacent_lane_id"),
            antecessor_ids=_ids(record, "antecessor_lane_id"),
            successor_ids=_ids(record, "successor_lane_id"),
            framing=enum_from_record(LaneFraming, record.get("lane_framing")),
        )
    except MalformedShape as e:
        raise MalformedShape(ID, e.reason) from e
    except (TypeError, ValueError) as e:
        raise MalformedShape(ID, f"cannot decode lane: {e}") from e


def ingest(
    records: Iterable[Union[Mapping, Lane]],
    cfg: Optional[Mapping] = None,
    frame: int = 0,
    timestamp: float = 0.0,
) -> IngestionResult:
    """Build the lane graph of one snapshot and validate it

    Lanes that fail their own shape checks are left out of the graph and
    listed as rejected; the rest of the snapshot is still ingested.

    Args:
        records: lane records, or already-built ``Lane`` objects
        cfg: ``VALIDATORS`` config, defaults to ``dict(type="SnapshotValidator")``
        frame: frame number of the snapshot
        timestamp: snapshot time [s]
    """
    lanes, rejected = [], []
    for record in records:
        if isinstance(record, Lane):
            lanes.append(record)
            continue
        try:
            lanes.append(lane_from_record(record))
        except MalformedShape as e:
            rejected.append(RejectedLane(e.ID, e.reason))
            print_log(
                f"Rejected lane {e.ID} of frame {frame}: {e.reason}",
                logger="current",
                level=logging.WARNING,
            )
    graph = LaneGraph.build(lanes, rejected=rejected, frame=frame, timestamp=timestamp)
    validator = VALIDATORS.build(cfg if cfg is not None else dict(type="SnapshotValidator"))
    violations = validator(graph)
    return IngestionResult(graph, violations, tuple(rejected))


def load_snapshot_json(source: Union[str, Path]) -> Any:
    """Read a ground-truth JSON document from a path or a JSON string

    A ``Path`` is always read as a file. A ``str`` is parsed as JSON when its
    first character after whitespace and a byte order mark is ``{`` or ``[``,
    and is opened as a file path otherwise.
    """
    if not isinstance(source, Path):
        text = source.lstrip("\ufeff \t\r\n")
        if text.startswith(("{", "[")):
            return json.loads(text)
    with open(source, encoding="utf-8-sig") as f:
        return json.load(f)


def lanes_from_records(records: Sequence[Mapping]) -> List[Lane]:
    """Decode lanes, raising on the first malformed one"""
    return [lane_from_record(record) for record in records]
