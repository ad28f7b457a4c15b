from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from lanetruth.exceptions import EmptyGeometry, MalformedShape
from lanetruth.geometry import Point3D, Polyline

from .boundary import BoundaryLocation, LaneBoundary


# slack when deciding whether a boundary's extent covers a center-line position
COVERAGE_TOL = 1e-6


class LaneType(IntEnum):
    UNKNOWN = 0
    OTHER = 1
    NORMAL = 2
    EMERGENCY = 3
    ENTRANCE = 4
    EXIT = 5
    HIGH_OCCUPANCY_VEHICLE = 6
    PARKING = 7


class LaneFraming(IntEnum):
    UNKNOWN = 0
    OTHER = 1
    OPEN = 2
    TUNNEL = 3
    BRIDGE = 4


def ordered_ids(ids: Iterable) -> tuple:
    """Identifier set that keeps first-seen order"""
    return tuple(dict.fromkeys(ids))


class Lane:
    """A lane segment of the road network

    The direction of the center line is the direction of travel. Any lane
    starts and ends at a split or merge point, so the related lanes are kept
    as sets of identifiers: left and right adjacent lanes (several when the
    adjacent side splits at a different position), antecessors and
    successors. Relations are not resolved here; see ``LaneGraph``.
    """

    def __init__(
        self,
        ID,
        lane_type: LaneType = LaneType.UNKNOWN,
        center_line: Sequence = (),
        lane_boundaries: Sequence[LaneBoundary] = (),
        left_adjacent_ids: Iterable = (),
        right_adjacent_ids: Iterable = (),
        antecessor_ids: Iterable = (),
        successor_ids: Iterable = (),
        framing: LaneFraming = LaneFraming.UNKNOWN,
    ) -> None:
        if ID is None:
            raise MalformedShape(None, "lane has no id")
        self._ID = ID
        self._lane_type = LaneType(lane_type)
        self._framing = LaneFraming(framing)
        try:
            self._center_line = Polyline(center_line, name=f"center line of lane {ID}")
        except ValueError as e:
            raise MalformedShape(ID, str(e)) from e
        self._lane_boundaries = tuple(lane_boundaries)
        for boundary in self._lane_boundaries:
            assert isinstance(boundary, LaneBoundary), type(boundary)
        self._left_adjacent_ids = ordered_ids(left_adjacent_ids)
        self._right_adjacent_ids = ordered_ids(right_adjacent_ids)
        self._antecessor_ids = ordered_ids(antecessor_ids)
        self._successor_ids = ordered_ids(successor_ids)
        self._check_shape()

        # longitudinal extent of each boundary projected onto the center line
        self._coverage: List[Tuple[LaneBoundary, float, float]] = []
        if not self._center_line.empty:
            for boundary in self._lane_boundaries:
                if boundary.polyline.empty:
                    continue
                s0, _ = self._center_line.project(boundary.polyline.first)
                s1, _ = self._center_line.project(boundary.polyline.last)
                self._coverage.append((boundary, min(s0, s1), max(s0, s1)))

    def _check_shape(self):
        center = self._center_line
        if center.empty and self._lane_type != LaneType.UNKNOWN:
            raise MalformedShape(
                self.ID, f"{self._lane_type.name} lane has an empty center line"
            )
        if not np.all(np.isfinite(center.points)):
            raise MalformedShape(self.ID, "center line has non-finite coordinates")
        if np.any(center.segment_lengths <= 0):
            idx = int(np.flatnonzero(center.segment_lengths <= 0)[0])
            raise MalformedShape(
                self.ID,
                f"center line arc length does not increase after point {idx}",
            )

    def __str__(self):
        return (
            f"Lane {self.ID} ({self.lane_type.name}) of length {self.length:.2f}, "
            f"successors {list(self.successor_ids)}"
        )

    def __repr__(self):
        return self.__str__()

    @property
    def ID(self):
        return self._ID

    @property
    def lane_type(self):
        return self._lane_type

    @property
    def framing(self):
        return self._framing

    @property
    def center_line(self) -> Polyline:
        return self._center_line

    @property
    def lane_boundaries(self):
        return self._lane_boundaries

    @property
    def left_adjacent_ids(self):
        return self._left_adjacent_ids

    @property
    def right_adjacent_ids(self):
        return self._right_adjacent_ids

    @property
    def antecessor_ids(self):
        return self._antecessor_ids

    @property
    def successor_ids(self):
        return self._successor_ids

    @property
    def length(self) -> float:
        return self._center_line.length

    def boundaries_at(self, location: BoundaryLocation) -> List[LaneBoundary]:
        return [b for b in self._lane_boundaries if b.location == location]

    def _covering_boundary(
        self, s: float, location: BoundaryLocation, center: Point3D
    ) -> LaneBoundary:
        best, best_key = None, None
        for boundary, lo, hi in self._coverage:
            if boundary.location != location:
                continue
            covers = lo - COVERAGE_TOL <= s <= hi + COVERAGE_TOL
            _, dist = boundary.polyline.project(center)
            key = (not covers, dist)
            if best_key is None or key < best_key:
                best, best_key = boundary, key
        if best is None:
            raise EmptyGeometry(f"{location.name.lower()} boundary of lane {self.ID}")
        return best

    def boundary_offsets_at(self, s: float) -> Tuple[float, float]:
        """Signed lateral offsets of the left and right boundaries at ``s``

        Offsets are measured along the center line's left-pointing normal, so a
        left boundary normally has a positive offset and a right one negative.
        """
        s = self._center_line.check_arc_length(s)
        center = self._center_line.interpolate(s)
        normal = self._center_line.left_normal_at(s)
        offsets = []
        for location in (BoundaryLocation.LEFT, BoundaryLocation.RIGHT):
            boundary = self._covering_boundary(s, location, center)
            s_boundary, _ = boundary.polyline.project(center)
            sample = boundary.offset_at(s_boundary)
            offsets.append(float(np.dot(sample.position - center, normal)))
        return offsets[0], offsets[1]

    def width_at(self, s: float) -> float:
        left, right = self.boundary_offsets_at(s)
        return left - right
