"""
Lane boundaries: the markings, edges and free lines delimiting lanes.

A boundary is an ordered sequence of boundary points. Only the position of a
point is mandatory; an unset width or height holds the value of the previous
point in the sequence, or zero if no earlier point set one. The inherited
values are resolved once at construction so that queries never re-derive them.
"""
from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple, Optional, Sequence

import numpy as np

from lanetruth.exceptions import MalformedShape
from lanetruth.geometry import Point3D, Polyline


class BoundaryLocation(IntEnum):
    UNKNOWN = 0
    OTHER = 1
    LEFT = 2
    RIGHT = 3
    FREE = 4


class BoundaryType(IntEnum):
    UNKNOWN = 0
    OTHER = 1
    NO_LINE = 2
    SOLID_LINE = 3
    DASHED_LINE = 4
    BOTTS_DOTS = 5
    ROAD_EDGE = 6
    SNOW_EDGE = 7
    GUARD_RAIL = 8
    CURB = 9
    STRUCTURE = 10


class BoundaryColor(IntEnum):
    UNKNOWN = 0
    OTHER = 1
    NONE = 2
    WHITE = 3
    YELLOW = 4
    RED = 5
    BLUE = 6
    GREEN = 7


class BoundarySample(NamedTuple):
    position: Point3D
    width: float
    height: float


class BoundaryPoint:
    def __init__(
        self, position, width: Optional[float] = None, height: Optional[float] = None
    ) -> None:
        if not isinstance(position, Point3D):
            position = Point3D.from_array(position)
        self.position = position
        self.width = None if width is None else float(width)
        self.height = None if height is None else float(height)

    def __str__(self):
        return f"BoundaryPoint at {self.position}, width={self.width}, height={self.height}"

    def __repr__(self):
        return self.__str__()


def resolve_inherited(values: Sequence[Optional[float]], default: float = 0.0) -> np.ndarray:
    """Fold a sequence of optional values, carrying the last set value forward"""
    resolved = np.empty(len(values))
    last = default
    for i, value in enumerate(values):
        if value is not None:
            last = value
        resolved[i] = last
    return resolved


class LaneBoundary:
    def __init__(
        self,
        boundary_line: Sequence[BoundaryPoint],
        location: BoundaryLocation = BoundaryLocation.UNKNOWN,
        boundary_type: BoundaryType = BoundaryType.UNKNOWN,
        color: BoundaryColor = BoundaryColor.UNKNOWN,
    ) -> None:
        self._boundary_line = tuple(boundary_line)
        self._location = BoundaryLocation(location)
        self._boundary_type = BoundaryType(boundary_type)
        self._color = BoundaryColor(color)

        for attr in ("width", "height"):
            for i, point in enumerate(self._boundary_line):
                value = getattr(point, attr)
                if value is not None and (not np.isfinite(value) or value < 0):
                    raise MalformedShape(
                        None, f"boundary point {i} has invalid {attr} {value}"
                    )
        if not all(point.position.finite for point in self._boundary_line):
            raise MalformedShape(None, "boundary has non-finite coordinates")

        self._polyline = Polyline(
            [point.position for point in self._boundary_line],
            name=f"{self._location.name.lower()} boundary",
        )
        self._widths = resolve_inherited([p.width for p in self._boundary_line])
        self._heights = resolve_inherited([p.height for p in self._boundary_line])
        self._widths.flags.writeable = False
        self._heights.flags.writeable = False

    def __str__(self):
        return (
            f"LaneBoundary ({self.location.name}, {self.boundary_type.name}, "
            f"{self.color.name}) with {len(self)} points"
        )

    def __repr__(self):
        return self.__str__()

    def __len__(self):
        return len(self._boundary_line)

    def __iter__(self):
        return iter(self._boundary_line)

    @property
    def boundary_line(self):
        return self._boundary_line

    @property
    def location(self):
        return self._location

    @property
    def boundary_type(self):
        return self._boundary_type

    @property
    def color(self):
        return self._color

    @property
    def polyline(self):
        return self._polyline

    @property
    def widths(self):
        return self._widths

    @property
    def heights(self):
        return self._heights

    @property
    def length(self):
        return self._polyline.length

    @property
    def is_dashed(self):
        return self._boundary_type == BoundaryType.DASHED_LINE

    def offset_at(self, arc_length: float) -> BoundarySample:
        """Position, width and height at an arc length along the boundary

        Position is interpolated linearly within the bracketing segment. Width
        and height step at the points: they are those of the segment's start
        point and do not interpolate.
        """
        idx, _ = self._polyline.locate(arc_length)
        return BoundarySample(
            position=self._polyline.interpolate(arc_length),
            width=float(self._widths[idx]),
            height=float(self._heights[idx]),
        )


def offset_at(boundary: LaneBoundary, arc_length: float) -> BoundarySample:
    return boundary.offset_at(arc_length)
