from __future__ import annotations

from typing import Tuple

import numpy as np

from lanetruth.exceptions import EmptyGeometry, OutOfRange

from .base import as_point_array, segment_lengths, turn_angles
from .points import Point3D


# absorbs floating point noise when summing segment lengths
ARC_LENGTH_TOL = 1e-9


class Polyline:
    """Ordered sequence of points connected pairwise by straight segments

    The arc length of a point is the cumulative distance along the polyline
    from the first point. The polyline is immutable once built.
    """

    def __init__(self, points, name: str = "polyline") -> None:
        self.name = name
        self._points = as_point_array(points)
        self._segment_lengths = segment_lengths(self._points)
        self._points.flags.writeable = False
        self._segment_lengths.flags.writeable = False
        self._arc_lengths = np.concatenate([[0.0], np.cumsum(self._segment_lengths)])
        self._arc_lengths.flags.writeable = False

    def __str__(self):
        return f"Polyline {self.name} with {len(self)} points, length {self.length:.3f}"

    def __repr__(self):
        return self.__str__()

    def __len__(self):
        return self._points.shape[0]

    def __iter__(self):
        return (Point3D.from_array(p) for p in self._points)

    def __getitem__(self, idx: int) -> Point3D:
        return Point3D.from_array(self._points[idx])

    @property
    def points(self) -> np.ndarray:
        return self._points

    @property
    def segment_lengths(self) -> np.ndarray:
        return self._segment_lengths

    @property
    def arc_lengths(self) -> np.ndarray:
        return self._arc_lengths

    @property
    def empty(self):
        return len(self) == 0

    @property
    def length(self) -> float:
        return float(self._arc_lengths[-1]) if len(self) > 0 else 0.0

    @property
    def first(self) -> Point3D:
        if self.empty:
            raise EmptyGeometry(self.name)
        return self[0]

    @property
    def last(self) -> Point3D:
        if self.empty:
            raise EmptyGeometry(self.name)
        return self[-1]

    def max_spacing(self) -> float:
        if len(self._segment_lengths) == 0:
            return 0.0
        return float(np.max(self._segment_lengths))

    def turn_angles(self) -> np.ndarray:
        return turn_angles(self._points.copy())

    def check_arc_length(self, s: float) -> float:
        """Validate an arc length against this polyline, clamping float noise"""
        if self.empty:
            raise EmptyGeometry(self.name)
        if s < -ARC_LENGTH_TOL or s > self.length + ARC_LENGTH_TOL:
            raise OutOfRange(s, 0.0, self.length)
        return min(max(float(s), 0.0), self.length)

    def locate(self, s: float) -> Tuple[int, float]:
        """Index of the point starting the segment that brackets ``s``

        Returns the index and the fraction of the way along that segment.
        At the exact arc length of a point, that point starts the segment; at
        the total length the last point is returned with fraction zero.
        """
        s = self.check_arc_length(s)
        idx = int(np.searchsorted(self._arc_lengths, s, side="right")) - 1
        if idx >= len(self) - 1:
            return len(self) - 1, 0.0
        seg = self._segment_lengths[idx]
        frac = (s - self._arc_lengths[idx]) / seg if seg > 0 else 0.0
        return idx, float(frac)

    def interpolate(self, s: float) -> Point3D:
        idx, frac = self.locate(s)
        if frac == 0.0:
            return self[idx]
        p0 = self._points[idx]
        p1 = self._points[idx + 1]
        return Point3D.from_array(p0 + frac * (p1 - p0))

    def tangent_at(self, s: float) -> np.ndarray:
        """Unit direction of the segment bracketing ``s``"""
        idx, _ = self.locate(s)
        nonzero = np.flatnonzero(self._segment_lengths > 0)
        if len(nonzero) == 0:
            raise EmptyGeometry(f"{self.name} direction")
        # fall back to the nearest segment with a direction
        idx = int(nonzero[np.argmin(np.abs(nonzero - min(idx, len(self) - 2)))])
        d = self._points[idx + 1] - self._points[idx]
        return d / self._segment_lengths[idx]

    def left_normal_at(self, s: float) -> np.ndarray:
        """Unit normal in the x-y plane pointing left of the travel direction"""
        t = self.tangent_at(s)
        n = np.array([-t[1], t[0], 0.0])
        norm = np.linalg.norm(n)
        if norm == 0:
            raise EmptyGeometry(f"{self.name} planar direction")
        return n / norm

    def project(self, point) -> Tuple[float, float]:
        """Arc length of the nearest point on the polyline and the distance to it"""
        if self.empty:
            raise EmptyGeometry(self.name)
        p = point.array if isinstance(point, Point3D) else np.asarray(point, dtype=float)
        if len(self) == 1:
            return 0.0, float(np.linalg.norm(p - self._points[0]))
        a = self._points[:-1]
        d = self._points[1:] - a
        L2 = np.sum(d * d, axis=1)
        num = np.einsum("ij,ij->i", p - a, d)
        t = np.divide(num, L2, out=np.zeros_like(num), where=L2 > 0)
        t = np.clip(t, 0.0, 1.0)
        feet = a + t[:, None] * d
        dists = np.linalg.norm(p - feet, axis=1)
        k = int(np.argmin(dists))
        s = self._arc_lengths[k] + t[k] * self._segment_lengths[k]
        return float(s), float(dists[k])
