from .base import as_point_array, segment_lengths, turn_angles
from .points import Point3D
from .polyline import ARC_LENGTH_TOL, Polyline


__all__ = [
    "ARC_LENGTH_TOL",
    "as_point_array",
    "Point3D",
    "Polyline",
    "segment_lengths",
    "turn_angles",
]
