from .boundary import (
    BoundaryColor,
    BoundaryLocation,
    BoundaryPoint,
    BoundarySample,
    BoundaryType,
    LaneBoundary,
    offset_at,
)
from .lanes import Lane, LaneFraming, LaneType


__all__ = [
    "BoundaryColor",
    "BoundaryLocation",
    "BoundaryPoint",
    "BoundarySample",
    "BoundaryType",
    "Lane",
    "LaneBoundary",
    "LaneFraming",
    "LaneType",
    "offset_at",
]
