import numpy as np
from numba import jit

from .points import Point3D


@jit(nopython=True, fastmath=False)
def segment_lengths(points):
    """Euclidean length of each segment of an (N, 3) point array"""
    n = points.shape[0]
    out = np.zeros(max(n - 1, 0))
    for i in range(n - 1):
        d = points[i + 1] - points[i]
        out[i] = np.sqrt(np.sum(d * d))
    return out


@jit(nopython=True, fastmath=False)
def turn_angles(points):
    """Angle in radians between consecutive segments at each interior vertex

    Vertices next to a zero-length segment get an angle of zero.
    """
    n = points.shape[0]
    out = np.zeros(max(n - 2, 0))
    for i in range(1, n - 1):
        a = points[i] - points[i - 1]
        b = points[i + 1] - points[i]
        na = np.sqrt(np.sum(a * a))
        nb = np.sqrt(np.sum(b * b))
        if na == 0.0 or nb == 0.0:
            continue
        c = np.sum(a * b) / (na * nb)
        if c > 1.0:
            c = 1.0
        elif c < -1.0:
            c = -1.0
        out[i - 1] = np.arccos(c)
    return out


def as_point_array(points) -> np.ndarray:
    """Coerce points into a contiguous float (N, 3) array; 2D points get z=0"""
    if not isinstance(points, np.ndarray):
        points = [p.array if isinstance(p, Point3D) else p for p in points]
    arr = np.asarray(points, dtype=float)
    if arr.size == 0:
        return np.zeros((0, 3))
    if arr.ndim != 2 or arr.shape[1] not in (2, 3):
        raise ValueError(f"Points must be of shape (N, 2) or (N, 3), got {arr.shape}")
    if arr.shape[1] == 2:
        arr = np.hstack([arr, np.zeros((arr.shape[0], 1))])
    return np.array(arr, dtype=float, order="C")
