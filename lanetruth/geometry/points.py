from __future__ import annotations

import numpy as np


class Point3D:
    """A point in the snapshot-global coordinate frame"""

    def __init__(self, x: float, y: float, z: float = 0.0) -> None:
        self._x = np.array([x, y, z], dtype=float)
        self._x.flags.writeable = False

    @staticmethod
    def from_array(arr) -> Point3D:
        arr = np.asarray(arr, dtype=float)
        if arr.shape == (2,):
            return Point3D(arr[0], arr[1])
        if arr.shape != (3,):
            raise ValueError(f"Cannot make a point from shape {arr.shape}")
        return Point3D(*arr)

    @property
    def x(self):
        return float(self._x[0])

    @property
    def y(self):
        return float(self._x[1])

    @property
    def z(self):
        return float(self._x[2])

    @property
    def array(self):
        return self._x

    @property
    def finite(self):
        return bool(np.all(np.isfinite(self._x)))

    def __str__(self):
        return f"Point3D({self.x}, {self.y}, {self.z})"

    def __repr__(self):
        return str(self)

    def __iter__(self):
        return iter(self._x.tolist())

    def __getitem__(self, key: int):
        return float(self._x[key])

    def __eq__(self, other):
        if not isinstance(other, Point3D):
            return NotImplemented
        return bool(np.array_equal(self._x, other._x))

    def __hash__(self):
        return hash(tuple(self._x.tolist()))

    def __sub__(self, other: Point3D) -> np.ndarray:
        return self._x - np.asarray(other.array if isinstance(other, Point3D) else other)

    def distance(self, other: Point3D) -> float:
        return float(np.linalg.norm(self - other))

    def allclose(self, other: Point3D, atol: float = 1e-8) -> bool:
        return bool(np.allclose(self._x, other.array, atol=atol, rtol=0))
