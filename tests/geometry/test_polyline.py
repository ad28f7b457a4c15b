import numpy as np
import pytest

from lanetruth.exceptions import EmptyGeometry, OutOfRange
from lanetruth.geometry import Point3D, Polyline, segment_lengths, turn_angles


def get_l_shape():
    return Polyline([[0, 0], [3, 0], [3, 4]], name="l-shape")


def test_polyline_lengths():
    pl = get_l_shape()
    assert len(pl) == 3
    assert np.allclose(pl.segment_lengths, [3, 4])
    assert np.allclose(pl.arc_lengths, [0, 3, 7])
    assert pl.length == pytest.approx(7.0)
    assert pl.max_spacing() == pytest.approx(4.0)


def test_polyline_2d_points_get_zero_height():
    pl = get_l_shape()
    assert pl.points.shape == (3, 3)
    assert np.all(pl.points[:, 2] == 0)


def test_polyline_is_read_only():
    pl = get_l_shape()
    with pytest.raises(ValueError):
        pl.points[0, 0] = 10.0


def test_polyline_does_not_freeze_input():
    arr = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
    Polyline(arr)
    arr[0, 0] = 5.0
    assert arr[0, 0] == 5.0


def test_interpolate():
    pl = get_l_shape()
    assert pl.interpolate(0.0) == Point3D(0, 0)
    assert pl.interpolate(1.5).allclose(Point3D(1.5, 0))
    assert pl.interpolate(3.0) == Point3D(3, 0)
    assert pl.interpolate(5.0).allclose(Point3D(3, 2))
    assert pl.interpolate(7.0) == Point3D(3, 4)


def test_locate_at_points():
    pl = get_l_shape()
    assert pl.locate(0.0) == (0, 0.0)
    assert pl.locate(3.0) == (1, 0.0)
    assert pl.locate(7.0) == (2, 0.0)
    idx, frac = pl.locate(5.0)
    assert idx == 1
    assert frac == pytest.approx(0.5)


def test_arc_length_out_of_range():
    pl = get_l_shape()
    with pytest.raises(OutOfRange):
        pl.interpolate(-0.1)
    with pytest.raises(OutOfRange):
        pl.interpolate(7.1)
    # float noise at the ends is clamped
    assert pl.interpolate(7.0 + 1e-12) == Point3D(3, 4)


def test_empty_polyline():
    pl = Polyline([])
    assert pl.empty
    assert pl.length == 0.0
    with pytest.raises(EmptyGeometry):
        pl.interpolate(0.0)
    with pytest.raises(EmptyGeometry):
        pl.first


def test_single_point_polyline():
    pl = Polyline([Point3D(1, 2, 3)])
    assert pl.length == 0.0
    assert pl.interpolate(0.0) == Point3D(1, 2, 3)
    with pytest.raises(EmptyGeometry):
        pl.tangent_at(0.0)


def test_tangent_and_normal():
    pl = get_l_shape()
    assert np.allclose(pl.tangent_at(1.0), [1, 0, 0])
    assert np.allclose(pl.left_normal_at(1.0), [0, 1, 0])
    assert np.allclose(pl.tangent_at(5.0), [0, 1, 0])
    assert np.allclose(pl.left_normal_at(5.0), [-1, 0, 0])
    # the end of the line takes the direction of the last segment
    assert np.allclose(pl.tangent_at(7.0), [0, 1, 0])


def test_project():
    pl = get_l_shape()
    s, d = pl.project(Point3D(1, -2))
    assert s == pytest.approx(1.0)
    assert d == pytest.approx(2.0)
    s, d = pl.project([4, 2, 0])
    assert s == pytest.approx(5.0)
    assert d == pytest.approx(1.0)


def test_kernels():
    pts = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 1.0, 0.0], [1.0, 2.0, 0.0]])
    assert np.allclose(segment_lengths(pts), [1, 1, 1])
    assert np.allclose(turn_angles(pts), [np.pi / 2, 0.0])
    assert len(turn_angles(pts[:2])) == 0
