import numpy as np
import pytest

from lanetruth.environment import (
    BoundaryColor,
    BoundaryLocation,
    BoundaryPoint,
    BoundaryType,
    LaneBoundary,
    offset_at,
)
from lanetruth.exceptions import EmptyGeometry, MalformedShape, OutOfRange
from lanetruth.geometry import Point3D


def get_inheriting_boundary():
    return LaneBoundary(
        [
            BoundaryPoint(Point3D(0, 0), width=0.1),
            BoundaryPoint(Point3D(5, 0)),
            BoundaryPoint(Point3D(10, 0), width=0.2, height=0.3),
        ],
        location=BoundaryLocation.LEFT,
        boundary_type=BoundaryType.DASHED_LINE,
        color=BoundaryColor.WHITE,
    )


def test_width_height_inheritance():
    boundary = get_inheriting_boundary()
    assert np.allclose(boundary.widths, [0.1, 0.1, 0.2])
    assert np.allclose(boundary.heights, [0.0, 0.0, 0.3])


def test_offset_before_second_point():
    sample = get_inheriting_boundary().offset_at(2.5)
    assert sample.position.allclose(Point3D(2.5, 0))
    assert sample.width == pytest.approx(0.1)
    assert sample.height == 0.0


def test_offset_between_second_and_third_point():
    sample = offset_at(get_inheriting_boundary(), 7.5)
    assert sample.position.allclose(Point3D(7.5, 0))
    assert sample.width == pytest.approx(0.1)
    assert sample.height == 0.0


def test_offset_at_ends():
    boundary = get_inheriting_boundary()
    start = boundary.offset_at(0.0)
    assert start.position == Point3D(0, 0)
    assert start.width == pytest.approx(0.1)
    end = boundary.offset_at(boundary.length)
    assert end.position == Point3D(10, 0)
    assert end.width == pytest.approx(0.2)
    assert end.height == pytest.approx(0.3)


def test_offset_out_of_range():
    boundary = get_inheriting_boundary()
    with pytest.raises(OutOfRange):
        boundary.offset_at(-1.0)
    with pytest.raises(OutOfRange):
        boundary.offset_at(10.5)


def test_offset_on_empty_boundary():
    boundary = LaneBoundary([], location=BoundaryLocation.RIGHT)
    assert len(boundary) == 0
    with pytest.raises(EmptyGeometry):
        boundary.offset_at(0.0)


def test_boundary_attributes():
    boundary = get_inheriting_boundary()
    assert boundary.is_dashed
    assert boundary.length == pytest.approx(10.0)
    assert boundary.location == BoundaryLocation.LEFT
    assert boundary.color == BoundaryColor.WHITE


def test_negative_width_is_malformed():
    with pytest.raises(MalformedShape):
        LaneBoundary([BoundaryPoint([0, 0], width=-0.1), BoundaryPoint([1, 0])])


def test_non_finite_position_is_malformed():
    with pytest.raises(MalformedShape):
        LaneBoundary([BoundaryPoint([0, 0]), BoundaryPoint([np.inf, 0])])
