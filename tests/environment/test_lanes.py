import sys

import numpy as np
import pytest

from lanetruth.environment import BoundaryLocation, Lane, LaneType
from lanetruth.exceptions import EmptyGeometry, MalformedShape, OutOfRange


sys.path.append("tests/")
from utilities import LANE_WIDTH, get_boundary, get_lane, line_points, offset_line


def test_lane_relations_keep_order_without_duplicates():
    lane = get_lane(1, (0, 0), (10, 0), successor_ids=[7, 6, 7])
    assert lane.successor_ids == (7, 6)
    assert lane.antecessor_ids == ()


def test_lane_length():
    lane = get_lane(1, (0, 0), (30, 40))
    assert lane.length == pytest.approx(50.0)


def test_width_at():
    lane = get_lane(1, (0, 0), (20, 0), with_boundaries=True)
    for s in [0.0, 3.3, 10.0, lane.length]:
        assert lane.width_at(s) == pytest.approx(LANE_WIDTH)
    left, right = lane.boundary_offsets_at(5.0)
    assert left == pytest.approx(LANE_WIDTH / 2)
    assert right == pytest.approx(-LANE_WIDTH / 2)


def test_width_at_diagonal_lane():
    lane = get_lane(1, (0, 0), (30, 30), with_boundaries=True, width=3.0)
    assert lane.width_at(lane.length / 2) == pytest.approx(3.0)


def test_width_uses_covering_boundary():
    center = line_points((0, 0), (20, 0))
    right = get_boundary(offset_line(center, -1.5), BoundaryLocation.RIGHT)
    near_left = get_boundary(offset_line(line_points((0, 0), (10, 0)), 1.5), BoundaryLocation.LEFT)
    far_left = get_boundary(offset_line(line_points((10, 0), (20, 0)), 2.5), BoundaryLocation.LEFT)
    lane = Lane(
        1,
        lane_type=LaneType.NORMAL,
        center_line=center,
        lane_boundaries=[right, near_left, far_left],
    )
    assert lane.width_at(5.0) == pytest.approx(3.0)
    assert lane.width_at(15.0) == pytest.approx(4.0)


def test_width_out_of_range():
    lane = get_lane(1, (0, 0), (20, 0), with_boundaries=True)
    with pytest.raises(OutOfRange):
        lane.width_at(lane.length + 1.0)


def test_width_without_boundaries():
    lane = get_lane(1, (0, 0), (20, 0))
    with pytest.raises(EmptyGeometry):
        lane.width_at(1.0)


def test_boundaries_at():
    lane = get_lane(1, (0, 0), (20, 0), with_boundaries=True)
    assert len(lane.boundaries_at(BoundaryLocation.LEFT)) == 1
    assert len(lane.boundaries_at(BoundaryLocation.FREE)) == 0


def test_typed_lane_needs_center_line():
    with pytest.raises(MalformedShape):
        Lane(1, lane_type=LaneType.NORMAL, center_line=[])
    lane = Lane(2, lane_type=LaneType.UNKNOWN, center_line=[])
    assert lane.length == 0.0


def test_repeated_center_line_point_is_malformed():
    with pytest.raises(MalformedShape) as e:
        Lane(1, lane_type=LaneType.NORMAL, center_line=[[0, 0], [1, 0], [1, 0], [2, 0]])
    assert e.value.ID == 1


def test_non_finite_center_line_is_malformed():
    with pytest.raises(MalformedShape):
        Lane(1, lane_type=LaneType.NORMAL, center_line=[[0, 0], [np.nan, 0]])


def test_lane_without_id_is_malformed():
    with pytest.raises(MalformedShape):
        Lane(None, lane_type=LaneType.NORMAL, center_line=[[0, 0], [1, 0]])
