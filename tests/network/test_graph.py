import sys

import pytest

from lanetruth.environment import LaneType
from lanetruth.exceptions import NotFound
from lanetruth.network import DanglingReference, LaneGraph, RejectedLane


sys.path.append("tests/")
from utilities import get_lane, get_parallel_lanes, get_split_graph, get_split_lanes


def get_chain(n, cyclic=False):
    lanes = []
    for i in range(n):
        succ = [i + 1] if i + 1 < n else ([0] if cyclic else [])
        ante = [i - 1] if i > 0 else ([n - 1] if cyclic else [])
        lanes.append(
            get_lane(i, (10 * i, 0), (10 * (i + 1), 0), successor_ids=succ, antecessor_ids=ante)
        )
    return LaneGraph.build(lanes)


def test_build_and_lookup():
    graph = get_split_graph()
    assert len(graph) == 3
    assert graph.ids == (4, 6, 7)
    assert 6 in graph
    assert 5 not in graph
    assert graph.by_id(4).ID == 4
    assert graph.get(5) is None
    assert [lane.ID for lane in graph] == [4, 6, 7]


def test_by_id_not_found():
    graph = get_split_graph()
    with pytest.raises(NotFound):
        graph.by_id(5)
    with pytest.raises(KeyError):
        graph.successors_of(5)


def test_split_queries():
    graph = get_split_graph()
    assert [lane.ID for lane in graph.successors_of(4)] == [6, 7]
    assert [lane.ID for lane in graph.antecessors_of(6)] == [4]
    assert [lane.ID for lane in graph.antecessors_of(7)] == [4]
    assert graph.successors_of(6) == []


def test_adjacency_queries():
    graph = LaneGraph.build(get_parallel_lanes())
    assert [lane.ID for lane in graph.left_adjacent_of(1)] == [2]
    assert [lane.ID for lane in graph.right_adjacent_of(3)] == [2]
    assert [lane.ID for lane in graph.left_adjacent_of(2)] == [3]
    assert graph.right_adjacent_of(1) == []


def test_dangling_references_are_skipped():
    lanes = get_split_lanes()
    lanes.append(get_lane(8, (0, 10), (20, 10), successor_ids=[999, 4]))
    graph = LaneGraph.build(lanes)
    assert [lane.ID for lane in graph.successors_of(8)] == [4]
    assert graph.missing_ids(8, "successor") == (999,)
    assert graph.missing_ids(8, "antecessor") == ()
    assert graph.dangling_references() == [DanglingReference(8, "successor", 999)]


def test_missing_ids_bad_relation():
    graph = get_split_graph()
    with pytest.raises(ValueError):
        graph.missing_ids(4, "parent")


def test_duplicate_ids_keep_first():
    first = get_lane(1, (0, 0), (10, 0))
    second = get_lane(1, (0, 5), (10, 5))
    graph = LaneGraph.build([first, second, get_lane(2, (10, 0), (20, 0))])
    assert len(graph) == 2
    assert graph.by_id(1) is first
    assert graph.duplicates == (1,)


def test_rejected_are_kept():
    rejected = [RejectedLane(9, "no center line")]
    graph = LaneGraph.build(get_split_lanes(), rejected=rejected, frame=3, timestamp=0.3)
    assert graph.rejected == tuple(rejected)
    assert graph.frame == 3
    assert graph.timestamp == 0.3


def test_lanes_of_type():
    lanes = get_split_lanes()
    lanes.append(get_lane(9, (20, 3), (40, 3), lane_type=LaneType.EXIT))
    graph = LaneGraph.build(lanes)
    assert [lane.ID for lane in graph.lanes_of_type(LaneType.EXIT)] == [9]
    assert len(graph.lanes_of_type(LaneType.NORMAL)) == 3


def test_reachable_from():
    graph = get_chain(5)
    assert [lane.ID for lane in graph.reachable_from(0, max_hops=2)] == [1, 2]
    assert graph.reachable_depths(0, max_hops=10) == {1: 1, 2: 2, 3: 3, 4: 4}
    assert graph.reachable_from(0, max_hops=0) == []
    assert graph.reachable_from(4, max_hops=3) == []


def test_reachable_from_split():
    graph = get_split_graph()
    assert [lane.ID for lane in graph.reachable_from(4, max_hops=1)] == [6, 7]


def test_reachable_from_cycle_terminates():
    graph = get_chain(4, cyclic=True)
    depths = graph.reachable_depths(2, max_hops=100)
    assert depths == {3: 1, 0: 2, 1: 3}


def test_reachable_from_negative_hops():
    graph = get_chain(2)
    with pytest.raises(ValueError):
        graph.reachable_from(0, max_hops=-1)
