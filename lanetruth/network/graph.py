from __future__ import annotations

import logging
from collections import Counter, deque
from typing import Any, Dict, Iterable, List, NamedTuple, Tuple

from lanetruth.config import print_log
from lanetruth.environment import Lane, LaneType
from lanetruth.exceptions import NotFound


RELATIONS = ("left_adjacent", "right_adjacent", "antecessor", "successor")


class DanglingReference(NamedTuple):
    lane_id: Any
    relation: str
    missing_id: Any


class RejectedLane(NamedTuple):
    ID: Any
    error: str


class LaneGraph:
    """Identifier-indexed lane network of a single snapshot

    The graph is read-only once built: a new snapshot gets a new graph. Build
    never fails on inconsistent topology. Duplicate identifiers keep their
    first lane, and references to lanes missing from the snapshot are
    recorded and skipped by the queries; the validator reports both.
    """

    def __init__(
        self,
        lanes: Dict[Any, Lane],
        duplicates: Tuple = (),
        rejected: Tuple[RejectedLane, ...] = (),
        frame: int = 0,
        timestamp: float = 0.0,
    ) -> None:
        self._lanes = dict(lanes)
        self._duplicates = tuple(duplicates)
        self._rejected = tuple(rejected)
        self.frame = frame
        self.timestamp = timestamp

        missing: Dict[Tuple[Any, str], Tuple] = {}
        for lane in self._lanes.values():
            for relation in RELATIONS:
                ids = getattr(lane, f"{relation}_ids")
                absent = tuple(ID for ID in ids if ID not in self._lanes)
                if absent:
                    missing[(lane.ID, relation)] = absent
        self._missing = missing

    @classmethod
    def build(
        cls,
        lanes: Iterable[Lane],
        rejected: Iterable[RejectedLane] = (),
        frame: int = 0,
        timestamp: float = 0.0,
    ) -> LaneGraph:
        index: Dict[Any, Lane] = {}
        counts = Counter()
        for lane in lanes:
            counts[lane.ID] += 1
            if lane.ID not in index:
                index[lane.ID] = lane
        duplicates = tuple(ID for ID, count in counts.items() if count > 1)
        for ID in duplicates:
            print_log(
                f"Lane id {ID} appears {counts[ID]} times in frame {frame}, "
                "keeping the first",
                logger="current",
                level=logging.WARNING,
            )
        graph = cls(index, duplicates, tuple(rejected), frame, timestamp)
        print_log(
            f"Built lane graph of {len(graph)} lanes for frame {frame} with "
            f"{len(graph.dangling_references())} dangling references",
            logger="current",
            level=logging.DEBUG,
        )
        return graph

    def __str__(self):
        return f"LaneGraph of frame {self.frame} with {len(self)} lanes"

    def __repr__(self):
        return self.__str__()

    def __len__(self):
        return len(self._lanes)

    def __iter__(self):
        return iter(self._lanes.values())

    def __contains__(self, ID):
        return ID in self._lanes

    @property
    def ids(self):
        return tuple(self._lanes.keys())

    @property
    def duplicates(self):
        return self._duplicates

    @property
    def rejected(self):
        return self._rejected

    def by_id(self, ID) -> Lane:
        try:
            return self._lanes[ID]
        except KeyError:
            raise NotFound(ID) from None

    def get(self, ID, default=None):
        return self._lanes.get(ID, default)

    def missing_ids(self, ID, relation: str) -> Tuple:
        """Identifiers a lane references under ``relation`` that are not in the graph"""
        if relation not in RELATIONS:
            raise ValueError(f"Unknown relation {relation}, expected one of {RELATIONS}")
        self.by_id(ID)
        return self._missing.get((ID, relation), ())

    def dangling_references(self) -> List[DanglingReference]:
        return [
            DanglingReference(lane_id, relation, missing_id)
            for (lane_id, relation), absent in self._missing.items()
            for missing_id in absent
        ]

    def _resolve(self, ID, relation: str) -> List[Lane]:
        ids = getattr(self.by_id(ID), f"{relation}_ids")
        return [self._lanes[other] for other in ids if other in self._lanes]

    def successors_of(self, ID) -> List[Lane]:
        return self._resolve(ID, "successor")

    def antecessors_of(self, ID) -> List[Lane]:
        return self._resolve(ID, "antecessor")

    def left_adjacent_of(self, ID) -> List[Lane]:
        return self._resolve(ID, "left_adjacent")

    def right_adjacent_of(self, ID) -> List[Lane]:
        return self._resolve(ID, "right_adjacent")

    def lanes_of_type(self, lane_type: LaneType) -> List[Lane]:
        return [lane for lane in self if lane.lane_type == lane_type]

    def reachable_depths(self, ID, max_hops: int) -> Dict[Any, int]:
        """Breadth-first search along successor edges

        Returns lane ids mapped to their hop count from the start lane, in the
        order they were reached. The start lane is not included. Visited ids
        are tracked so a cyclic snapshot still terminates.
        """
        if max_hops < 0:
            raise ValueError(f"max_hops must be non-negative, got {max_hops}")
        start = self.by_id(ID)
        depths: Dict[Any, int] = {}
        visited = {start.ID}
        frontier = deque([(start.ID, 0)])
        while frontier:
            current, hops = frontier.popleft()
            if hops >= max_hops:
                continue
            for lane in self.successors_of(current):
                if lane.ID in visited:
                    continue
                visited.add(lane.ID)
                depths[lane.ID] = hops + 1
                frontier.append((lane.ID, hops + 1))
        return depths

    def reachable_from(self, ID, max_hops: int) -> List[Lane]:
        return [self._lanes[other] for other in self.reachable_depths(ID, max_hops)]
