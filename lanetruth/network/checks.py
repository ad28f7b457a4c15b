"""
Consistency checks run by the snapshot validator.

Each check is registered in ``CHECKS`` and is called once per lane, in the
validator's configured order. Checks that look at the snapshot as a whole
implement ``check_graph``, which runs before any lane is visited. Validator-wide
settings a check accepts are listed in ``SHARED_ARGS`` so the validator can
hand down its own values.
"""
from typing import TYPE_CHECKING, List

import numpy as np

from lanetruth.config import CHECKS
from lanetruth.environment import (
    BoundaryColor,
    BoundaryLocation,
    BoundaryType,
    Lane,
    LaneFraming,
    LaneType,
)

from .graph import RELATIONS
from .violations import Severity, Violation, ViolationKind


if TYPE_CHECKING:
    from .graph import LaneGraph


class _Check:
    SHARED_ARGS = ()

    @property
    def name(self):
        return type(self).__name__

    def check_graph(self, graph: "LaneGraph") -> List[Violation]:
        return []

    def __call__(self, graph: "LaneGraph", lane: Lane) -> List[Violation]:
        return []

    def _violation(self, kind, severity, lane_ids, message, related_ids=()):
        return Violation(
            kind=kind,
            severity=severity,
            lane_ids=lane_ids,
            message=message,
            check=self.name,
            related_ids=related_ids,
        )


@CHECKS.register_module()
class DuplicateIdentifierCheck(_Check):
    def check_graph(self, graph):
        return [
            self._violation(
                ViolationKind.DUPLICATE_IDENTIFIER,
                Severity.ERROR,
                (ID,),
                f"lane id {ID} is used by more than one lane",
            )
            for ID in graph.duplicates
        ]


@CHECKS.register_module()
class MalformedShapeCheck(_Check):
    def check_graph(self, graph):
        return [
            self._violation(
                ViolationKind.MALFORMED_SHAPE,
                Severity.ERROR,
                (rejected.ID,),
                f"lane was rejected at ingestion: {rejected.error}",
            )
            for rejected in graph.rejected
        ]


@CHECKS.register_module()
class DanglingReferenceCheck(_Check):
    def __call__(self, graph, lane):
        violations = []
        for relation in RELATIONS:
            for missing in graph.missing_ids(lane.ID, relation):
                violations.append(
                    self._violation(
                        ViolationKind.DANGLING_REFERENCE,
                        Severity.ERROR,
                        (lane.ID,),
                        f"lane {lane.ID} lists {missing} as {relation} "
                        "but no such lane exists",
                        related_ids=(missing,),
                    )
                )
        return violations


@CHECKS.register_module()
class SuccessorEndpointCheck(_Check):
    """The last center-line point of a lane must meet the first of each successor

    A lane ends at every split or merge point, so at a split all successors
    start where their antecessor ends. A successor starting elsewhere means the
    lane id did not change at the split point, or the link is wrong.
    """

    SHARED_ARGS = ("epsilon",)

    def __init__(self, epsilon: float = 0.05) -> None:
        assert epsilon >= 0, epsilon
        self.epsilon = epsilon

    def __call__(self, graph, lane):
        violations = []
        if lane.center_line.empty:
            return violations
        end = lane.center_line.last
        for successor in graph.successors_of(lane.ID):
            if successor.center_line.empty:
                continue
            gap = end.distance(successor.center_line.first)
            if gap > self.epsilon:
                violations.append(
                    self._violation(
                        ViolationKind.GEOMETRY_TOLERANCE_EXCEEDED,
                        Severity.ERROR,
                        (lane.ID, successor.ID),
                        f"lane {lane.ID} ends {gap:.3f} m from the start of its "
                        f"successor {successor.ID} (epsilon {self.epsilon} m)",
                    )
                )
        return violations


@CHECKS.register_module()
class SuccessionSymmetryCheck(_Check):
    """Successor and antecessor links should be listed on both lanes"""

    def __call__(self, graph, lane):
        violations = []
        for successor in graph.successors_of(lane.ID):
            if lane.ID not in successor.antecessor_ids:
                violations.append(
                    self._violation(
                        ViolationKind.TOPOLOGY_ASYMMETRY,
                        Severity.WARNING,
                        (lane.ID, successor.ID),
                        f"lane {lane.ID} lists {successor.ID} as successor but "
                        f"{successor.ID} does not list {lane.ID} as antecessor",
                    )
                )
        for antecessor in graph.antecessors_of(lane.ID):
            if lane.ID not in antecessor.successor_ids:
                violations.append(
                    self._violation(
                        ViolationKind.TOPOLOGY_ASYMMETRY,
                        Severity.WARNING,
                        (lane.ID, antecessor.ID),
                        f"lane {lane.ID} lists {antecessor.ID} as antecessor but "
                        f"{antecessor.ID} does not list {lane.ID} as successor",
                    )
                )
        return violations


@CHECKS.register_module()
class AdjacencySymmetryCheck(_Check):
    """A left neighbour should list this lane as its right neighbour and vice versa"""

    def __call__(self, graph, lane):
        violations = []
        pairs = (
            ("left", graph.left_adjacent_of(lane.ID), "right_adjacent_ids"),
            ("right", graph.right_adjacent_of(lane.ID), "left_adjacent_ids"),
        )
        for side, neighbours, back_attr in pairs:
            back_side = back_attr.split("_")[0]
            for neighbour in neighbours:
                if lane.ID not in getattr(neighbour, back_attr):
                    violations.append(
                        self._violation(
                            ViolationKind.TOPOLOGY_ASYMMETRY,
                            Severity.WARNING,
                            (lane.ID, neighbour.ID),
                            f"lane {lane.ID} lists {neighbour.ID} as {side}-adjacent "
                            f"but {neighbour.ID} does not list {lane.ID} as "
                            f"{back_side}-adjacent",
                        )
                    )
        return violations


@CHECKS.register_module()
class SamplingToleranceCheck(_Check):
    """Point spacing and approximation error of center lines and boundaries

    The deviation of a sampled line from the true line cannot be recovered from
    the samples alone. Instead the curvature at each interior vertex,
    2 * turn angle / (sum of the adjacent segment lengths), gives the chord
    deviation of a circular arc over the longer adjacent segment,
    curvature * length**2 / 8. Vertices over ``max_deviation`` are flagged
    for review as warnings.
    """

    SHARED_ARGS = ("max_spacing", "max_deviation")

    def __init__(
        self,
        max_spacing: float = 5.0,
        max_deviation: float = 0.05,
        review_curvature: bool = True,
    ) -> None:
        assert max_spacing > 0, max_spacing
        assert max_deviation > 0, max_deviation
        self.max_spacing = max_spacing
        self.max_deviation = max_deviation
        self.review_curvature = review_curvature

    def __call__(self, graph, lane):
        violations = []
        lines = [("center line", lane.center_line)]
        for i, boundary in enumerate(lane.lane_boundaries):
            lines.append((f"boundary {i}", boundary.polyline))
        for label, polyline in lines:
            violations.extend(self._check_spacing(lane, label, polyline))
        if self.review_curvature:
            for label, polyline in lines:
                violations.extend(self._check_deviation(lane, label, polyline))
        return violations

    def _check_spacing(self, lane, label, polyline):
        seg = polyline.segment_lengths
        too_long = np.flatnonzero(seg > self.max_spacing)
        if len(too_long) == 0:
            return []
        worst = int(too_long[np.argmax(seg[too_long])])
        return [
            self._violation(
                ViolationKind.GEOMETRY_TOLERANCE_EXCEEDED,
                Severity.ERROR,
                (lane.ID,),
                f"{label} of lane {lane.ID} has {len(too_long)} segment(s) longer "
                f"than {self.max_spacing} m, longest {seg[worst]:.2f} m after "
                f"point {worst}",
            )
        ]

    def _check_deviation(self, lane, label, polyline):
        if len(polyline) < 3:
            return []
        seg = polyline.segment_lengths
        before, after = seg[:-1], seg[1:]
        span = before + after
        curvature = np.divide(
            2.0 * polyline.turn_angles(),
            span,
            out=np.zeros_like(span),
            where=span > 0,
        )
        deviation = curvature * np.maximum(before, after) ** 2 / 8.0
        flagged = np.flatnonzero(deviation > self.max_deviation)
        if len(flagged) == 0:
            return []
        worst = int(flagged[np.argmax(deviation[flagged])])
        return [
            self._violation(
                ViolationKind.GEOMETRY_TOLERANCE_EXCEEDED,
                Severity.WARNING,
                (lane.ID,),
                f"review needed: {label} of lane {lane.ID} has {len(flagged)} "
                f"vertex(es) with estimated deviation above {self.max_deviation} m, "
                f"largest {deviation[worst]:.3f} m at point {worst + 1}",
            )
        ]


@CHECKS.register_module()
class UnknownEnumCheck(_Check):
    """UNKNOWN enum values must not appear in ground truth"""

    SHARED_ARGS = ("ground_truth",)

    def __init__(self, ground_truth: bool = True) -> None:
        self.ground_truth = ground_truth

    def __call__(self, graph, lane):
        severity = Severity.ERROR if self.ground_truth else Severity.WARNING
        fields = [
            ("lane type", lane.lane_type == LaneType.UNKNOWN),
            ("lane framing", lane.framing == LaneFraming.UNKNOWN),
        ]
        for i, boundary in enumerate(lane.lane_boundaries):
            fields.extend(
                [
                    (f"boundary {i} location", boundary.location == BoundaryLocation.UNKNOWN),
                    (f"boundary {i} type", boundary.boundary_type == BoundaryType.UNKNOWN),
                    (f"boundary {i} color", boundary.color == BoundaryColor.UNKNOWN),
                ]
            )
        return [
            self._violation(
                ViolationKind.UNKNOWN_ENUM_VALUE,
                severity,
                (lane.ID,),
                f"{field} of lane {lane.ID} is UNKNOWN",
            )
            for field, unknown in fields
            if unknown
        ]
