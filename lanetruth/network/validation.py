import logging
from typing import List, Sequence

from lanetruth.config import CHECKS, VALIDATORS, ConfigDict, print_log
from lanetruth.utils.decorators import apply_hooks

from .base import BaseModule
from .graph import LaneGraph
from .violations import Violation


DEFAULT_CHECKS = (
    dict(type="DuplicateIdentifierCheck"),
    dict(type="MalformedShapeCheck"),
    dict(type="DanglingReferenceCheck"),
    dict(type="SuccessorEndpointCheck"),
    dict(type="SuccessionSymmetryCheck"),
    dict(type="AdjacencySymmetryCheck"),
    dict(type="SamplingToleranceCheck"),
    dict(type="UnknownEnumCheck"),
)


@VALIDATORS.register_module()
class SnapshotValidator(BaseModule):
    """Cross-check the topology and geometry of a lane graph

    Graph-wide checks run first, then every lane is visited in graph order and
    each check runs on it in the configured order, so the output sequence is
    reproducible. Validation only reads the graph and returns its findings as
    ``Violation`` values.

    Args:
        checks: check configs for the ``CHECKS`` registry
        epsilon: distance within which successor endpoints coincide [m]
        max_spacing: largest allowed distance between consecutive points [m]
        max_deviation: largest estimated approximation error before a vertex
            is flagged for review [m]
        ground_truth: treat UNKNOWN enum values as errors rather than warnings
    """

    def __init__(
        self,
        checks: Sequence[ConfigDict] = DEFAULT_CHECKS,
        epsilon: float = 0.05,
        max_spacing: float = 5.0,
        max_deviation: float = 0.05,
        ground_truth: bool = True,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.shared_args = dict(
            epsilon=epsilon,
            max_spacing=max_spacing,
            max_deviation=max_deviation,
            ground_truth=ground_truth,
        )
        self.checks = [self._build_check(cfg) for cfg in checks]

    def _build_check(self, cfg):
        # values set on the check itself win over the validator-wide ones
        check_cls = CHECKS.get(cfg["type"]) if isinstance(cfg["type"], str) else cfg["type"]
        if check_cls is None:
            raise KeyError(f"{cfg['type']} is not in the {CHECKS.name} registry")
        defaults = {name: self.shared_args[name] for name in check_cls.SHARED_ARGS}
        return CHECKS.build(cfg, default_args=defaults)

    @apply_hooks
    def __call__(self, graph: LaneGraph) -> List[Violation]:
        violations = []
        for check in self.checks:
            violations.extend(check.check_graph(graph))
        for lane in graph:
            for check in self.checks:
                violations.extend(check(graph, lane))
        n_errors = sum(violation.is_error for violation in violations)
        print_log(
            f"Validated {len(graph)} lanes of frame {graph.frame}: "
            f"{n_errors} errors, {len(violations) - n_errors} warnings",
            logger="current",
            level=logging.INFO,
        )
        return violations

    def validate(self, graph: LaneGraph) -> List[Violation]:
        return self(graph)


def validate(graph: LaneGraph, **kwargs) -> List[Violation]:
    """Validate a graph with the default checks"""
    return SnapshotValidator(**kwargs)(graph)
