import logging
from collections import Counter
from typing import TYPE_CHECKING, List


if TYPE_CHECKING:
    from lanetruth.network.graph import LaneGraph
    from lanetruth.network.violations import Violation


from lanetruth.config import HOOKS, print_log


@HOOKS.register_module()
class ViolationSummaryHook:
    """Log how many violations of each kind a validation produced"""

    def __init__(self, verbose: bool = True, level: int = logging.INFO):
        self.verbose = verbose
        self.level = level
        self.counts = Counter()

    def __call__(
        self, violations: List["Violation"], graph: "LaneGraph", *args, **kwargs
    ) -> List["Violation"]:
        self.counts = Counter(
            (violation.kind.value, violation.severity.name) for violation in violations
        )
        if self.verbose:
            summary = ", ".join(
                f"{count} {kind} ({severity.lower()})"
                for (kind, severity), count in sorted(self.counts.items())
            )
            print_log(
                f"Frame {graph.frame}: {summary or 'no violations'}",
                logger="current",
                level=self.level,
            )
        return violations
