from __future__ import annotations

import json
from enum import Enum, IntEnum
from typing import Sequence

from rich.console import Console
from rich.table import Table


class Severity(IntEnum):
    WARNING = 1
    ERROR = 2


class ViolationKind(Enum):
    DANGLING_REFERENCE = "DanglingReference"
    TOPOLOGY_ASYMMETRY = "TopologyAsymmetry"
    GEOMETRY_TOLERANCE_EXCEEDED = "GeometryToleranceExceeded"
    DUPLICATE_IDENTIFIER = "DuplicateIdentifier"
    MALFORMED_SHAPE = "MalformedShape"
    UNKNOWN_ENUM_VALUE = "UnknownEnumValue"


class ViolationEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, Violation):
            return {"violation": o.to_dict()}
        return super().default(o)


class Violation:
    """One finding of the snapshot validator

    Attributes:
        kind (ViolationKind): machine-readable category
        severity (Severity): error or warning
        lane_ids (tuple): offending lane id(s)
        message (str): human-readable description
        check (str): name of the check that produced it
        related_ids (tuple): other ids involved, e.g. a missing reference
    """

    def __init__(
        self,
        kind: ViolationKind,
        severity: Severity,
        lane_ids: Sequence,
        message: str,
        check: str,
        related_ids: Sequence = (),
    ) -> None:
        self.kind = ViolationKind(kind)
        self.severity = Severity(severity)
        self.lane_ids = tuple(lane_ids)
        self.message = message
        self.check = check
        self.related_ids = tuple(related_ids)

    def _key(self):
        return (
            self.kind,
            self.severity,
            self.lane_ids,
            self.message,
            self.check,
            self.related_ids,
        )

    def __eq__(self, other):
        if not isinstance(other, Violation):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        return f"{self.severity.name} {self.kind.value} {list(self.lane_ids)}: {self.message}"

    def __repr__(self):
        return self.__str__()

    @property
    def is_error(self):
        return self.severity == Severity.ERROR

    def to_dict(self):
        return {
            "kind": self.kind.value,
            "severity": self.severity.name,
            "lane_ids": list(self.lane_ids),
            "message": self.message,
            "check": self.check,
            "related_ids": list(self.related_ids),
        }

    def encode(self):
        return json.dumps(self, cls=ViolationEncoder)


def format_violations(violations: Sequence[Violation], title: str = "Violations") -> str:
    """Render violations as a console table"""
    table = Table(title=f"{title} ({len(violations)})")
    table.add_column("Severity", justify="left", style="red")
    table.add_column("Kind", justify="left", style="cyan")
    table.add_column("Lanes", justify="left", style="green")
    table.add_column("Message", justify="left")

    for violation in violations:
        table.add_row(
            violation.severity.name,
            violation.kind.value,
            ", ".join(str(ID) for ID in violation.lane_ids),
            violation.message,
        )

    console = Console(width=160)
    with console.capture() as capture:
        console.print(table, end="")
    return capture.get()
