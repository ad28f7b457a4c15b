import json

from lanetruth.network import Severity, Violation, ViolationKind, format_violations


def get_violation():
    return Violation(
        kind=ViolationKind.DANGLING_REFERENCE,
        severity=Severity.ERROR,
        lane_ids=[1],
        message="lane 1 lists 999 as successor but no such lane exists",
        check="DanglingReferenceCheck",
        related_ids=[999],
    )


def test_violation_equality():
    assert get_violation() == get_violation()
    assert len({get_violation(), get_violation()}) == 1
    other = get_violation()
    other.severity = Severity.WARNING
    assert other != get_violation()


def test_violation_encode():
    decoded = json.loads(get_violation().encode())
    assert decoded["violation"]["kind"] == "DanglingReference"
    assert decoded["violation"]["severity"] == "ERROR"
    assert decoded["violation"]["lane_ids"] == [1]
    assert decoded["violation"]["related_ids"] == [999]


def test_severity_order():
    assert Severity.ERROR > Severity.WARNING
    assert get_violation().is_error


def test_format_violations():
    text = format_violations([get_violation()], title="Frame 3")
    assert "Frame 3 (1)" in text
    assert "DanglingReference" in text
    assert "ERROR" in text
