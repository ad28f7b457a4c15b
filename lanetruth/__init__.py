from collections.abc import Mapping

import lanetruth.config
import lanetruth.environment
import lanetruth.exceptions
import lanetruth.geometry
import lanetruth.network
import lanetruth.utils


def timestamp_from_record(value) -> float:
    """Seconds as a float from a number or a ``{"seconds", "nanos"}`` mapping"""
    if isinstance(value, Mapping):
        return float(value.get("seconds", 0)) + 1e-9 * float(value.get("nanos", 0))
    return float(value or 0.0)


class GroundTruthSnapshot:
    """Standardize the representation of one ground-truth snapshot

    Only the lanes are interpreted; everything else the snapshot carries
    (moving and stationary objects, traffic signs, ...) is kept as opaque
    records under ``other``.
    """

    def __init__(
        self, frame, timestamp, lanes=(), version=None, other=None, cfg=None
    ):
        self.frame = frame
        self.timestamp = timestamp
        self.version = version
        self.lanes = tuple(lanes)
        self.other = dict(other) if other is not None else {}
        self.cfg = cfg
        self._result = None

    @staticmethod
    def from_record(record, cfg=None, frame=None):
        record = dict(record)
        lanes = record.pop("lane", [])
        version = record.pop("version", None)
        timestamp = timestamp_from_record(record.pop("timestamp", 0.0))
        frame = record.pop("frame", 0) if frame is None else frame
        return GroundTruthSnapshot(
            frame=frame,
            timestamp=timestamp,
            lanes=lanes,
            version=version,
            other=record,
            cfg=cfg,
        )

    def __str__(self):
        return f"GroundTruthSnapshot of frame {self.frame} at {self.timestamp:.2f} s with {len(self.lanes)} lanes"

    def __repr__(self):
        return self.__str__()

    def ingest(self):
        if self._result is None:
            self._result = lanetruth.network.ingest(
                self.lanes,
                cfg=self.cfg,
                frame=self.frame,
                timestamp=self.timestamp,
            )
        return self._result

    @property
    def graph(self):
        return self.ingest().graph

    @property
    def violations(self):
        return self.ingest().violations

    @property
    def rejected(self):
        return self.ingest().rejected
