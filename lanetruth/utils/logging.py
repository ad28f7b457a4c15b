import json
import os
from typing import TYPE_CHECKING, List

from lanetruth.config import HOOKS
from lanetruth.network.violations import ViolationEncoder


if TYPE_CHECKING:
    from lanetruth.network.graph import LaneGraph
    from lanetruth.network.violations import Violation


class Logger:
    def __init__(self, output_folder: str) -> None:
        self.output_folder = output_folder
        os.makedirs(output_folder, exist_ok=True)

    def __call__(self, objects, *args, **kwargs):
        """Log objects to a folder, then return them"""
        file = self._get_file_name(objects, *args, **kwargs)
        self._write_to_file(objects, file=file)
        return objects

    def _get_file_name(self, objects, *args, **kwargs):
        raise NotImplementedError

    def _encode(self, objects):
        return objects.encode()

    def _write_to_file(self, objects, file):
        with open(file, "w") as f:
            f.write(self._encode(objects))


@HOOKS.register_module()
class ViolationLogger(Logger):
    """Write the violations of each validated snapshot to a json file"""

    prefix = "violations"
    file_ending = "json"

    def _get_file_name(self, violations: List["Violation"], graph: "LaneGraph", *args, **kwargs):
        file = os.path.join(
            self.output_folder,
            f"{self.prefix}-{graph.frame:010d}-{graph.timestamp:012.2f}.{self.file_ending}",
        )
        return file

    def _encode(self, violations):
        return json.dumps(list(violations), cls=ViolationEncoder, indent=2)
