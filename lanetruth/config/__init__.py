# Copyright (c) OpenMMLab. All rights reserved.
from .build_functions import build_from_cfg
from .config import Config, ConfigDict
from .logging import get_logger, print_log
from .registry import Registry
from .root import CHECKS, HOOKS, VALIDATORS


__all__ = [
    "build_from_cfg",
    "CHECKS",
    "Config",
    "ConfigDict",
    "get_logger",
    "HOOKS",
    "print_log",
    "Registry",
    "VALIDATORS",
]
