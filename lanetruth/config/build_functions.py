import inspect
import logging
from typing import TYPE_CHECKING, Any, Optional, Union

from .config import Config, ConfigDict
from .logging import print_log


if TYPE_CHECKING:
    from .registry import Registry


def build_from_cfg(
    cfg: Union[dict, ConfigDict, Config],
    registry: "Registry",
    default_args: Optional[Union[dict, ConfigDict, Config]] = None,
) -> Any:
    """Build a module from config dict when it is a class configuration, or
    call a function from config dict when it is a function configuration.

    At least one of the ``cfg`` and ``default_args`` contains the key "type",
    which should be either str or class. If they all contain it, the key
    in ``cfg`` will be used because ``cfg`` has a higher priority than
    ``default_args``. They will be merged first and the key "type"
    will be popped up and the remaining keys will be used as initialization
    arguments.

    Examples:
        >>> from lanetruth.config import CHECKS, build_from_cfg
        >>> cfg = dict(type='SamplingToleranceCheck', max_spacing=2.0)
        >>> check = build_from_cfg(cfg, CHECKS)

    Args:
        cfg (dict or ConfigDict or Config): Config dict. It should at least
            contain the key "type".
        registry (:obj:`Registry`): The registry to search the type from.
        default_args (dict or ConfigDict or Config, optional): Default
            initialization arguments. Defaults to None.

    Returns:
        object: The constructed object.
    """
    if not isinstance(cfg, (dict, ConfigDict, Config)):
        raise TypeError(
            f"cfg should be a dict, ConfigDict or Config, but got {type(cfg)}"
        )

    if "type" not in cfg:
        if default_args is None or "type" not in default_args:
            raise KeyError(
                '`cfg` or `default_args` must contain the key "type", '
                f"but got {cfg}\n{default_args}"
            )

    if not (
        isinstance(default_args, (dict, ConfigDict, Config)) or default_args is None
    ):
        raise TypeError(
            "default_args should be a dict, ConfigDict, Config or None, "
            f"but got {type(default_args)}"
        )

    args = dict(cfg.items())
    if default_args is not None:
        for name, value in default_args.items():
            args.setdefault(name, value)

    obj_type = args.pop("type")
    if isinstance(obj_type, str):
        obj_cls = registry.get(obj_type)
        if obj_cls is None:
            raise KeyError(
                f"{obj_type} is not in the {registry.name} registry. "
                f"Please check whether the value of `{obj_type}` is "
                "correct or it was registered as expected."
            )
    # this will include classes, functions, partial functions and more
    elif callable(obj_type):
        obj_cls = obj_type
    else:
        raise TypeError(f"type must be a str or valid type, but got {type(obj_type)}")

    obj = obj_cls(**args)

    if inspect.isclass(obj_cls) or inspect.isfunction(obj_cls):
        print_log(
            f"An `{obj_cls.__name__}` instance is built from "
            "registry, and its implementation can be found in "
            f"{obj_cls.__module__}",
            logger="current",
            level=logging.DEBUG,
        )
    else:
        print_log(
            "An instance is built from registry, and its constructor " f"is {obj_cls}",
            logger="current",
            level=logging.DEBUG,
        )
    return obj
