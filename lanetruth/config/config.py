import ast
import os.path as osp
from collections import OrderedDict
from pathlib import Path
from typing import Any, Optional, Union

from addict import Dict


BASE_KEY = "_base_"
DELETE_KEY = "_delete_"


def check_file_exist(file):
    if not osp.exists(file):
        raise FileNotFoundError(file)


class Config:
    """Configuration for lanetruth validators and checks

    Example:

    from lanetruth.config import Config

    cfg = Config.fromfile('configs/validation/default.py')
    validator = VALIDATORS.build(cfg.validator)
    """

    def __init__(self, cfg_dict: dict, filename: str = None) -> None:
        super().__setattr__("_cfg_dict", ConfigDict(cfg_dict))
        super().__setattr__("_filename", filename)

    @property
    def filename(self) -> str:
        return self._filename

    def __repr__(self):
        return f"Config (path: {self.filename}): {self._cfg_dict.__repr__()}"

    def __len__(self):
        return len(self._cfg_dict)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._cfg_dict, name)

    def __getitem__(self, name):
        return self._cfg_dict.__getitem__(name)

    def __setattr__(self, name, value):
        if isinstance(value, dict):
            value = ConfigDict(value)
        self._cfg_dict.__setattr__(name, value)

    def __setitem__(self, name, value):
        if isinstance(value, dict):
            value = ConfigDict(value)
        self._cfg_dict.__setitem__(name, value)

    def __iter__(self):
        return iter(self._cfg_dict)

    def to_dict(self) -> dict:
        return self._cfg_dict.to_dict()

    @property
    def pretty_text(self) -> str:
        """Python source that rebuilds this config"""
        lines = []
        for key, value in sorted(self.to_dict().items(), key=lambda kv: str(kv[0])):
            lines.append(f"{key} = {value!r}")
        return "\n".join(lines) + "\n"

    @staticmethod
    def fromfile(filename: str):
        return Config(cfg_dict=Config._file_to_dict(filename), filename=filename)

    def dump(self, file: Optional[Union[str, Path]] = None):
        """Dump config as python text, to a file if one is given"""
        file = str(file) if isinstance(file, Path) else file
        if file is None:
            return self.pretty_text
        if not file.endswith(".py"):
            raise NotImplementedError(f"Can only dump configs to .py, not {file}")
        with open(file, "w", encoding="utf-8") as f:
            f.write(self.pretty_text)

    @staticmethod
    def _file_to_dict(filename: str) -> dict:
        filename_abs = osp.abspath(osp.expanduser(filename))
        check_file_exist(filename_abs)
        file_ext_name = osp.splitext(filename_abs)[1]
        if file_ext_name != ".py":
            raise OSError(f"Only py type configs are supported, got {file_ext_name}")

        # populate base fields
        base_cfg_dict = ConfigDict()
        for base_cfg_path in Config._get_base_files(filename_abs):
            base_cfg_path = osp.join(osp.dirname(filename_abs), base_cfg_path)
            _cfg_dict = Config._file_to_dict(base_cfg_path)
            duplicate_keys = base_cfg_dict.keys() & _cfg_dict.keys()
            if len(duplicate_keys) > 0:
                raise KeyError(
                    "Duplicate key is not allowed among bases. "
                    f"Duplicate keys: {duplicate_keys}"
                )
            base_cfg_dict.update(ConfigDict(_cfg_dict))

        with open(filename_abs, encoding="utf-8") as f:
            try:
                parsed_codes = ast.parse(f.read())
            except SyntaxError as e:
                raise SyntaxError(
                    f"There are syntax errors in config file {filename}: {e}"
                )
        parsed_codes = RemoveAssignFromAST(BASE_KEY).visit(parsed_codes)
        codeobj = compile(parsed_codes, filename_abs, mode="exec")
        global_locals_var = {BASE_KEY: base_cfg_dict}
        ori_keys = set(global_locals_var.keys())
        eval(codeobj, global_locals_var, global_locals_var)
        cfg_dict = {
            key: value
            for key, value in global_locals_var.items()
            if (key not in ori_keys and not key.startswith("__"))
        }
        return Config._merge_a_into_b(cfg_dict, base_cfg_dict.to_dict())

    @staticmethod
    def _get_base_files(filename: str):
        with open(filename, encoding="utf-8") as f:
            parsed_codes = ast.parse(f.read()).body

        def is_base_line(c):
            return (
                isinstance(c, ast.Assign)
                and isinstance(c.targets[0], ast.Name)
                and c.targets[0].id == BASE_KEY
            )

        base_code = next((c for c in parsed_codes if is_base_line(c)), None)
        if base_code is None:
            return []
        base_files = ast.literal_eval(base_code.value)
        if isinstance(base_files, str):
            base_files = [base_files]
        return base_files

    @staticmethod
    def _merge_a_into_b(a: dict, b: dict) -> dict:
        """merge dict ``a`` into dict ``b`` (non-inplace).

        Values in ``a`` overwrite ``b``. A nested dict in ``a`` holding
        ``_delete_=True`` replaces the entry of ``b`` instead of merging.

        Examples:
            >>> Config._merge_a_into_b(
            ...     dict(obj=dict(a=2)), dict(obj=dict(a=1, b=1)))
            {'obj': {'a': 2, 'b': 1}}
            >>> Config._merge_a_into_b(
            ...     dict(obj=dict(_delete_=True, a=2)), dict(obj=dict(a=1, b=1)))
            {'obj': {'a': 2}}
        """
        b = dict(b)
        for k, v in a.items():
            if isinstance(v, dict):
                v = dict(v)
                delete = v.pop(DELETE_KEY, False)
                if k in b and not delete:
                    if not isinstance(b[k], dict):
                        raise TypeError(
                            f"{k}={v} in child config cannot inherit from "
                            f"base because {k} is a dict in the child config "
                            f"but is of type {type(b[k])} in base config. "
                            f"You may set `{DELETE_KEY}=True` to ignore the "
                            f"base config."
                        )
                    b[k] = Config._merge_a_into_b(v, b[k])
                else:
                    b[k] = v
            else:
                b[k] = v
        return b


class ConfigDict(Dict):
    """Attribute-access dictionary that leaves missing keys as KeyErrors"""

    def __missing__(self, name):
        raise KeyError(name)

    def __getattr__(self, name):
        try:
            return super().__getitem__(name)
        except KeyError:
            raise AttributeError(
                f"'{self.__class__.__name__}' object has no attribute '{name}'"
            )

    @classmethod
    def _hook(cls, item):
        # keep user-defined dict subclasses as they are
        if type(item) in (dict, OrderedDict):
            return cls(item)
        elif isinstance(item, (list, tuple)):
            return type(item)(cls._hook(elem) for elem in item)
        return item


class RemoveAssignFromAST(ast.NodeTransformer):
    """Remove Assign node if the target's name match the key."""

    def __init__(self, key):
        self.key = key

    def visit_Assign(self, node):
        if isinstance(node.targets[0], ast.Name) and node.targets[0].id == self.key:
            return None
        else:
            return node
