import logging
from importlib import import_module
from typing import Any, Callable, Dict, List, Optional, Type, Union

from rich.console import Console
from rich.table import Table

from .build_functions import build_from_cfg
from .logging import print_log
from .utils import is_seq_of


class Registry:
    """A registry to map strings to classes or functions

    Args:
        name (str): Registry name
        locations (list of str, optional): Modules imported the first time
            the registry is queried, so that their decorated classes are
            registered before lookup.

    Example:
    CHECKS = Registry('checks', locations=['lanetruth.network.checks'])

    # register check
    @CHECKS.register_module()
    class AnExampleCheck:
        pass

    # build check
    check = CHECKS.build(dict(type='AnExampleCheck'))
    """

    def __init__(self, name: str, locations: Optional[List[str]] = None) -> None:
        self._name = name
        self._module_dict: Dict[str, Type] = dict()
        self._locations = list(locations) if locations is not None else []
        self._imported = False
        self.build_func = build_from_cfg

    def __len__(self):
        return len(self._module_dict)

    def __contains__(self, key):
        return self.get(key) is not None

    def __repr__(self):
        table = Table(title=f"Registry of {self._name}")
        table.add_column("Names", justify="left", style="cyan")
        table.add_column("Objects", justify="left", style="green")

        for name, obj in sorted(self._module_dict.items()):
            table.add_row(name, str(obj))

        console = Console()
        with console.capture() as capture:
            console.print(table, end="")

        return capture.get()

    @property
    def name(self):
        return self._name

    @property
    def module_dict(self):
        return self._module_dict

    def import_from_location(self) -> None:
        """import modules from the pre-defined locations in self._locations."""
        if not self._imported:
            self._imported = True
            for loc in self._locations:
                import_module(loc)
                print_log(
                    f"Modules of the {self.name} registry have "
                    f"been automatically imported from {loc}",
                    logger="current",
                    level=logging.DEBUG,
                )

    def get(self, key: str) -> Optional[Type]:
        if not isinstance(key, str):
            raise TypeError(
                "The key argument of `Registry.get` must be a str, " f"got {type(key)}"
            )

        # lazy import the modules to register them into the registry
        self.import_from_location()
        return self._module_dict.get(key)

    def build(self, cfg: dict, *args, **kwargs) -> Any:
        """Build an instance by calling :attr:`build_func`.

        Examples:
            >>> from lanetruth.config import CHECKS
            >>> check = CHECKS.build(dict(type='SuccessorEndpointCheck', epsilon=0.1))
        """
        return self.build_func(cfg, *args, **kwargs, registry=self)

    def _register_module(
        self,
        module: Type,
        module_name: Optional[Union[str, List[str]]] = None,
        force: bool = False,
    ) -> None:
        if not callable(module):
            raise TypeError(f"module must be Callable, but got {type(module)}")

        if module_name is None:
            module_name = module.__name__
        if isinstance(module_name, str):
            module_name = [module_name]
        for name in module_name:
            if not force and name in self._module_dict:
                existed_module = self.module_dict[name]
                raise KeyError(
                    f"{name} is already registered in {self.name} "
                    f"at {existed_module.__module__}"
                )
            self._module_dict[name] = module

    def register_module(
        self,
        name: Optional[Union[str, List[str]]] = None,
        force: bool = False,
        module: Optional[Type] = None,
    ) -> Union[type, Callable]:
        """Register a module.

        It can be used as a decorator or a normal function.

        Args:
            name (str or list of str, optional): The module name to be
                registered. If not specified, the class name will be used.
            force (bool): Whether to override an existing class with the same
                name. Defaults to False.
            module (type, optional): Module class or function to be registered.
                Defaults to None.
        """
        if not isinstance(force, bool):
            raise TypeError(f"force must be a boolean, but got {type(force)}")

        # raise the error ahead of time
        if not (name is None or isinstance(name, str) or is_seq_of(name, str)):
            raise TypeError(
                "name must be None, an instance of str, or a sequence of str, "
                f"but got {type(name)}"
            )

        # use it as a normal method: x.register_module(module=SomeClass)
        if module is not None:
            self._register_module(module=module, module_name=name, force=force)
            return module

        # use it as a decorator: @x.register_module()
        def _register(module):
            self._register_module(module=module, module_name=name, force=force)
            return module

        return _register
