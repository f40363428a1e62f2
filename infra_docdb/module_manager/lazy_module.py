from dataclasses import dataclass
from functools import cached_property
from importlib import import_module
from inspect import isabstract
from typing import Type, Optional

from pulumi import log, ResourceOptions

from infra_docdb.lib.base import BaseModule, ConfigType, ExportsType
from infra_docdb.lib.config import get_stack_config

_package_name = "infra_docdb"


@dataclass(frozen=True)
class LazyModule:
    """
    A module found under ``infra_docdb/modules/{provider}/{name}``.

    Nothing is imported until the module class is first needed, so a broken module only fails the stacks that use it.
    """

    provider: str
    """Name of the provider"""

    name: str
    """Name of the python package of the module"""

    @property
    def path(self) -> str:
        return f".modules.{self.provider}.{self.name}"

    @cached_property
    def Module(self) -> Type[BaseModule]:
        log.debug(f"importing module at `{_package_name}{self.path}`")

        package = import_module(self.path, _package_name)

        candidates = [
            value
            for key, value in vars(package).items()
            if not key.startswith("_") and isinstance(value, type) and issubclass(value, BaseModule)
        ]
        concrete = [cls for cls in candidates if not isabstract(cls)]

        if len(concrete) != 1:
            raise ModuleNotFoundError(
                f"expected one concrete subclass of `{BaseModule.__name__}` in `{self.path}`, "
                f"found {[cls.__name__ for cls in concrete]}"
            )

        log.debug(f"found module class `{concrete[0].__name__}`")

        return concrete[0]

    def load_config(self, stack_name: str) -> ConfigType:
        """Map the stack's configuration onto the module's config dataclass

        :param stack_name: Stack name, also the Pulumi config namespace of the module
        :return: The module config
        """
        return get_stack_config(stack=stack_name, config_cls=self.Module.get_config_type())

    def run(self, stack_name: str, opts: Optional[ResourceOptions] = None) -> ExportsType:
        """Instantiate the module with the stack configuration and build it

        :param stack_name: Stack name
        :param opts: Optional set of ``pulumi.ResourceOptions`` to forward to ``pulumi.ComponentResource``.
        :return: The module's exports
        """
        log.debug(f"running module `{self.provider}/{self.name}` for stack `{stack_name}`")

        module = self.Module(
            name=stack_name,
            config=self.load_config(stack_name),
            opts=opts,
        )

        return module.run()
