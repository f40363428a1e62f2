from abc import ABC, abstractmethod
from dataclasses import is_dataclass
from typing import Type, get_type_hints

from pulumi import ComponentResource, ResourceOptions, log

from infra_docdb.lib.base.types import ConfigType, ExportsType
from infra_docdb.lib.utils import outputs_from_exports


class BaseModule(ComponentResource, ABC):
    """
    A deployable unit of infrastructure, registered as ``pkg:infra-docdb:{provider}:{module}``.

    Subclasses implement ``build``. The type hints of ``build`` name both sides of the module's contract: the
    ``config`` parameter is the dataclass the stack configuration is mapped onto, the return annotation is the
    dataclass that ends up in the stack outputs.
    """

    @property
    @abstractmethod
    def provider(self):
        """Name of the provider"""

    def __init__(self, name: str, config: ConfigType, opts: ResourceOptions = None):
        super().__init__(self.resource_type(), name, None, opts)

        self._config = config

    @classmethod
    def resource_type(cls) -> str:
        return f"pkg:infra-docdb:{cls.provider}:{cls.__name__.lower()}"

    @classmethod
    def get_config_type(cls) -> Type[ConfigType]:
        return cls._build_hint("config")

    @classmethod
    def get_exports_type(cls) -> Type[ExportsType]:
        return cls._build_hint("return")

    @classmethod
    def _build_hint(cls, name: str) -> type:
        hint = get_type_hints(cls.build).get(name)
        if not is_dataclass(hint):
            raise TypeError(f"`{cls.__name__}.build` must annotate `{name}` with a dataclass, found `{hint}`")
        return hint

    def run(self) -> ExportsType:
        """Build the module's resources and register its exports as the component's outputs

        :return: The exports dataclass
        """
        exports = self.build(self._config)

        exports_type = self.get_exports_type()
        if not isinstance(exports, exports_type):
            raise TypeError(f"`{type(self).__name__}.build` returned `{type(exports).__name__}`, not `{exports_type.__name__}`")

        log.debug(f"registering outputs of `{self.resource_type()}`", resource=self)
        self.register_outputs(outputs_from_exports(exports))

        return exports

    @abstractmethod
    def build(self, config) -> ExportsType:
        """Declare the cloud resources

        :param config: The module's configuration dataclass
        :return: The exports dataclass
        """
