from functools import cached_property

from pulumi import log

from .discover_modules import discover_modules
from .lazy_module import LazyModule


class _ModuleManager:
    """
    Hands out infra-docdb modules by provider and name.

    The package is only scanned the first time a module is requested, the result looks like::

        {
            "aws": {
                "documentdb": LazyModule(provider='aws', name='documentdb'),
            },
        }
    """

    @cached_property
    def modules(self) -> dict[str, dict[str, LazyModule]]:
        modules = discover_modules()

        log.debug(f"discovered modules `{modules}`")

        return modules

    def get_provider_modules(self, provider: str) -> dict[str, LazyModule]:
        """The known modules of a provider

        :param provider: Provider name
        :return: Module names mapped to lazy modules
        """
        try:
            return self.modules[provider]
        except KeyError:
            raise ModuleNotFoundError(f"no modules for provider `{provider}`, known providers are {sorted(self.modules)}")

    def get_module(self, provider: str, module_name: str) -> LazyModule:
        """Returns the module without importing it.

        :param provider: Provider name
        :param module_name: Module name, in kebab case
        :return: A LazyModule
        """
        provider_modules = self.get_provider_modules(provider)

        if module_name not in provider_modules:
            raise ModuleNotFoundError(
                f"module `{module_name}` was not found under provider `{provider}`, "
                f"known modules are {sorted(provider_modules)}"
            )

        lazy_module = provider_modules[module_name]

        log.debug(f"accessing module `{lazy_module}`")

        return lazy_module


module_manager = _ModuleManager()
