import logging
import sys
from collections import UserDict
from pathlib import Path
from typing import Optional

import hiyapyco

logger = logging.getLogger(__name__)


class InfraConfigException(Exception):
    def __init__(self, key):
        super().__init__(f"Missing required configuration variable '{key}'")


class HierarchicalConfig(UserDict):
    """
    HierarchicalConfig is a UserDict that automatically loads configuration from a tiered set of config files.

    This class will load `Infra.common.yaml` from the directory of the entrypoint that calls this class, and will
    walk the filesystem upwards a configurable number of times to find other `Infra.common.yaml` files.

    The discovered files will be merged using a YAML object merger (HiYaPyCo) that supports Jinja2 syntax. Files
    closer to the entrypoint win.

    Example usage:
        from infra_docdb.lib.config import infra_env

        infra_env.get("myconfig", "somedefault")
        infra_env.require("myotherconfig")

    """

    def __init__(self, limit=5, filename="Infra.common.yaml", entrypoint: Optional[Path] = None):
        """
        Create a HierarchicalConfig UserDict

        :param limit: Max parent directories to walk
        :param filename: Filename to find and merge
        :param entrypoint: File to start the walk from, defaults to the `__main__` module
        """
        super().__init__()
        self.filename = filename
        configs = list(reversed(self._discover_configs(limit, entrypoint)))
        logger.debug("Found configs in %s", configs)

        if configs:
            # expose the data from the loader as our UserDict backing store
            self.data = hiyapyco.load([str(path) for path in configs], method=hiyapyco.METHOD_MERGE) or {}

    def require(self, key: str) -> any:
        """
        Require a key from the configuration and return it. If not found, throw an `InfraConfigException`

        :param key: Key string to require from the configuration
        :return: Object
        """
        if v := self.get(key):
            return v
        else:
            raise InfraConfigException(key)

    def _discover_configs(self, limit, entrypoint: Optional[Path] = None) -> list[Path]:
        """
        Walk upwards from the entrypoint and collect every file matching the name

        :param limit: Max parent directories to walk
        :param entrypoint: File to start the walk from
        :return: Paths ordered from the closest to the furthest
        """
        config_paths = []

        if entrypoint is None:
            main_module = sys.modules["__main__"]
            if not hasattr(main_module, "__file__"):
                logger.debug("No __file__ for __main__, skipping config discovery")
                return config_paths
            entrypoint = Path(main_module.__file__)

        entrypoint = entrypoint.absolute()
        logger.debug("Entrypoint: %s", entrypoint)

        limited_parents = list(entrypoint.parents)[:limit]
        for path in limited_parents:
            logger.debug("Looking in [%s] for [%s]", path, self.filename)
            maybe_config = path / self.filename
            if maybe_config.exists():
                logger.debug("Detected config [%s]", maybe_config)
                config_paths.append(maybe_config)

            # stop at the project root, a config file may live there but not above it
            if (path / ".git").is_dir():
                logger.debug("Found project root, breaking")
                break

        return config_paths


# Singleton so configuration is only loaded and merged once
infra_env = HierarchicalConfig()
