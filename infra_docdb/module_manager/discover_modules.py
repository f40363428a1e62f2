from pathlib import Path
from typing import Optional

from pulumi import log

import infra_docdb.modules
from .lazy_module import LazyModule


def _sub_packages(path: Path) -> list[str]:
    """Python packages directly under ``path``, ignoring private ones (leading underscore)"""
    return sorted(
        child.name
        for child in path.iterdir()
        if child.is_dir() and not child.name.startswith("_") and (child / "__init__.py").is_file()
    )


def _module_key(package_name: str) -> str:
    """Stacks are named in kebab case, packages in snake case"""
    return package_name.replace("_", "-")


def discover_modules(modules_path: Optional[Path] = None) -> dict[str, dict[str, LazyModule]]:
    """Find all modules without importing them

    A module is a package at ``infra_docdb/modules/{provider}/{module}``::

        # infra_docdb
        # └── modules
        #     └── aws
        #         └── documentdb

        {
            "aws": {
                "documentdb": LazyModule(provider='aws', name='documentdb'),
            },
        }

    :param modules_path: Directory holding the provider packages, defaults to ``infra_docdb/modules``
    :return: A mapping of providers to mappings of module names to lazy modules
    """
    modules_path = modules_path or Path(infra_docdb.modules.__file__).parent

    log.debug(f"discovering modules in `{modules_path}`")

    return {
        provider: {
            _module_key(package_name): LazyModule(provider, package_name)
            for package_name in _sub_packages(modules_path / provider)
        }
        for provider in _sub_packages(modules_path)
    }
