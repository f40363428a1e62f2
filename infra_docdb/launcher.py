import logging
import os

from pulumi import get_stack, log, export

from infra_docdb.lib.base import ExportsType
from infra_docdb.lib.config import get_provider_override
from infra_docdb.lib.utils import serialize_exports
from infra_docdb.module_manager import module_manager


def run_stack(provider: str, stack_name: str) -> ExportsType:
    """Build the module named after the stack and export its outputs under the stack name

    The stack outputs then read like ``documentdb.endpoint``.

    :param provider: Provider of the module, ``infra:provider`` in the stack config takes precedence
    :param stack_name: The stack name, which is also the module name
    :return: The module's exports
    """
    provider = get_provider_override() or provider

    module = module_manager.get_module(provider, stack_name)

    exports = module.run(stack_name)

    export(stack_name, serialize_exports(exports))

    return exports


def run_active_stack(provider: str) -> ExportsType:
    """Entrypoint of a sysenv's ``infra.py``, builds the module of the selected Pulumi stack

    :param provider: A provider
    :return: The module's exports
    """
    stack = get_stack()

    log.debug(f"active stack is `{stack}`")

    return run_stack(provider, stack)


def _configure_logging() -> None:
    logging.basicConfig(level=logging.DEBUG)
    msg = "infra-docdb debug logging enabled"
    log.debug(msg)
    logging.debug(msg)


if os.getenv("INFRA_DEBUG"):
    _configure_logging()
