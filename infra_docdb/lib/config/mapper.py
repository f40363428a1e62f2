import json
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Type, Any, get_type_hints

import pulumi
from dacite import from_dict, Config
from pulumi import log, runtime

from infra_docdb.lib.base import ConfigType

_REDACTED = "[secret]"
_SENSITIVE_WORDS = ("password", "secret", "token")


def _parse_args_value(value: Any) -> Any:
    """Parse and return json values if valid json, else return original value

    :param value: A potential json string
    :return: Parsed json object or raw arg
    """
    try:
        return json.loads(value)
    except (json.decoder.JSONDecodeError, TypeError):
        return value


def _string_fields(config_cls: Type[ConfigType]) -> set[str]:
    """Names of the top-level fields typed as ``str``, their values must never be json decoded"""
    if not is_dataclass(config_cls):
        return set()
    hints = get_type_hints(config_cls)
    return {f.name for f in fields(config_cls) if hints.get(f.name) is str}


def _is_sensitive(full_key: str) -> bool:
    key = full_key.lower()
    return runtime.config.is_config_secret(full_key) or any(word in key for word in _SENSITIVE_WORDS)


def redact_config(stack: str, config: dict) -> dict:
    """Copy of a raw stack config that is safe to log

    :param stack: Name of the stack
    :param config: Raw stack config
    :return: dict with secret values replaced
    """
    return {k: _REDACTED if _is_sensitive(f"{stack}:{k}") else v for k, v in config.items()}


def get_raw_stack_config(stack: str, config_cls: Type[ConfigType]) -> dict:
    """Read every field of ``config_cls`` from the stack's Pulumi config namespace

    Unset fields are left out so the dataclass defaults apply.

    :param stack: Name of the stack, also the Pulumi config namespace
    :param config_cls: The dataclass for the config, its ``str`` fields are kept verbatim
    :return: dict
    """
    stack_config = pulumi.Config(stack)
    verbatim = _string_fields(config_cls)

    config = {}
    for f in fields(config_cls):
        value = stack_config.get(f.name)
        if value is None:
            continue
        config[f.name] = value if f.name in verbatim else _parse_args_value(value)

    log.debug(f"config dict for stack `{stack}` is {redact_config(stack, config)}")

    return config


def get_stack_config(stack: str, config_cls: Type[ConfigType]) -> ConfigType:
    """Get a stack config in dataclass form

    Uses `dacite <https://github.com/konradhalas/dacite>`_ to map dict to dataclass.

    :param stack: Name of the stack
    :param config_cls: The dataclass for the config
    :return: The stack config expressed in the module's config dataclass
    """
    raw_config = get_raw_stack_config(stack, config_cls)

    config = from_dict(
        data_class=config_cls,
        data=raw_config,
        config=Config(
            cast=[Enum],
            strict=True,
        ),
    )

    log.debug(f"config for stack `{stack}` is {config}")

    return config
