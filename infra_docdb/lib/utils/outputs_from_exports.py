from dataclasses import is_dataclass, fields
from typing import Any

from pulumi import Output, get_stack


def _map_dict(val: dict) -> dict:
    return {k: _map(v) for k, v in val.items()}


def _map(val: Any) -> Any:
    if isinstance(val, (list, tuple)):
        return [_map(v) for v in val]
    elif isinstance(val, dict):
        return _map_dict(val)
    elif is_dataclass(val) and not isinstance(val, type):
        return {f.name: _map(getattr(val, f.name)) for f in fields(val)}
    elif isinstance(val, Output):
        return val
    elif isinstance(val, type):
        raise TypeError(f"Unexpected value '{val}' of type '{type(val)}'")
    else:
        return val


def serialize_exports(exports: object) -> Any:
    """Recursively convert a module exports object into plain dicts and lists

    ``Output`` values are kept as they are so Pulumi can resolve them.

    :param exports: A module exports object, usually a dataclass instance
    :return: The exports as plain Python values
    """
    return _map(exports)


def outputs_from_exports(exports: object) -> dict:
    """Generate a serializable output from a Pulumi exports object

    The output is keyed by the stack name.

    :param exports: A module exports object and a dataclass instance
    :return: The output for the module
    """
    return {
        get_stack(): serialize_exports(exports),
    }
