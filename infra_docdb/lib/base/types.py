from typing import TypeVar

ConfigType = TypeVar("ConfigType")
"""A module's configuration dataclass"""

ExportsType = TypeVar("ExportsType")
"""A module's exports dataclass (or list of them)"""
