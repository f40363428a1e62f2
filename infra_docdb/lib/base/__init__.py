from .base_module import BaseModule
from .types import ConfigType, ExportsType
