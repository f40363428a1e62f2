from .core import (
    get_sysenv,
    get_purpose,
    get_phase,
    get_provider_and_region,
    get_stack,
    get_project,
    get_team,
    tag_namespace,
    tag_prefix,
    get_provider_override,
)
from .infra_env import infra_env, HierarchicalConfig, InfraConfigException
from .mapper import get_stack_config, redact_config
