from functools import cache
from typing import Optional

from pulumi import Config, get_stack, get_project

from .infra_env import infra_env

aws_config = Config("aws")
infra_config = Config("infra")

tag_namespace = infra_env.get("tag_namespace", "infra")
"""Resources created using the tagging library use this to prefix the standard tags.
   This differs from the Pulumi config namespace, as this is used for the actual resources, not the Pulumi config.
"""

tag_prefix = f"{tag_namespace}{infra_env.get('tag_separator', ':')}"


def get_team() -> str:
    return infra_env.require("team")


def get_provider_and_region():
    """
    Retrieve the provider and region for this program
    :return: (provider, region)
    """
    aws_region = aws_config.get("region")

    if aws_region:
        return "aws", aws_region
    else:
        raise Exception("Unknown provider! Set `aws:region` on the stack.")


def get_purpose():
    return infra_env.require("purpose")


def get_phase():
    return infra_env.require("phase")


@cache
def get_sysenv():
    """
    Returns the SysEnv name for this program
    SysEnvs are named `{namespace}-{provider}-{region}-{purpose}-{phase}`.

    An example SysEnv name is `ex-aws-us-east-1-sandbox-dev`

    Can be overridden by setting `sysenv` in your Infra.common.yaml

    :return: SysEnv name
    """
    config_sysenv = infra_env.get("sysenv")
    if config_sysenv:
        return config_sysenv

    namespace = infra_env.require("namespace")
    provider, region = get_provider_and_region()

    return f"{namespace}-{provider}-{region}-{get_purpose()}-{get_phase()}"


def get_provider_override() -> Optional[str]:
    """
    Retrieve the provider override for the current module (`infra:provider: myprovider`)

    :return: Provider name or None
    """
    return infra_config.get("provider")
