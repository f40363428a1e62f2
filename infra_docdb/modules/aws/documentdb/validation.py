import re
from ipaddress import ip_network

from infra_docdb.lib.network import subnet_cidrs
from .config import DocumentDBArgs
from .names import SUBNET_COUNT

_WINDOW = re.compile(r"^([01]\d|2[0-3]):[0-5]\d-([01]\d|2[0-3]):[0-5]\d$")
_IDENTIFIER = re.compile(r"^[a-z](?!.*--)[a-z0-9-]{0,61}[a-z0-9]$")

# block sizes AWS accepts for a VPC
VPC_MIN_PREFIX = 16
VPC_MAX_PREFIX = 28


def validate_config(config: DocumentDBArgs) -> None:
    """
    Reject a configuration before any resource is declared

    :param config: Module configuration
    :raises ValueError: on the first invalid value
    """
    if not config.master_username:
        raise ValueError("`master_username` must be set")
    if not config.master_password:
        raise ValueError("`master_password` must be set")

    try:
        allowed = ip_network(config.allowed_ips, strict=True)
    except ValueError as err:
        raise ValueError(f"`allowed_ips` is not a valid CIDR: {err}") from err
    if allowed.version != 4:
        raise ValueError(f"`allowed_ips` `{config.allowed_ips}` must be an IPv4 range")

    try:
        vpc = ip_network(config.cidr, strict=True)
    except ValueError as err:
        raise ValueError(f"`cidr` is not a valid CIDR: {err}") from err
    if vpc.version != 4 or not VPC_MIN_PREFIX <= vpc.prefixlen <= VPC_MAX_PREFIX:
        raise ValueError(f"`cidr` `{config.cidr}` must be an IPv4 range between /{VPC_MIN_PREFIX} and /{VPC_MAX_PREFIX}")

    try:
        subnet_cidrs(config.cidr, SUBNET_COUNT, config.subnet_newbits)
    except ValueError as err:
        raise ValueError(f"`cidr` cannot hold {SUBNET_COUNT} subnets: {err}") from err

    if not _IDENTIFIER.match(config.cluster_identifier):
        raise ValueError(
            f"`cluster_identifier` `{config.cluster_identifier}` must be 2-63 lowercase letters, digits or hyphens, "
            f"start with a letter and not end with a hyphen or contain two consecutive hyphens"
        )

    if not config.instance_class.startswith("db."):
        raise ValueError(f"`instance_class` `{config.instance_class}` is not a DB instance class")

    if config.instance_count < 1:
        raise ValueError("`instance_count` must be at least 1")

    if not 1 <= config.backup_retention_period <= 35:
        raise ValueError("`backup_retention_period` must be between 1 and 35 days")

    if not _WINDOW.match(config.preferred_backup_window):
        raise ValueError(f"`preferred_backup_window` `{config.preferred_backup_window}` must look like hh24:mi-hh24:mi")
