from typing import Optional

from pulumi import Input, Resource
from pulumi_aws import ec2

from infra_docdb.lib.config import get_sysenv
from infra_docdb.lib.guards import Guarded, guard, guarded_options
from infra_docdb.lib.security_groups import SecurityGroupIngressRule, generate_security_group
from infra_docdb.lib.tags import get_tags
from .names import ResourceNames, SERVICE

MONGODB_PORT = 27017


def setup_security_group(
    allowed_ips: str,
    names: ResourceNames,
    existing_id: Optional[str],
    vpc_id: Input[str],
    parent: Resource,
    retain: bool = False,
) -> Guarded[str, ec2.SecurityGroup]:
    """
    Declare the cluster's security group: MongoDB from ``allowed_ips`` in, anything out

    :param allowed_ips: CIDR allowed to reach the cluster
    :param names: Identities of the guarded resources
    :param existing_id: Id of the group if it already exists
    :param vpc_id: VPC the group belongs to
    :param parent: Parent resource
    :param retain: Keep the group in the account once a later run stops declaring it
    :return: The guarded security group
    """
    ingress_rules = [
        SecurityGroupIngressRule(
            description="MongoDB",
            from_port=MONGODB_PORT,
            to_port=MONGODB_PORT,
            protocol="tcp",
            cidr_blocks=[allowed_ips],
        ),
    ]

    return guard(
        names.security_group,
        existing_id,
        lambda: generate_security_group(
            ingress_rules=ingress_rules,
            name=names.security_group,
            vpc_id=vpc_id,
            description=f"DocumentDB access to {names.cluster_identifier} in {get_sysenv()}",
            tags=get_tags(SERVICE, "sg", names.cluster_identifier),
            opts=guarded_options(parent, retain),
        ),
    )
