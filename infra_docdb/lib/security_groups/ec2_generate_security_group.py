from typing import Optional

from pulumi import Input, ResourceOptions
from pulumi_aws import ec2

from .types import SecurityGroupIngressRule

ALLOW_ALL_EGRESS = ec2.SecurityGroupEgressArgs(
    description="Allow egress to anywhere",
    from_port=0,
    to_port=0,
    protocol="-1",
    cidr_blocks=["0.0.0.0/0"],
)


def generate_security_group(
    ingress_rules: list[SecurityGroupIngressRule],
    name: str,
    *,
    vpc_id: Input[str],
    description: str,
    tags: dict,
    opts: Optional[ResourceOptions] = None,
) -> ec2.SecurityGroup:
    """
    Create a security group from a list of ingress rules. Egress is left open.

    The group is created with ``name`` as its AWS group name so it can be found again by name.

    :param ingress_rules: Ingress rules of the group
    :param name: Resource and group name
    :param vpc_id: VPC the group belongs to
    :param description: Group description
    :param tags: Resource tags
    :param opts: Resource options
    :return: The security group
    """
    rules = [
        ec2.SecurityGroupIngressArgs(
            description=rule.description,
            from_port=rule.from_port,
            to_port=rule.to_port,
            protocol=rule.protocol,
            cidr_blocks=rule.cidr_blocks,
            self=rule.self,
        )
        for rule in ingress_rules
    ]
    return ec2.SecurityGroup(
        name,
        name=name,
        ingress=rules,
        egress=[ALLOW_ALL_EGRESS],
        description=description,
        vpc_id=vpc_id,
        tags=tags,
        opts=opts,
    )
