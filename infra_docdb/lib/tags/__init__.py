from ..config import (
    tag_prefix,
    get_team,
    get_sysenv,
    get_stack,
    get_project,
    get_purpose,
    get_phase,
)


def get_name_tag(service: str, role: str, group: str = None) -> str:
    """
    The value of the `Name` tag for a resource. Existence lookups filter on this value.

    :param service: This resource's "namespace" (documentdb, subnet,...)
    :param role: The role this resource performs within the namespace (vpc, subnet, routetable,...)
    :param group: The group this resource belongs to (docdb-cluster, us-east-1a)
    :return: Name tag value
    """
    group_suffix = f"-{group}" if group else ""
    return f"{service}-{role}{group_suffix}"


def get_tags(service, role, group=None) -> dict:
    """
    Generate tag dict for resources

    example tags:
      documentdb vpc:
        Name = documentdb-vpc-docdb-cluster
               service-role-group
        infra:sysenv = ex-aws-us-east-1-sandbox-dev
        infra:service = documentdb
        infra:role = vpc
        infra:group = docdb-cluster
        infra:createdby = pulumi
        infra:team = data
        infra:project = infra-docdb
        infra:stack = documentdb
        infra:purpose = sandbox
        infra:phase = dev

      documentdb subnet in the first availability zone:
        Name = documentdb-subnet-docdb-cluster-0
        infra:role = subnet
        infra:group = docdb-cluster-0
        ...

    :param service: This resource's "namespace" (documentdb, subnet,...)
    :param role: The role this resource performs within the namespace (vpc, subnet, cluster,...)
    :param group: The group this resource belongs to (docdb-cluster). Leave unset to use "main".
    :return: Dict of tags
    """

    group_name = "main" if not group else group

    return {
        "Name": get_name_tag(service, role, group),
        f"{tag_prefix}sysenv": get_sysenv(),
        f"{tag_prefix}service": service,
        f"{tag_prefix}role": role,
        f"{tag_prefix}group": group_name,
        f"{tag_prefix}team": get_team(),
        f"{tag_prefix}createdby": "pulumi",
        f"{tag_prefix}stack": get_stack(),
        f"{tag_prefix}project": get_project(),
        f"{tag_prefix}purpose": get_purpose(),
        f"{tag_prefix}phase": get_phase(),
    }
