from dataclasses import dataclass, field
from typing import Optional

from pulumi import log

from infra_docdb.lib.discovery import ClusterRecord, ResourceDiscovery
from infra_docdb.lib.guards import desired_count
from .names import ResourceNames, SUBNET_COUNT


@dataclass
class ExistingResources:
    """
    Lookup result for every guarded resource. ``None`` means the resource has to be created.
    """

    vpc_id: Optional[str] = None
    subnet_ids: list[Optional[str]] = field(default_factory=lambda: [None] * SUBNET_COUNT)
    internet_gateway_id: Optional[str] = None
    route_table_id: Optional[str] = None
    security_group_id: Optional[str] = None
    subnet_group_name: Optional[str] = None
    cluster: Optional[ClusterRecord] = None

    def desired_counts(self, names: ResourceNames) -> dict[str, int]:
        """
        How many copies of each guarded resource will be declared, keyed by the resource's identity
        """
        counts = {names.vpc: desired_count(self.vpc_id)}
        counts.update({name: desired_count(subnet_id) for name, subnet_id in zip(names.subnets, self.subnet_ids)})
        counts[names.internet_gateway] = desired_count(self.internet_gateway_id)
        counts[names.route_table] = desired_count(self.route_table_id)
        counts[names.security_group] = desired_count(self.security_group_id)
        counts[names.docdb_subnet_group] = desired_count(self.subnet_group_name)
        counts[names.cluster_identifier] = desired_count(self.cluster)
        return counts


def discover_existing(discovery: ResourceDiscovery, names: ResourceNames) -> ExistingResources:
    """
    Run the existence lookups for every guarded resource

    Resources inside the VPC are only searched for when the VPC itself exists, a VPC about to be created is empty.

    :param discovery: Lookup client
    :param names: Identities to search for
    :return: What already exists
    """
    existing = ExistingResources(
        vpc_id=discovery.find_vpc(names.vpc),
        subnet_group_name=discovery.find_subnet_group(names.docdb_subnet_group),
        cluster=discovery.find_cluster(names.cluster_identifier),
    )

    if existing.vpc_id:
        existing.subnet_ids = [discovery.find_subnet(name, existing.vpc_id) for name in names.subnets]
        existing.internet_gateway_id = discovery.find_internet_gateway(names.internet_gateway, existing.vpc_id)
        existing.route_table_id = discovery.find_route_table(names.route_table, existing.vpc_id)
        existing.security_group_id = discovery.find_security_group(names.security_group, existing.vpc_id)

    log.debug(f"existing resources for `{names.cluster_identifier}` are {existing}")

    return existing
