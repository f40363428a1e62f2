from dataclasses import dataclass

from pulumi import Resource, log
from pulumi_aws import ec2, get_availability_zones

from infra_docdb.lib.guards import Guarded, guard, guarded_options
from infra_docdb.lib.network import subnet_cidrs
from infra_docdb.lib.tags import get_tags
from .config import DocumentDBArgs
from .lookups import ExistingResources
from .names import ResourceNames, SERVICE, SUBNET_COUNT

DEFAULT_ROUTE = "0.0.0.0/0"


@dataclass
class Network:
    vpc: Guarded[str, ec2.Vpc]
    subnets: list[Guarded[str, ec2.Subnet]]
    internet_gateway: Guarded[str, ec2.InternetGateway]
    route_table: Guarded[str, ec2.RouteTable]

    @property
    def guarded(self) -> list[Guarded]:
        return [self.vpc, *self.subnets, self.internet_gateway, self.route_table]


def get_placement_zones(count: int) -> list[str]:
    """
    Pick the availability zones subnets are spread across

    :param count: Number of distinct zones required
    :return: The first ``count`` available zones of the region
    """
    zones = get_availability_zones(state="available").names
    if len(zones) < count:
        raise Exception(f"{count} availability zones are required for subnet placement, region only has {zones}")
    return zones[:count]


def setup_network(
    config: DocumentDBArgs, names: ResourceNames, existing: ExistingResources, parent: Resource
) -> Network:
    """
    Declare the VPC, its two subnets, the internet gateway and the public route table

    :param config: Module configuration
    :param names: Identities of the guarded resources
    :param existing: Lookup results, empty when guards are disabled
    :param parent: Parent resource for everything declared here
    :return: The network, each piece either found or created
    """
    retain = config.guard_existing

    vpc = guard(
        names.vpc,
        existing.vpc_id,
        lambda: ec2.Vpc(
            names.vpc,
            cidr_block=config.cidr,
            enable_dns_hostnames=True,
            enable_dns_support=True,
            tags=get_tags(SERVICE, "vpc", names.cluster_identifier),
            opts=guarded_options(parent, retain),
        ),
    )
    vpc_parent = vpc.resource or parent

    zones = get_placement_zones(SUBNET_COUNT)
    cidrs = subnet_cidrs(config.cidr, SUBNET_COUNT, config.subnet_newbits)
    log.debug(f"placing subnets {cidrs} in {zones}")

    subnets = [
        guard(
            names.subnet(index),
            existing.subnet_ids[index],
            _subnet_factory(names, index, vpc.id, zones[index], cidrs[index], vpc_parent, retain),
        )
        for index in range(SUBNET_COUNT)
    ]

    igw = guard(
        names.internet_gateway,
        existing.internet_gateway_id,
        lambda: ec2.InternetGateway(
            names.internet_gateway,
            vpc_id=vpc.id,
            tags=get_tags(SERVICE, "igw", names.cluster_identifier),
            opts=guarded_options(vpc_parent, retain),
        ),
    )

    route_table = guard(
        names.route_table,
        existing.route_table_id,
        lambda: ec2.RouteTable(
            names.route_table,
            vpc_id=vpc.id,
            routes=[
                ec2.RouteTableRouteArgs(
                    cidr_block=DEFAULT_ROUTE,
                    gateway_id=igw.id,
                )
            ],
            tags=get_tags(SERVICE, "routetable", names.cluster_identifier),
            opts=guarded_options(vpc_parent, retain),
        ),
    )

    # an association can only be missing when one of its two ends is new
    for index, subnet in enumerate(subnets):
        if subnet.created or route_table.created:
            ec2.RouteTableAssociation(
                names.subnet(index),
                subnet_id=subnet.id,
                route_table_id=route_table.id,
                opts=guarded_options(subnet.resource or route_table.resource, retain),
            )

    return Network(vpc=vpc, subnets=subnets, internet_gateway=igw, route_table=route_table)


def _subnet_factory(
    names: ResourceNames, index: int, vpc_id, availability_zone: str, cidr_block: str, parent, retain: bool
):
    def create() -> ec2.Subnet:
        return ec2.Subnet(
            names.subnet(index),
            vpc_id=vpc_id,
            availability_zone=availability_zone,
            cidr_block=cidr_block,
            map_public_ip_on_launch=False,
            tags=get_tags(SERVICE, "subnet", names.subnet_tag_group(index)),
            opts=guarded_options(parent, retain),
        )

    return create
