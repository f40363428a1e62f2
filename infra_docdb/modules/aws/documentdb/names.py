from dataclasses import dataclass

from infra_docdb.lib.tags import get_name_tag

SERVICE = "documentdb"
SUBNET_COUNT = 2


@dataclass
class ResourceNames:
    """
    External identity of every guarded resource of a cluster. Creation tags and existence lookups both use these.
    """

    cluster_identifier: str

    @property
    def vpc(self) -> str:
        return get_name_tag(SERVICE, "vpc", self.cluster_identifier)

    def subnet(self, index: int) -> str:
        return get_name_tag(SERVICE, "subnet", self.subnet_tag_group(index))

    def subnet_tag_group(self, index: int) -> str:
        """Tag group of the subnet at `index`"""
        return f"{self.cluster_identifier}-{index}"

    @property
    def subnets(self) -> list[str]:
        return [self.subnet(index) for index in range(SUBNET_COUNT)]

    @property
    def internet_gateway(self) -> str:
        return get_name_tag(SERVICE, "igw", self.cluster_identifier)

    @property
    def route_table(self) -> str:
        return get_name_tag(SERVICE, "routetable", self.cluster_identifier)

    @property
    def security_group(self) -> str:
        return f"{self.cluster_identifier}-sg"

    @property
    def docdb_subnet_group(self) -> str:
        return f"{self.cluster_identifier}-subnets"

    def instance(self, index: int) -> str:
        return f"{self.cluster_identifier}-{index}"
