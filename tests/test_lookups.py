from infra_docdb.lib.discovery import ClusterRecord
from infra_docdb.modules.aws.documentdb.lookups import ExistingResources, discover_existing
from infra_docdb.modules.aws.documentdb.names import ResourceNames

NAMES = ResourceNames("docdb-cluster")


def test_resource_names():
    assert NAMES.vpc == "documentdb-vpc-docdb-cluster"
    assert NAMES.subnets == ["documentdb-subnet-docdb-cluster-0", "documentdb-subnet-docdb-cluster-1"]
    assert NAMES.internet_gateway == "documentdb-igw-docdb-cluster"
    assert NAMES.route_table == "documentdb-routetable-docdb-cluster"
    assert NAMES.security_group == "docdb-cluster-sg"
    assert NAMES.docdb_subnet_group == "docdb-cluster-subnets"
    assert NAMES.instance(1) == "docdb-cluster-1"


def test_nothing_exists(fake_discovery):
    discovery = fake_discovery()

    existing = discover_existing(discovery, NAMES)

    assert existing == ExistingResources()
    assert set(existing.desired_counts(NAMES).values()) == {1}


def test_vpc_children_are_not_searched_when_vpc_is_missing(fake_discovery):
    discovery = fake_discovery(found={NAMES.subnets[0]: "subnet-elsewhere"})

    existing = discover_existing(discovery, NAMES)

    assert existing.subnet_ids == [None, None]
    assert NAMES.subnets[0] not in discovery.lookups
    assert discovery.lookups == [NAMES.vpc, NAMES.docdb_subnet_group, NAMES.cluster_identifier]


def test_partially_existing_network(fake_discovery):
    discovery = fake_discovery(
        found={
            NAMES.vpc: "vpc-1",
            NAMES.subnets[0]: "subnet-a",
            NAMES.internet_gateway: "igw-1",
        }
    )

    existing = discover_existing(discovery, NAMES)
    counts = existing.desired_counts(NAMES)

    assert existing.vpc_id == "vpc-1"
    assert existing.subnet_ids == ["subnet-a", None]
    assert counts[NAMES.vpc] == 0
    assert counts[NAMES.subnets[0]] == 0
    assert counts[NAMES.subnets[1]] == 1
    assert counts[NAMES.internet_gateway] == 0
    assert counts[NAMES.route_table] == 1
    assert counts[NAMES.security_group] == 1


def test_existing_cluster(fake_discovery):
    record = ClusterRecord(id="docdb-cluster", endpoint="e", reader_endpoint="r", port=27017, status="available")
    discovery = fake_discovery(cluster=record)

    existing = discover_existing(discovery, NAMES)

    assert existing.cluster is record
    assert existing.desired_counts(NAMES)[NAMES.cluster_identifier] == 0
