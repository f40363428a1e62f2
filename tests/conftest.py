"""Global test configuration.

Installs Pulumi mocks before any module declares resources, and fills in the
hierarchical settings a sysenv directory would normally provide.
"""

import re
from typing import Optional

import pulumi
import pytest

from infra_docdb.lib.config import infra_env, get_sysenv
from infra_docdb.lib.discovery import ClusterRecord

ZONES = ["us-east-1a", "us-east-1b", "us-east-1c"]

SETTINGS = {
    "namespace": "ex",
    "team": "data",
    "purpose": "sandbox",
    "phase": "dev",
}

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def snake_keys(value):
    """Normalise mock resource inputs to the snake_case names used in the code"""
    if isinstance(value, dict):
        return {_CAMEL.sub("_", k).lower(): snake_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [snake_keys(v) for v in value]
    return value


class InfraMocks(pulumi.runtime.Mocks):
    def __init__(self):
        self.resources = []
        self.calls = []
        self.zones = list(ZONES)

    def reset(self):
        self.resources = []
        self.calls = []
        self.zones = list(ZONES)

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        outputs = dict(args.inputs)
        resource_id = f"{args.name}_id"

        if args.typ == "aws:docdb/cluster:Cluster":
            identifier = args.inputs.get("clusterIdentifier", args.name)
            resource_id = identifier
            outputs.update(
                endpoint=f"{identifier}.cluster-c1.us-east-1.docdb.amazonaws.com",
                readerEndpoint=f"{identifier}.cluster-ro-c1.us-east-1.docdb.amazonaws.com",
                port=args.inputs.get("port", 27017),
            )
        elif args.typ in ("aws:docdb/clusterParameterGroup:ClusterParameterGroup",):
            outputs.setdefault("name", f"{args.name}-pg")
        elif args.typ == "aws:docdb/clusterInstance:ClusterInstance":
            resource_id = args.inputs.get("identifier", resource_id)

        self.resources.append(args)
        return [resource_id, outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        self.calls.append(args)
        if args.token == "aws:index/getAvailabilityZones:getAvailabilityZones":
            return {"id": "us-east-1", "names": self.zones, "zoneIds": [f"use1-az{i}" for i in range(len(self.zones))]}
        return {}

    def of_type(self, typ: str) -> list[dict]:
        """Inputs of every declared resource of the given type token, in declaration order"""
        return [snake_keys(dict(r.inputs)) for r in self.resources if r.typ == typ]

    def names_of_type(self, typ: str) -> list[str]:
        return [r.name for r in self.resources if r.typ == typ]


MOCKS = InfraMocks()
pulumi.runtime.set_mocks(MOCKS, project="infra-docdb", stack="documentdb", preview=False)
pulumi.runtime.set_config("aws:region", "us-east-1")

infra_env.data = dict(SETTINGS)
get_sysenv.cache_clear()


class FakeDiscovery:
    """Stands in for ``ResourceDiscovery``, answering from a dict of identity -> id"""

    def __init__(self, found: Optional[dict] = None, cluster: Optional[ClusterRecord] = None):
        self.found = found or {}
        self.cluster = cluster
        self.lookups = []

    def _find(self, name: str) -> Optional[str]:
        self.lookups.append(name)
        return self.found.get(name)

    def find_vpc(self, name):
        return self._find(name)

    def find_subnet(self, name, vpc_id):
        return self._find(name)

    def find_internet_gateway(self, name, vpc_id):
        return self._find(name)

    def find_route_table(self, name, vpc_id):
        return self._find(name)

    def find_security_group(self, group_name, vpc_id):
        return self._find(group_name)

    def find_subnet_group(self, name):
        return self._find(name)

    def find_cluster(self, identifier):
        self.lookups.append(identifier)
        return self.cluster

    def find_cluster_by_endpoint(self, endpoint):
        self.lookups.append(endpoint)
        if self.cluster and endpoint in (self.cluster.endpoint, self.cluster.reader_endpoint):
            return self.cluster
        return None


@pytest.fixture(autouse=True)
def mocks():
    MOCKS.reset()
    yield MOCKS


@pytest.fixture
def fake_discovery():
    return FakeDiscovery


@pytest.fixture
def stack_config():
    """Set `documentdb:*` stack config values for one test"""
    keys = []

    def set_values(**values):
        for key, value in values.items():
            keys.append(f"documentdb:{key}")
            pulumi.runtime.set_config(f"documentdb:{key}", value)

    yield set_values

    # an unset value reads back as missing
    for key in keys:
        pulumi.runtime.set_config(key, None)
