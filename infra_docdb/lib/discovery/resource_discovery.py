import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import AmbiguousLookupError, LookupFailedError
from .types import ClusterRecord

logger = logging.getLogger(__name__)

_SUBNET_GROUP_NOT_FOUND = "DBSubnetGroupNotFoundFault"
_CLUSTER_NOT_FOUND = "DBClusterNotFoundFault"
_DOCDB_ENGINE = "docdb"


def _filter(name: str, value: str) -> dict:
    return {"Name": name, "Values": [value]}


def _cluster_record(cluster: dict) -> ClusterRecord:
    return ClusterRecord(
        id=cluster["DBClusterIdentifier"],
        endpoint=cluster.get("Endpoint"),
        reader_endpoint=cluster.get("ReaderEndpoint"),
        port=cluster.get("Port"),
        status=cluster.get("Status"),
    )


class ResourceDiscovery:
    """
    Read-only lookups for resources that may already exist in the account.

    Every ``find_*`` method returns ``None`` when nothing matches, the resource id when exactly one resource
    matches, and raises ``AmbiguousLookupError`` when several do. A failed API call raises ``LookupFailedError``,
    it is never reported as "nothing found".
    """

    def __init__(self, ec2_client, docdb_client, tag_prefix: str, sysenv: str):
        self.ec2 = ec2_client
        self.docdb = docdb_client
        self.tag_prefix = tag_prefix
        self.sysenv = sysenv

    @classmethod
    def for_region(cls, region: str, tag_prefix: str, sysenv: str) -> "ResourceDiscovery":
        session = boto3.session.Session(region_name=region)
        return cls(session.client("ec2"), session.client("docdb"), tag_prefix, sysenv)

    def _tag_filters(self, name: str) -> list[dict]:
        return [
            _filter("tag:Name", name),
            _filter(f"tag:{self.tag_prefix}sysenv", self.sysenv),
        ]

    def _find_one(self, kind: str, describe, items_key: str, id_key: str, filters: list[dict]) -> Optional[str]:
        logger.debug("Looking up %s with %s", kind, filters)
        try:
            items = describe(Filters=filters)[items_key]
        except (ClientError, BotoCoreError) as err:
            raise LookupFailedError(kind, err) from err

        ids = [item[id_key] for item in items]
        if len(ids) > 1:
            raise AmbiguousLookupError(kind, filters, ids)

        logger.debug("Found %s %s", kind, ids)
        return ids[0] if ids else None

    def find_vpc(self, name: str) -> Optional[str]:
        return self._find_one("vpc", self.ec2.describe_vpcs, "Vpcs", "VpcId", self._tag_filters(name))

    def find_subnet(self, name: str, vpc_id: str) -> Optional[str]:
        return self._find_one(
            "subnet",
            self.ec2.describe_subnets,
            "Subnets",
            "SubnetId",
            self._tag_filters(name) + [_filter("vpc-id", vpc_id)],
        )

    def find_internet_gateway(self, name: str, vpc_id: str) -> Optional[str]:
        return self._find_one(
            "internet gateway",
            self.ec2.describe_internet_gateways,
            "InternetGateways",
            "InternetGatewayId",
            self._tag_filters(name) + [_filter("attachment.vpc-id", vpc_id)],
        )

    def find_route_table(self, name: str, vpc_id: str) -> Optional[str]:
        return self._find_one(
            "route table",
            self.ec2.describe_route_tables,
            "RouteTables",
            "RouteTableId",
            self._tag_filters(name) + [_filter("vpc-id", vpc_id)],
        )

    def find_security_group(self, group_name: str, vpc_id: str) -> Optional[str]:
        # group names are unique within a VPC
        return self._find_one(
            "security group",
            self.ec2.describe_security_groups,
            "SecurityGroups",
            "GroupId",
            [_filter("group-name", group_name), _filter("vpc-id", vpc_id)],
        )

    def find_subnet_group(self, name: str) -> Optional[str]:
        logger.debug("Looking up docdb subnet group %s", name)
        try:
            groups = self.docdb.describe_db_subnet_groups(DBSubnetGroupName=name)["DBSubnetGroups"]
        except ClientError as err:
            if err.response["Error"]["Code"] == _SUBNET_GROUP_NOT_FOUND:
                return None
            raise LookupFailedError("docdb subnet group", err) from err
        except BotoCoreError as err:
            raise LookupFailedError("docdb subnet group", err) from err

        return groups[0]["DBSubnetGroupName"] if groups else None

    def find_cluster(self, identifier: str) -> Optional[ClusterRecord]:
        logger.debug("Looking up docdb cluster %s", identifier)
        try:
            clusters = self.docdb.describe_db_clusters(DBClusterIdentifier=identifier)["DBClusters"]
        except ClientError as err:
            if err.response["Error"]["Code"] == _CLUSTER_NOT_FOUND:
                return None
            raise LookupFailedError("docdb cluster", err) from err
        except BotoCoreError as err:
            raise LookupFailedError("docdb cluster", err) from err

        docdb_clusters = [cluster for cluster in clusters if cluster.get("Engine") == _DOCDB_ENGINE]
        if not docdb_clusters:
            if clusters:
                logger.warning("Cluster %s runs %s, not DocumentDB", identifier, clusters[0].get("Engine"))
            return None

        return _cluster_record(docdb_clusters[0])

    def find_cluster_by_endpoint(self, endpoint: str) -> Optional[ClusterRecord]:
        """Scan the docdb clusters of the region for one whose writer or reader endpoint matches"""
        paginator = self.docdb.get_paginator("describe_db_clusters")
        try:
            pages = list(paginator.paginate(Filters=[{"Name": "engine", "Values": [_DOCDB_ENGINE]}]))
        except (ClientError, BotoCoreError) as err:
            raise LookupFailedError("docdb cluster", err) from err

        for page in pages:
            for cluster in page["DBClusters"]:
                if endpoint in (cluster.get("Endpoint"), cluster.get("ReaderEndpoint")):
                    return _cluster_record(cluster)
        return None
