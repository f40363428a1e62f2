from dataclasses import dataclass, field
from typing import Optional

from pulumi import Output


@dataclass
class ClusterParameter:
    name: str
    """The name of the DocumentDB parameter"""

    value: str
    """The value of the DocumentDB parameter"""


@dataclass
class DocumentDBArgs:
    master_username: str
    """Username for the master DB user"""

    master_password: str = field(repr=False)
    """Password for the master DB user. Set it with `pulumi config set --secret`, it is never exported"""

    allowed_ips: str = "0.0.0.0/0"
    """CIDR allowed to reach the cluster on the MongoDB port. Narrow this for production"""

    cidr: str = "10.0.0.0/16"
    """CIDR of the VPC created for the cluster"""

    subnet_newbits: int = 8
    """Prefix bits added to `cidr` for each of the two subnets (10.0.0.0/16 -> 10.0.0.0/24, 10.0.1.0/24)"""

    guard_existing: bool = False
    """Look every resource up first and only create the ones that are missing"""

    cluster_identifier: str = "docdb-cluster"
    """Identifier of the DocumentDB cluster, also used to name and tag the surrounding resources"""

    engine_version: str = "4.0.0"
    """The database engine version"""

    instance_class: str = "db.r5.large"
    """Instance class for DocumentDB members"""

    instance_count: int = 1
    """Cluster member count"""

    backup_retention_period: int = 5
    """Days to keep automated backups (1-35)"""

    preferred_backup_window: str = "07:00-09:00"
    """Daily UTC window for automated backups"""

    preferred_maintenance_window: str = "sat:09:30-sat:10:30"
    """Weekly UTC window for maintenance"""

    skip_final_snapshot: bool = True
    """Skip the final snapshot when the cluster is destroyed"""

    storage_encrypted: bool = True
    """Encrypt the cluster storage at rest"""

    enabled_cloudwatch_logs_exports: Optional[list[str]] = field(default_factory=list)
    """Log types to export to CloudWatch (audit, profiler)"""

    cluster_parameters: Optional[list[ClusterParameter]] = field(default_factory=list)
    """A list of DocumentDB parameters to apply"""

    publish_connection_uri: bool = True
    """Store the connection URI as a SecureString SSM parameter when the cluster is created"""


@dataclass
class DocumentDBExports:
    endpoint: Output[str]
    """The DNS address of the DocumentDB cluster"""

    reader_endpoint: Output[str]
    """A read-only endpoint for the DocumentDB cluster, automatically load-balanced across replicas"""

    port: Output[int]
    """The port the cluster listens on"""

    cluster_identifier: Output[str]
    """The cluster identifier"""

    master_username: str
    """Username for the master DB user"""

    vpc_id: Output[str]
    subnet_ids: list[Output[str]]
    internet_gateway_id: Output[str]
    route_table_id: Output[str]
    security_group_id: Output[str]
    subnet_group_name: Output[str]

    instance_identifiers: list[Output[str]]
    """Identifiers of the cluster instances declared by this run"""

    created: list[str]
    """Guarded resources created by this run, the others already existed"""
