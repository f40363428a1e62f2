from typing import Optional

from pulumi import Input, Output, Resource
from pulumi_aws import docdb, ssm
from semver import Version

from infra_docdb.lib.config import get_sysenv, get_stack
from infra_docdb.lib.discovery import ClusterRecord
from infra_docdb.lib.guards import Guarded, guard, guarded_options
from infra_docdb.lib.tags import get_tags
from .config import DocumentDBArgs
from .names import ResourceNames, SERVICE
from .security_group import MONGODB_PORT

ENGINE = "docdb"


def setup_subnet_group(
    names: ResourceNames,
    existing_name: Optional[str],
    subnet_ids: list[Input[str]],
    parent: Resource,
    retain: bool = False,
) -> Guarded[str, docdb.SubnetGroup]:
    return guard(
        names.docdb_subnet_group,
        existing_name,
        lambda: docdb.SubnetGroup(
            names.docdb_subnet_group,
            name=names.docdb_subnet_group,
            description=f"{names.cluster_identifier} subnet group for {get_sysenv()}",
            subnet_ids=subnet_ids,
            tags=get_tags(SERVICE, "subnet_group", names.cluster_identifier),
            opts=guarded_options(parent, retain),
        ),
    )


def parameter_group_family(engine_version: str) -> str:
    """
    DocumentDB parameter group family for an engine version (4.0.0 -> docdb4.0)
    """
    engine_semver = Version.parse(engine_version)
    return f"{ENGINE}{engine_semver.major}.{engine_semver.minor}"


def setup_cluster(
    config: DocumentDBArgs,
    names: ResourceNames,
    existing: Optional[ClusterRecord],
    subnet_group_name: Input[str],
    security_group_id: Input[str],
    parent: Resource,
) -> Guarded[ClusterRecord, docdb.Cluster]:
    """
    Declare the DocumentDB cluster and its parameter group, unless the cluster already exists

    :param config: Module configuration
    :param names: Identities of the guarded resources
    :param existing: The cluster if it already exists
    :param subnet_group_name: Subnet group to place instances in
    :param security_group_id: Security group guarding the cluster
    :param parent: Parent resource
    :return: The guarded cluster
    """

    def create() -> docdb.Cluster:
        parameter_group = docdb.ClusterParameterGroup(
            names.cluster_identifier,
            name_prefix=names.cluster_identifier,
            description=f"{names.cluster_identifier} cluster parameter group",
            family=parameter_group_family(config.engine_version),
            parameters=[
                docdb.ClusterParameterGroupParameterArgs(
                    name=parameter.name,
                    value=parameter.value,
                )
                for parameter in config.cluster_parameters or []
            ],
            tags=get_tags(SERVICE, "cluster_parameters", names.cluster_identifier),
            opts=guarded_options(parent, config.guard_existing),
        )

        return docdb.Cluster(
            names.cluster_identifier,
            cluster_identifier=names.cluster_identifier,
            engine=ENGINE,
            engine_version=config.engine_version,
            master_username=config.master_username,
            master_password=Output.secret(config.master_password),
            port=MONGODB_PORT,
            backup_retention_period=config.backup_retention_period,
            preferred_backup_window=config.preferred_backup_window,
            preferred_maintenance_window=config.preferred_maintenance_window,
            skip_final_snapshot=config.skip_final_snapshot,
            final_snapshot_identifier=None if config.skip_final_snapshot else f"{names.cluster_identifier}-final",
            storage_encrypted=config.storage_encrypted,
            enabled_cloudwatch_logs_exports=config.enabled_cloudwatch_logs_exports or [],
            apply_immediately=False,
            db_subnet_group_name=subnet_group_name,
            db_cluster_parameter_group_name=parameter_group.name,
            vpc_security_group_ids=[security_group_id],
            tags=get_tags(SERVICE, "cluster", names.cluster_identifier),
            opts=guarded_options(parameter_group, config.guard_existing),
        )

    return guard(names.cluster_identifier, existing, create)


def setup_instances(config: DocumentDBArgs, names: ResourceNames, cluster: docdb.Cluster) -> list[docdb.ClusterInstance]:
    return [
        docdb.ClusterInstance(
            names.instance(index),
            identifier=names.instance(index),
            cluster_identifier=cluster.id,
            engine=ENGINE,
            instance_class=config.instance_class,
            apply_immediately=False,
            auto_minor_version_upgrade=True,
            preferred_maintenance_window=config.preferred_maintenance_window,
            tags=get_tags(SERVICE, "instance", names.instance(index)),
            opts=guarded_options(cluster, config.guard_existing),
        )
        for index in range(config.instance_count)
    ]


def publish_connection_uri(names: ResourceNames, cluster: docdb.Cluster, retain: bool = False) -> ssm.Parameter:
    """
    Store the full connection URI, password included, as a SecureString SSM parameter
    """
    return ssm.Parameter(
        f"{names.cluster_identifier}-connectionuri",
        name=f"/Infrastructure/{get_sysenv()}/{get_stack()}/{names.cluster_identifier}/CONNECTION_URI",
        type="SecureString",
        value=Output.secret(
            Output.concat(
                "mongodb://",
                cluster.master_username,
                ":",
                cluster.master_password,
                "@",
                cluster.endpoint,
                ":",
                cluster.port.apply(lambda port: str(int(port))),
                "/",
            )
        ),
        tags=get_tags(SERVICE, "connection_uri", names.cluster_identifier),
        opts=guarded_options(cluster, retain),
    )
