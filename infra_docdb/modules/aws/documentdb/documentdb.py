from pulumi import log

from infra_docdb.lib.aws.base import AWSModule
from infra_docdb.lib.config import get_sysenv, tag_prefix
from infra_docdb.lib.discovery import ResourceDiscovery
from .cluster import MONGODB_PORT, publish_connection_uri, setup_cluster, setup_instances, setup_subnet_group
from .config import DocumentDBArgs, DocumentDBExports
from .lookups import ExistingResources, discover_existing
from .names import ResourceNames
from .network import setup_network
from .security_group import setup_security_group
from .validation import validate_config


class DocumentDB(AWSModule):
    def build(self, config: DocumentDBArgs) -> DocumentDBExports:
        validate_config(config)

        names = ResourceNames(config.cluster_identifier)

        if config.guard_existing:
            existing = self._discover_existing(names)
        else:
            # without guards Pulumi's own state is the only record of what exists
            existing = ExistingResources()

        network = setup_network(config, names, existing, self)

        security_group = setup_security_group(
            config.allowed_ips,
            names,
            existing.security_group_id,
            network.vpc.id,
            self,
            retain=config.guard_existing,
        )

        subnet_group = setup_subnet_group(
            names,
            existing.subnet_group_name,
            [subnet.id for subnet in network.subnets],
            self,
            retain=config.guard_existing,
        )
        subnet_group_name = subnet_group.resolve(lambda name: name, lambda resource: resource.name)

        cluster = setup_cluster(config, names, existing.cluster, subnet_group_name, security_group.id, self)

        instances = []
        if cluster.created:
            instances = setup_instances(config, names, cluster.resource)
            if config.publish_connection_uri:
                publish_connection_uri(names, cluster.resource, retain=config.guard_existing)

        guarded = network.guarded + [security_group, subnet_group, cluster]
        created = [resource.label for resource in guarded if resource.created]
        log.info(f"`{names.cluster_identifier}`: creating {len(created)} of {len(guarded)} guarded resources")

        return DocumentDBExports(
            endpoint=cluster.resolve(lambda record: record.endpoint or "", lambda resource: resource.endpoint),
            reader_endpoint=cluster.resolve(
                lambda record: record.reader_endpoint or "", lambda resource: resource.reader_endpoint
            ),
            port=cluster.resolve(lambda record: record.port or MONGODB_PORT, lambda resource: resource.port),
            cluster_identifier=cluster.id,
            master_username=config.master_username,
            vpc_id=network.vpc.id,
            subnet_ids=[subnet.id for subnet in network.subnets],
            internet_gateway_id=network.internet_gateway.id,
            route_table_id=network.route_table.id,
            security_group_id=security_group.id,
            subnet_group_name=subnet_group_name,
            instance_identifiers=[instance.identifier for instance in instances],
            created=created,
        )

    def _discover_existing(self, names: ResourceNames) -> ExistingResources:
        discovery = ResourceDiscovery.for_region(self.region, tag_prefix, get_sysenv())
        return discover_existing(discovery, names)
