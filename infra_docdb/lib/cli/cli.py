import logging
import os

import click
from click_option_group import optgroup, RequiredMutuallyExclusiveOptionGroup

from infra_docdb.lib.discovery import ResourceDiscovery
from infra_docdb.modules.aws.documentdb.lookups import discover_existing
from infra_docdb.modules.aws.documentdb.names import ResourceNames


def echo_key_value(key, value):
    click.echo(click.style(f"{key}: ", fg="green", bold=True) + str(value))


def _region_option(func):
    return click.option(
        "--region",
        default=lambda: os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION"),
        required=True,
        help="AWS region, defaults to $AWS_REGION",
    )(func)


@click.group()
@click.option("--debug", is_flag=True, default=False, help="Enable DEBUG logging")
def cli(debug):
    if "AWS_PROFILE" not in os.environ:
        raise click.UsageError("`AWS_PROFILE` is not set")

    logging.basicConfig(format="[%(asctime)s %(levelname)s %(name)s %(threadName)s]: %(message)s")

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        click.echo("Enabled debug mode!")


@cli.command()
@click.option("--sysenv", required=True, help="SysEnv the resources are tagged with")
@click.option("--cluster-identifier", default="docdb-cluster", show_default=True, help="DocumentDB cluster identifier")
@click.option("--tag-namespace", default="infra", show_default=True, help="Namespace of the standard tags")
@_region_option
def guards(sysenv, cluster_identifier, tag_namespace, region):
    """Show which guarded resources already exist and which a guarded run would create"""
    names = ResourceNames(cluster_identifier)
    discovery = ResourceDiscovery.for_region(region, f"{tag_namespace}:", sysenv)

    existing = discover_existing(discovery, names)
    found = {
        names.vpc: existing.vpc_id,
        **dict(zip(names.subnets, existing.subnet_ids)),
        names.internet_gateway: existing.internet_gateway_id,
        names.route_table: existing.route_table_id,
        names.security_group: existing.security_group_id,
        names.docdb_subnet_group: existing.subnet_group_name,
        names.cluster_identifier: existing.cluster.id if existing.cluster else None,
    }

    click.echo()
    for name, count in existing.desired_counts(names).items():
        state = f"found {found[name]}" if found[name] else "missing"
        echo_key_value(name, f"{state}, desired count {count}")


@cli.command()
@optgroup.group(
    "Identifiers",
    cls=RequiredMutuallyExclusiveOptionGroup,
    help="The manner of identifying the cluster",
)
@optgroup.option("--identifier", help="Cluster identifier")
@optgroup.option("--endpoint", help="Cluster writer or reader endpoint")
@_region_option
def cluster_status(identifier, endpoint, region):
    """Describe a DocumentDB cluster"""
    discovery = ResourceDiscovery.for_region(region, "", "")

    if identifier:
        cluster = discovery.find_cluster(identifier)
    else:
        cluster = discovery.find_cluster_by_endpoint(endpoint)

    if cluster is None:
        raise click.ClickException("No DocumentDB cluster was found")

    click.echo()
    echo_key_value("Cluster Identifier", cluster.id)
    echo_key_value("Status", cluster.status)
    echo_key_value("Endpoint", cluster.endpoint)
    echo_key_value("Reader Endpoint", cluster.reader_endpoint)
    echo_key_value("Port", cluster.port)


def run():
    exit(cli())


if __name__ == "__main__":
    run()
