import pytest
from click.testing import CliRunner

from infra_docdb.lib.cli.cli import cli
from infra_docdb.lib.discovery import ClusterRecord, ResourceDiscovery

CLUSTER = ClusterRecord(
    id="docdb-cluster",
    endpoint="docdb-cluster.cluster-c1.us-east-1.docdb.amazonaws.com",
    reader_endpoint="docdb-cluster.cluster-ro-c1.us-east-1.docdb.amazonaws.com",
    port=27017,
    status="available",
)


@pytest.fixture
def runner():
    return CliRunner(env={"AWS_PROFILE": "sandbox", "AWS_REGION": "us-east-1"})


@pytest.fixture
def discovery(monkeypatch, fake_discovery):
    created = {}

    def for_region(region, tag_prefix, sysenv):
        created["args"] = (region, tag_prefix, sysenv)
        created["discovery"] = fake_discovery(found=created.get("found"), cluster=created.get("cluster"))
        return created["discovery"]

    monkeypatch.setattr(ResourceDiscovery, "for_region", staticmethod(for_region))
    return created


def test_requires_aws_profile(discovery):
    result = CliRunner(env={"AWS_PROFILE": None}).invoke(cli, ["guards", "--sysenv", "x", "--region", "us-east-1"])

    assert result.exit_code == 2
    assert "AWS_PROFILE" in result.output
    assert "discovery" not in discovery


class TestGuards:
    def test_nothing_exists(self, runner, discovery):
        result = runner.invoke(cli, ["guards", "--sysenv", "ex-aws-us-east-1-sandbox-dev"])

        assert result.exit_code == 0, result.output
        assert discovery["args"] == ("us-east-1", "infra:", "ex-aws-us-east-1-sandbox-dev")
        assert "documentdb-vpc-docdb-cluster: missing, desired count 1" in result.output
        assert "docdb-cluster: missing, desired count 1" in result.output
        # children of a missing VPC are not searched for
        assert discovery["discovery"].lookups == [
            "documentdb-vpc-docdb-cluster",
            "docdb-cluster-subnets",
            "docdb-cluster",
        ]

    def test_found_resources(self, runner, discovery):
        discovery["found"] = {
            "documentdb-vpc-analytics": "vpc-123",
            "documentdb-subnet-analytics-0": "subnet-a",
            "analytics-sg": "sg-123",
        }
        discovery["cluster"] = CLUSTER

        result = runner.invoke(
            cli,
            ["guards", "--sysenv", "ex-aws-us-east-1-sandbox-dev", "--cluster-identifier", "analytics"],
        )

        assert result.exit_code == 0, result.output
        assert "documentdb-vpc-analytics: found vpc-123, desired count 0" in result.output
        assert "documentdb-subnet-analytics-0: found subnet-a, desired count 0" in result.output
        assert "documentdb-subnet-analytics-1: missing, desired count 1" in result.output
        assert "analytics-sg: found sg-123, desired count 0" in result.output
        assert "analytics: found docdb-cluster, desired count 0" in result.output

    def test_custom_tag_namespace(self, runner, discovery):
        result = runner.invoke(cli, ["guards", "--sysenv", "s", "--tag-namespace", "acme", "--region", "eu-west-1"])

        assert result.exit_code == 0, result.output
        assert discovery["args"] == ("eu-west-1", "acme:", "s")


class TestClusterStatus:
    def test_by_identifier(self, runner, discovery):
        discovery["cluster"] = CLUSTER

        result = runner.invoke(cli, ["cluster-status", "--identifier", "docdb-cluster"])

        assert result.exit_code == 0, result.output
        assert "Cluster Identifier: docdb-cluster" in result.output
        assert "Status: available" in result.output
        assert f"Endpoint: {CLUSTER.endpoint}" in result.output
        assert f"Reader Endpoint: {CLUSTER.reader_endpoint}" in result.output
        assert "Port: 27017" in result.output

    def test_by_endpoint(self, runner, discovery):
        discovery["cluster"] = CLUSTER

        result = runner.invoke(cli, ["cluster-status", "--endpoint", CLUSTER.reader_endpoint])

        assert result.exit_code == 0, result.output
        assert "Cluster Identifier: docdb-cluster" in result.output
        assert discovery["discovery"].lookups == [CLUSTER.reader_endpoint]

    def test_not_found(self, runner, discovery):
        result = runner.invoke(cli, ["cluster-status", "--identifier", "missing"])

        assert result.exit_code == 1
        assert "No DocumentDB cluster was found" in result.output

    def test_identifier_and_endpoint_are_exclusive(self, runner, discovery):
        result = runner.invoke(cli, ["cluster-status", "--identifier", "a", "--endpoint", "b"])

        assert result.exit_code == 2
        assert "discovery" not in discovery

    def test_one_identifier_is_required(self, runner, discovery):
        result = runner.invoke(cli, ["cluster-status"])

        assert result.exit_code == 2
