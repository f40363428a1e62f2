import pulumi
import pytest

from infra_docdb import launcher
from infra_docdb.module_manager import LazyModule, module_manager
from infra_docdb.module_manager.discover_modules import discover_modules
from infra_docdb.modules.aws.documentdb import DocumentDB
from infra_docdb.modules.aws.documentdb.config import DocumentDBArgs


def test_discovers_documentdb_module():
    assert discover_modules() == {"aws": {"documentdb": LazyModule("aws", "documentdb")}}


def test_get_module():
    lazy_module = module_manager.get_module("aws", "documentdb")

    assert lazy_module.path == ".modules.aws.documentdb"
    assert lazy_module.Module is DocumentDB
    assert lazy_module.Module.get_config_type() is DocumentDBArgs


@pytest.mark.parametrize("provider, name, match", [("aws", "redshift", "redshift"), ("gcp", "documentdb", "gcp")])
def test_unknown_module(provider, name, match):
    with pytest.raises(ModuleNotFoundError, match=match):
        module_manager.get_module(provider, name)


def test_provider_modules():
    assert list(module_manager.get_provider_modules("aws")) == ["documentdb"]


def test_run_active_stack_exports_the_module(monkeypatch, mocks, stack_config):
    stack_config(
        master_username="docdbadmin",
        master_password="s3cr3t-Passw0rd-value",
        allowed_ips="203.0.113.0/24",
        instance_count="2",
    )

    exported = {}
    monkeypatch.setattr(launcher, "export", lambda name, value: exported.update({name: value}))

    @pulumi.runtime.test
    def run():
        launcher.run_active_stack("aws")
        return pulumi.Output.from_input(exported["documentdb"]).apply(exported.update)

    run()

    assert exported["endpoint"] == "docdb-cluster.cluster-c1.us-east-1.docdb.amazonaws.com"
    assert exported["instance_identifiers"] == ["docdb-cluster-0", "docdb-cluster-1"]
    assert "s3cr3t-Passw0rd-value" not in str(exported)
    ingress = mocks.of_type("aws:ec2/securityGroup:SecurityGroup")[0]["ingress"]
    assert ingress[0]["cidr_blocks"] == ["203.0.113.0/24"]
