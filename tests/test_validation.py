import pytest

from infra_docdb.modules.aws.documentdb.config import DocumentDBArgs
from infra_docdb.modules.aws.documentdb.validation import validate_config


def _config(**overrides) -> DocumentDBArgs:
    values = dict(master_username="docdbadmin", master_password="correct-horse-battery")
    values.update(overrides)
    return DocumentDBArgs(**values)


def test_defaults_are_valid():
    validate_config(_config())


def test_password_is_hidden_from_repr():
    assert "correct-horse-battery" not in repr(_config())


def test_default_ingress_is_open():
    assert _config().allowed_ips == "0.0.0.0/0"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"master_username": ""}, "master_username"),
        ({"master_password": ""}, "master_password"),
        ({"allowed_ips": "203.0.113.0/33"}, "allowed_ips"),
        ({"allowed_ips": "203.0.113.5/24"}, "allowed_ips"),
        ({"allowed_ips": "::/0"}, "allowed_ips"),
        ({"allowed_ips": "2001:db8::/32"}, "allowed_ips"),
        ({"cidr": "10.0.0.0/27"}, "cidr"),
        ({"cidr": "10.0.0.0"}, "cidr"),
        ({"cidr": "10.0.0.0/8"}, "cidr"),
        ({"cidr": "10.0.0.0/29", "subnet_newbits": 1}, "cidr"),
        ({"cidr": "fd00::/56"}, "cidr"),
        ({"cluster_identifier": "Docdb"}, "cluster_identifier"),
        ({"cluster_identifier": "docdb--cluster"}, "cluster_identifier"),
        ({"cluster_identifier": "docdb-"}, "cluster_identifier"),
        ({"instance_class": "r5.large"}, "instance_class"),
        ({"instance_count": 0}, "instance_count"),
        ({"backup_retention_period": 0}, "backup_retention_period"),
        ({"backup_retention_period": 36}, "backup_retention_period"),
        ({"preferred_backup_window": "7:00-9:00"}, "preferred_backup_window"),
        ({"preferred_backup_window": "24:00-01:00"}, "preferred_backup_window"),
    ],
)
def test_rejects_invalid_values(overrides, message):
    with pytest.raises(ValueError, match=message):
        validate_config(_config(**overrides))


def test_accepts_narrow_ingress():
    validate_config(_config(allowed_ips="203.0.113.0/24"))


@pytest.mark.parametrize("cidr", ["10.0.0.0/16", "10.0.0.0/24", "10.0.0.0/27"])
def test_accepts_vpc_sizes_aws_allows(cidr):
    validate_config(_config(cidr=cidr, subnet_newbits=1))
