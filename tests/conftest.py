"""Shared fixtures for the powervs-preflight tests."""

import dataclasses
import ipaddress
from pathlib import Path

import pytest

from powervs_preflight.config.install import InstallConfig, MachinePool, Platform
from powervs_preflight.errors import CloudAPIError
from powervs_preflight.inventory.types import VPC, Reference, Subnet

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"

VALID_CRN = "crn:v1:bluemix:public:internet-svcs:global:a/valid-account-id:valid-instance-id::"
VALID_SERVICE_INSTANCE_ID = "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee"


def _reply(value):
    if isinstance(value, Exception):
        raise value
    return value


class FakeCloudClient:
    """
    In-memory cloud client.

    Each table maps a lookup key to the value to return, or to an exception
    to raise. Missing keys raise CloudAPIError. Every call is recorded.
    """

    def __init__(self):
        self.vpcs = {}
        self.subnets = {}
        self.zone_ids = {}
        self.records = {}
        self.datacenter_caps = {}
        self.workspace_caps = {}
        self.pools = {}
        self.crn = VALID_CRN
        self.calls = []

    def _lookup(self, method, table, key):
        self.calls.append((method, key))
        if key not in table:
            raise CloudAPIError(f"{method}: no answer for {key!r}")
        return _reply(table[key])

    def list_vpcs(self, region):
        return list(self._lookup("list_vpcs", self.vpcs, region))

    def get_subnet_by_name(self, name, region):
        return self._lookup("get_subnet_by_name", self.subnets, (name, region))

    def get_dns_zone_id(self, domain, publish):
        return self._lookup("get_dns_zone_id", self.zone_ids, (domain, publish))

    def get_dns_records(self, crn, zone_id, name, publish):
        return self._lookup("get_dns_records", self.records, (crn, zone_id, name, publish))

    def get_datacenter_capabilities(self, region):
        return self._lookup("get_datacenter_capabilities", self.datacenter_caps, region)

    def get_workspace_capabilities(self, workspace_id):
        return self._lookup("get_workspace_capabilities", self.workspace_caps, workspace_id)

    def get_system_pools(self):
        self.calls.append(("get_system_pools", None))
        return _reply(self.pools)

    def cis_instance_crn(self):
        self.calls.append(("cis_instance_crn", None))
        return _reply(self.crn)

    def methods_called(self):
        return [method for method, _ in self.calls]


@pytest.fixture
def client():
    return FakeCloudClient()


@pytest.fixture
def install_config():
    """A minimal valid install config without custom VPC settings."""
    return InstallConfig(
        cluster_name="valid-cluster-name",
        base_domain="valid.base.domain",
        publish="External",
        machine_networks=(ipaddress.ip_network("192.168.0.0/24"),),
        platform=Platform(
            region="dal",
            zone="dal10",
            resource_group="valid-resource-group",
            service_instance_id=VALID_SERVICE_INSTANCE_ID,
            user_id="valid-user@example.com",
        ),
        control_plane=MachinePool(name="master", architecture="ppc64le"),
        compute=(MachinePool(name="worker", architecture="ppc64le"),),
    )


@pytest.fixture
def with_platform():
    """Return a copy of an install config with platform fields replaced."""
    def edit(config, **changes):
        return dataclasses.replace(config, platform=dataclasses.replace(config.platform, **changes))
    return edit


@pytest.fixture
def valid_vpcs():
    return [
        VPC(name="valid-vpc", id="valid-id", resource_group=Reference("valid-resource-group", "valid-resource-group")),
        VPC(name="another-valid-vpc", id="another-valid-id"),
    ]


@pytest.fixture
def valid_subnet():
    return Subnet(name="valid-vpc-subnet", id="subnet-1", vpc=Reference(name="valid-vpc", id="valid-id"))


@pytest.fixture
def wrong_subnet():
    return Subnet(name="wrong-vpc-subnet", id="subnet-2", vpc=Reference(name="another-valid-vpc", id="another-valid-id"))
