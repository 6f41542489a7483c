"""
Interfaces of the cloud collaborators used during validation.

Implementations raise CloudAPIError for any failed lookup.
"""

from typing import Protocol, runtime_checkable

from powervs_preflight.inventory.types import VPC, DNSRecord, Subnet, SystemPool


class CloudClient(Protocol):
    """Read-only view of the PowerVS, VPC and CIS/DNS inventory."""

    def list_vpcs(self, region: str) -> list[VPC]:
        ...

    def get_subnet_by_name(self, name: str, region: str) -> Subnet | None:
        """Return the named subnet, or None if the region has no such subnet."""
        ...

    def get_dns_zone_id(self, domain: str, publish: str) -> str:
        ...

    def get_dns_records(self, crn: str, zone_id: str, name: str, publish: str) -> list[DNSRecord]:
        ...

    def get_datacenter_capabilities(self, region: str) -> dict[str, bool]:
        ...

    def get_workspace_capabilities(self, workspace_id: str) -> dict[str, bool]:
        ...

    def get_system_pools(self) -> dict[str, SystemPool]:
        ...


@runtime_checkable
class MetadataProvider(Protocol):
    """Cluster metadata that is resolved lazily from the cloud."""

    def cis_instance_crn(self) -> str:
        ...
