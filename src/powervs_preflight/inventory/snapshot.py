"""
Inventory snapshot client.

Answers cloud client queries from a YAML or TOML file describing the
inventory of an account, e.g.:

    cisInstanceCRN: crn:v1:bluemix:public:internet-svcs:global:a/acct:inst::
    vpcs:
      us-south:
        - {name: my-vpc, id: r006-1234}
    subnets:
      us-south:
        - {name: my-subnet, id: 0717-abcd, vpc: {name: my-vpc, id: r006-1234}}
    dnsZones:
      External:
        example.com: zone-id
    dnsRecords:
      zone-id:
        - {name: api.mycluster.example.com, type: CNAME}
    datacenterCapabilities:
      dal10: {power-edge-router: true}
    workspaceCapabilities:
      <service instance id>: {power-edge-router: true}
    systemPools:
      S922: {type: s922, maxCoresAvailable: {cores: 12, memory: 256}, ...}

Regions, zones and workspaces missing from the snapshot behave like
unknown ones in the real API and raise CloudAPIError.
"""

import logging
from pathlib import Path
from typing import Any

import tomli
import yaml

from powervs_preflight.config.install import read_document
from powervs_preflight.errors import CloudAPIError, InventoryError
from powervs_preflight.inventory.types import VPC, DNSRecord, Subnet, SystemPool

logger = logging.getLogger(__name__)


class SnapshotClient:
    """
    Cloud client and metadata provider backed by an inventory snapshot.

    Each instance reads its snapshot once; nothing is cached between
    command invocations.
    """

    def __init__(self, data: dict[str, Any], source: str = "<memory>"):
        if not isinstance(data, dict):
            raise InventoryError(f"{source}: inventory snapshot must be a mapping")

        self.source = source
        try:
            self._crn: str | None = data.get("cisInstanceCRN")
            self._vpcs = {
                region: [VPC.from_dict(v) for v in vpcs or ()]
                for region, vpcs in (data.get("vpcs") or {}).items()
            }
            self._subnets = {
                region: [Subnet.from_dict(s) for s in subnets or ()]
                for region, subnets in (data.get("subnets") or {}).items()
            }
            self._zones: dict[str, dict[str, str]] = data.get("dnsZones") or {}
            self._records = {
                zone_id: [DNSRecord.from_dict(r) for r in records or ()]
                for zone_id, records in (data.get("dnsRecords") or {}).items()
            }
            self._datacenter_caps: dict[str, dict[str, bool]] = data.get("datacenterCapabilities") or {}
            self._workspace_caps: dict[str, dict[str, bool]] = data.get("workspaceCapabilities") or {}
            pools = data.get("systemPools")
            self._pools = (
                None if pools is None
                else {name: SystemPool.from_dict(name, pool) for name, pool in pools.items()}
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise InventoryError(f"{source}: malformed inventory snapshot: {e}") from e

    @classmethod
    def from_file(cls, path: Path) -> "SnapshotClient":
        """Load a snapshot from a YAML or TOML file."""
        try:
            data = read_document(path)
        except FileNotFoundError as e:
            raise InventoryError(f"Inventory snapshot not found: {path}") from e
        except (yaml.YAMLError, tomli.TOMLDecodeError) as e:
            raise InventoryError(f"Invalid syntax in {path}: {e}") from e

        logger.debug("Loaded inventory snapshot %s", path)
        return cls(data, source=str(path))

    def list_vpcs(self, region: str) -> list[VPC]:
        if region not in self._vpcs:
            raise CloudAPIError("unknown region")
        return list(self._vpcs[region])

    def get_subnet_by_name(self, name: str, region: str) -> Subnet | None:
        if region not in self._subnets:
            raise CloudAPIError("unknown region")
        for subnet in self._subnets[region]:
            if subnet.name == name:
                return subnet
        return None

    def get_dns_zone_id(self, domain: str, publish: str) -> str:
        zone_id = (self._zones.get(publish) or {}).get(domain)
        if not zone_id:
            raise CloudAPIError(f"DNS zone for {domain} not found")
        return zone_id

    def get_dns_records(self, crn: str, zone_id: str, name: str, publish: str) -> list[DNSRecord]:
        if zone_id not in self._records:
            raise CloudAPIError(f"unknown DNS zone {zone_id}")
        return [r for r in self._records[zone_id] if r.name == name]

    def get_datacenter_capabilities(self, region: str) -> dict[str, bool]:
        if region not in self._datacenter_caps:
            raise CloudAPIError(f"unknown datacenter {region}")
        return dict(self._datacenter_caps[region])

    def get_workspace_capabilities(self, workspace_id: str) -> dict[str, bool]:
        if workspace_id not in self._workspace_caps:
            raise CloudAPIError(f"workspace {workspace_id} not found")
        return dict(self._workspace_caps[workspace_id])

    def get_system_pools(self) -> dict[str, SystemPool]:
        if self._pools is None:
            raise CloudAPIError("system pools unavailable")
        return dict(self._pools)

    def cis_instance_crn(self) -> str:
        if not self._crn:
            raise CloudAPIError("CIS instance CRN not set")
        return self._crn
