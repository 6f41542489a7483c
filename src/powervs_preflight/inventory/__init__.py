"""
Cloud inventory access.

Typed inventory items, the client interfaces the validator consumes, and a
snapshot-backed client for offline validation.
"""

from powervs_preflight.inventory.client import CloudClient, MetadataProvider
from powervs_preflight.inventory.snapshot import SnapshotClient
from powervs_preflight.inventory.types import (
    VPC,
    DNSRecord,
    MinMaxDefault,
    Reference,
    Subnet,
    System,
    SystemPool,
)

__all__ = [
    "CloudClient",
    "MetadataProvider",
    "SnapshotClient",
    "VPC",
    "DNSRecord",
    "MinMaxDefault",
    "Reference",
    "Subnet",
    "System",
    "SystemPool",
]
