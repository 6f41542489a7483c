"""
Inventory items returned by the cloud client.

These are read-only snapshots of live resources; nothing here is written
back to the cloud.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Reference:
    """A name/ID pair pointing at another resource."""
    name: str
    id: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Reference":
        return cls(name=data.get("name", ""), id=data.get("id", ""))


@dataclass(frozen=True)
class VPC:
    """A VPC in some VPC region."""
    name: str
    id: str
    resource_group: Reference | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VPC":
        group = data.get("resourceGroup")
        return cls(
            name=data["name"],
            id=data["id"],
            resource_group=Reference.from_dict(group) if group else None,
        )


@dataclass(frozen=True)
class Subnet:
    """A VPC subnet, with a reference to the VPC that owns it."""
    name: str
    id: str
    vpc: Reference
    resource_group: Reference | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Subnet":
        group = data.get("resourceGroup")
        return cls(
            name=data["name"],
            id=data.get("id", ""),
            vpc=Reference.from_dict(data["vpc"]),
            resource_group=Reference.from_dict(group) if group else None,
        )


@dataclass(frozen=True)
class DNSRecord:
    """A DNS record in a CIS or DNS Services zone."""
    name: str
    type: str
    content: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DNSRecord":
        return cls(name=data["name"], type=data.get("type", ""), content=data.get("content", ""))


@dataclass(frozen=True)
class System:
    """Cores and memory (GiB) of a system, or of the largest free slice of a pool."""
    cores: float = 0.0
    memory: int = 0

    def __post_init__(self) -> None:
        if self.cores < 0 or self.memory < 0:
            raise ValueError(f"System figures must not be negative (cores={self.cores}, memory={self.memory})")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "System":
        if not data:
            return cls()
        return cls(cores=float(data.get("cores", 0)), memory=int(data.get("memory", 0)))


@dataclass(frozen=True)
class MinMaxDefault:
    min: float = 1.0
    max: float = 1.0
    default: float = 1.0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "MinMaxDefault":
        if not data:
            return cls()
        return cls(
            min=float(data.get("min", 1.0)),
            max=float(data.get("max", 1.0)),
            default=float(data.get("default", 1.0)),
        )


@dataclass(frozen=True)
class SystemPool:
    """
    A hardware class available to a workspace.

    Attributes:
        name: Pool name as keyed by the cloud
        type: System type (e.g. "s922", "e980")
        capacity: Total size of the pool
        max_available: Largest system that can still be allocated
        max_cores_available: Slice with the most free cores
        max_memory_available: Slice with the most free memory
        core_memory_ratio: GiB of memory per core
        shared_core_ratio: Shared processor to core ratio policy
        systems: Individual systems in the pool
    """
    name: str
    type: str
    capacity: System = field(default_factory=System)
    max_available: System = field(default_factory=System)
    max_cores_available: System = field(default_factory=System)
    max_memory_available: System = field(default_factory=System)
    core_memory_ratio: float = 1.0
    shared_core_ratio: MinMaxDefault = field(default_factory=MinMaxDefault)
    systems: tuple[System, ...] = ()

    @property
    def available_cores(self) -> float:
        return self.max_cores_available.cores

    @property
    def available_memory(self) -> int:
        return self.max_memory_available.memory

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> "SystemPool":
        return cls(
            name=name,
            type=data["type"],
            capacity=System.from_dict(data.get("capacity")),
            max_available=System.from_dict(data.get("maxAvailable")),
            max_cores_available=System.from_dict(data.get("maxCoresAvailable")),
            max_memory_available=System.from_dict(data.get("maxMemoryAvailable")),
            core_memory_ratio=float(data.get("coreMemoryRatio", 1.0)),
            shared_core_ratio=MinMaxDefault.from_dict(data.get("sharedCoreRatio")),
            systems=tuple(System.from_dict(s) for s in data.get("systems") or ()),
        )
