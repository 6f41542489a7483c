"""
Capacity planning for PowerVS machine pools.

Checks that the system pools of the workspace have enough free cores and
memory for the requested control plane and compute machines.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal

from powervs_preflight.config.install import InstallConfig, MachinePool
from powervs_preflight.errors import CloudAPIError
from powervs_preflight.inventory.client import CloudClient
from powervs_preflight.inventory.types import SystemPool
from powervs_preflight.validator.types import FieldError, format_number, internal_error, invalid

logger = logging.getLogger(__name__)

CONTROL_PLANE = "controlPlane"
COMPUTE = "compute"

# Names used for each role in capacity messages
ROLE_LABELS = {
    CONTROL_PLANE: "compute",
    COMPUTE: "worker",
}


def as_cores(value: float) -> Decimal:
    """A core count as a Decimal, so that fractional requests add up exactly."""
    return Decimal(str(value))


@dataclass(frozen=True)
class NodeRequest:
    """Resources asked for by one machine pool."""
    replicas: int
    processors: float
    memory_gib: int
    proc_type: str = "Shared"
    sys_type: str = "s922"

    @classmethod
    def from_pool(cls, pool: MachinePool) -> "NodeRequest":
        return cls(
            replicas=pool.replicas,
            processors=pool.processors,
            memory_gib=pool.memory_gib,
            proc_type=pool.proc_type,
            sys_type=pool.sys_type,
        )

    @property
    def cores_per_node(self) -> Decimal:
        # Dedicated processors occupy whole cores
        if self.proc_type == "Dedicated":
            return Decimal(math.ceil(self.processors))
        return as_cores(self.processors)

    @property
    def total_cores(self) -> Decimal:
        return self.replicas * self.cores_per_node

    @property
    def total_memory(self) -> int:
        return self.replicas * self.memory_gib


@dataclass(frozen=True)
class CapacityShortage:
    """The first resource a role could not get."""
    role: str
    resource: str
    available: Decimal | int
    needed: Decimal | int

    def __str__(self) -> str:
        return (
            f"Not enough {self.resource} available ({format_number(self.available)}) "
            f"for the {ROLE_LABELS[self.role]} nodes (need {format_number(self.needed)})"
        )


def select_pool(
    sys_type: str,
    pools: dict[str, SystemPool],
    remaining: dict[str, tuple[Decimal, int]],
) -> str | None:
    """
    Pick the pool for a system type.

    Among pools of the requested type, the one with the most free cores
    wins, then the one with the most free memory, then the lowest name.
    """
    candidates = [name for name, pool in pools.items() if pool.type == sys_type]
    if not candidates:
        return None
    return min(candidates, key=lambda name: (-remaining[name][0], -remaining[name][1], name))


def plan_capacity(
    control_plane: list[NodeRequest],
    compute: list[NodeRequest],
    pools: dict[str, SystemPool],
) -> CapacityShortage | None:
    """
    Check requested machines against the available system pools.

    Roles are planned in order, control plane first. Within a role the
    requests of each system type are summed and checked against the
    selected pool, cores before memory. What a role takes is deducted from
    its pool before the next role is planned.

    Args:
        control_plane: Requests of the control plane machine pool
        compute: Requests of the compute machine pools
        pools: System pools keyed by pool name

    Returns:
        The first shortage found, or None if everything fits
    """
    remaining = {
        name: (as_cores(pool.available_cores), pool.available_memory) for name, pool in pools.items()
    }

    for role, requests in ((CONTROL_PLANE, control_plane), (COMPUTE, compute)):
        by_type: dict[str, list[NodeRequest]] = {}
        for request in requests:
            if request.replicas > 0:
                by_type.setdefault(request.sys_type, []).append(request)

        for sys_type, typed in by_type.items():
            needed_cores = sum(r.total_cores for r in typed)
            needed_memory = sum(r.total_memory for r in typed)

            name = select_pool(sys_type, pools, remaining)
            if name is None:
                logger.info("No system pool of type %s", sys_type)
                cores, memory = Decimal(0), 0
            else:
                cores, memory = remaining[name]
                logger.debug(
                    "%s: %s needs %s cores / %d GiB from pool %s (%s cores / %d GiB free)",
                    role, sys_type, needed_cores, needed_memory, name, cores, memory,
                )

            if needed_cores > cores:
                return CapacityShortage(role, "cores", cores, needed_cores)
            if needed_memory > memory:
                return CapacityShortage(role, "memory", memory, needed_memory)

            if name is not None:
                remaining[name] = (cores - needed_cores, memory - needed_memory)

    return None


def requests_for(config: InstallConfig) -> tuple[list[NodeRequest], list[NodeRequest]]:
    """Node requests of the control plane and compute pools of an install config."""
    return (
        [NodeRequest.from_pool(config.control_plane)],
        [NodeRequest.from_pool(pool) for pool in config.compute],
    )


def validate_capacity(client: CloudClient, config: InstallConfig) -> list[FieldError]:
    """
    Validate that the workspace can host the requested machines.

    Args:
        client: Cloud inventory client
        config: Parsed install config

    Returns:
        List with at most one field error
    """
    try:
        pools = client.get_system_pools()
    except CloudAPIError as e:
        return [internal_error("platform.powervs.serviceInstanceID", e)]

    control_plane, compute = requests_for(config)
    shortage = plan_capacity(control_plane, compute, pools)
    if shortage is None:
        return []
    return [invalid(shortage.role, shortage.needed, str(shortage))]
