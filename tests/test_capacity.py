"""Tests for system pool capacity planning."""

import dataclasses

import pytest

from powervs_preflight.config.install import MachinePool
from powervs_preflight.errors import CloudAPIError
from powervs_preflight.inventory.types import MinMaxDefault, System, SystemPool
from powervs_preflight.validator import (
    ErrorKind,
    NodeRequest,
    plan_capacity,
    validate_capacity,
)
from powervs_preflight.validator.capacity import select_pool


def make_pool(name: str, cores: float, memory: int, sys_type: str = "e980") -> SystemPool:
    system = System(cores=cores, memory=memory)
    return SystemPool(
        name=name,
        type=sys_type,
        capacity=system,
        max_available=system,
        max_cores_available=system,
        max_memory_available=system,
        core_memory_ratio=1.0,
        shared_core_ratio=MinMaxDefault(min=1, max=4, default=4),
        systems=(system,),
    )


def dedicated(replicas: int) -> NodeRequest:
    return NodeRequest(replicas=replicas, processors=1, memory_gib=32, proc_type="Dedicated", sys_type="e980")


CONTROL_PLANE = [dedicated(5)]
COMPUTE = [dedicated(3)]


class TestPlanCapacity:
    """Tests for plan_capacity."""

    def test_not_enough_control_plane_cores(self):
        pools = {"NotEnoughComputeCores": make_pool("NotEnoughComputeCores", 2, 256)}
        shortage = plan_capacity(CONTROL_PLANE, COMPUTE, pools)

        assert str(shortage) == "Not enough cores available (2) for the compute nodes (need 5)"

    def test_not_enough_worker_cores(self):
        """Workers get what the control plane leaves in a shared pool."""
        pools = {"NotEnoughWorkerCores": make_pool("NotEnoughWorkerCores", 6, 256)}
        shortage = plan_capacity(CONTROL_PLANE, COMPUTE, pools)

        assert str(shortage) == "Not enough cores available (1) for the worker nodes (need 3)"

    def test_not_enough_control_plane_memory(self):
        pools = {"NotEnoughComputeMemory": make_pool("NotEnoughComputeMemory", 8, 32)}
        shortage = plan_capacity(CONTROL_PLANE, COMPUTE, pools)

        assert str(shortage) == "Not enough memory available (32) for the compute nodes (need 160)"

    def test_not_enough_worker_memory(self):
        pools = {"NotEnoughWorkerMemory": make_pool("NotEnoughWorkerMemory", 8, 192)}
        shortage = plan_capacity(CONTROL_PLANE, COMPUTE, pools)

        assert str(shortage) == "Not enough memory available (32) for the worker nodes (need 96)"

    def test_enough_capacity(self):
        pools = {"Enough": make_pool("Enough", 8, 256)}

        assert plan_capacity(CONTROL_PLANE, COMPUTE, pools) is None

    def test_cores_reported_before_memory(self):
        """A role short on both cores and memory only reports cores."""
        pools = {"Tiny": make_pool("Tiny", 1, 16)}
        shortage = plan_capacity(CONTROL_PLANE, COMPUTE, pools)

        assert shortage.resource == "cores"
        assert shortage.role == "controlPlane"
        assert "memory" not in str(shortage)

    def test_no_pool_of_requested_type(self):
        pools = {"Other": make_pool("Other", 64, 1024, sys_type="s922")}
        shortage = plan_capacity(CONTROL_PLANE, COMPUTE, pools)

        assert str(shortage) == "Not enough cores available (0) for the compute nodes (need 5)"

    def test_roles_use_pools_of_their_own_type(self):
        pools = {
            "e980": make_pool("e980", 5, 160),
            "s922": make_pool("s922", 3, 96, sys_type="s922"),
        }
        compute = [dataclasses.replace(dedicated(3), sys_type="s922")]

        assert plan_capacity(CONTROL_PLANE, compute, pools) is None

    def test_shared_processors_count_fractional_cores(self):
        shared = NodeRequest(replicas=3, processors=0.5, memory_gib=16, proc_type="Shared", sys_type="s922")
        pools = {"s922": make_pool("s922", 2, 512, sys_type="s922")}
        shortage = plan_capacity([shared], [shared], pools)

        assert str(shortage) == "Not enough cores available (0.5) for the worker nodes (need 1.5)"

    def test_fractional_request_exactly_fits(self):
        """Three 0.1 processor nodes fit a pool with 0.3 free cores."""
        tenth = NodeRequest(replicas=3, processors=0.1, memory_gib=2, proc_type="Shared", sys_type="s922")
        pools = {"s922": make_pool("s922", 0.3, 64, sys_type="s922")}

        assert plan_capacity([tenth], [], pools) is None

    def test_fractional_remainder_carries_over(self):
        tenth = NodeRequest(replicas=3, processors=0.1, memory_gib=2, proc_type="Capped", sys_type="s922")
        pools = {"s922": make_pool("s922", 0.7, 64, sys_type="s922")}
        shortage = plan_capacity([tenth], [tenth, tenth], pools)

        assert str(shortage) == "Not enough cores available (0.4) for the worker nodes (need 0.6)"

    def test_large_figures_are_not_abbreviated(self):
        request = NodeRequest(replicas=1, processors=10000.25, memory_gib=2_000_000, proc_type="Shared", sys_type="e980")
        pools = {"big": make_pool("big", 10000.25, 1_000_000)}
        shortage = plan_capacity([request], [], pools)

        assert str(shortage) == "Not enough memory available (1000000) for the compute nodes (need 2000000)"

        pools = {"big": make_pool("big", 10000, 4_000_000)}
        shortage = plan_capacity([request], [], pools)

        assert str(shortage) == "Not enough cores available (10000) for the compute nodes (need 10000.25)"

    def test_dedicated_processors_round_up(self):
        request = NodeRequest(replicas=2, processors=1.25, memory_gib=8, proc_type="Dedicated")
        assert request.total_cores == 4

    def test_zero_replicas_need_nothing(self):
        pools = {"Enough": make_pool("Enough", 5, 160)}
        assert plan_capacity(CONTROL_PLANE, [dedicated(0)], pools) is None

    def test_pools_not_modified(self):
        pools = {"Enough": make_pool("Enough", 8, 256)}
        plan_capacity(CONTROL_PLANE, COMPUTE, pools)

        assert pools["Enough"].available_cores == 8
        assert pools["Enough"].available_memory == 256


class TestSelectPool:
    """Tests for the pool tie-break."""

    def test_most_cores_wins(self):
        pools = {"a": make_pool("a", 4, 512), "b": make_pool("b", 8, 64)}
        remaining = {n: (p.available_cores, p.available_memory) for n, p in pools.items()}
        assert select_pool("e980", pools, remaining) == "b"

    def test_memory_breaks_core_ties(self):
        pools = {"a": make_pool("a", 8, 64), "b": make_pool("b", 8, 128)}
        remaining = {n: (p.available_cores, p.available_memory) for n, p in pools.items()}
        assert select_pool("e980", pools, remaining) == "b"

    def test_name_breaks_full_ties(self):
        pools = {"zeta": make_pool("zeta", 8, 64), "alpha": make_pool("alpha", 8, 64)}
        remaining = {n: (p.available_cores, p.available_memory) for n, p in pools.items()}
        assert select_pool("e980", pools, remaining) == "alpha"

    def test_no_matching_type(self):
        pools = {"a": make_pool("a", 8, 64)}
        assert select_pool("s1022", pools, {"a": (8, 64)}) is None


class TestSystemPool:
    def test_negative_figures_rejected(self):
        with pytest.raises(ValueError):
            System(cores=-1, memory=0)


class TestValidateCapacity:
    """Tests for validate_capacity."""

    def test_shortage_is_field_error(self, client, install_config):
        config = dataclasses.replace(
            install_config,
            control_plane=MachinePool(name="master", replicas=5, proc_type="Dedicated", processors=1, sys_type="e980"),
            compute=(MachinePool(name="worker", replicas=3, proc_type="Dedicated", processors=1, sys_type="e980"),),
        )
        client.pools = {"p": make_pool("p", 6, 1024)}
        errors = validate_capacity(client, config)

        assert [str(e) for e in errors] == [
            "compute: Invalid value: 3: Not enough cores available (1) for the worker nodes (need 3)"
        ]

    def test_enough_capacity(self, client, install_config):
        client.pools = {"p": make_pool("p", 8, 1024, sys_type="s922")}
        assert validate_capacity(client, install_config) == []

    def test_pool_lookup_fails(self, client, install_config):
        client.pools = CloudAPIError("workspace not found")
        errors = validate_capacity(client, install_config)

        assert [e.kind for e in errors] == [ErrorKind.INTERNAL]
        assert errors[0].field == "platform.powervs.serviceInstanceID"
