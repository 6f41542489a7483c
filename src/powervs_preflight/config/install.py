"""
Install config model and loader.

Reads the PowerVS portion of an install config from YAML or TOML into
frozen dataclasses. Validation never mutates these objects.
"""

import ipaddress
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import tomli
import yaml

from powervs_preflight.errors import SpecificationError

logger = logging.getLogger(__name__)


PublishingStrategy = Literal["External", "Internal"]
ProcessorType = Literal["Dedicated", "Shared", "Capped"]

PROCESSOR_TYPES: tuple[str, ...] = ("Dedicated", "Shared", "Capped")

# Defaults applied by the installer when a machine pool leaves them out
DEFAULT_SYS_TYPE = "s922"
DEFAULT_PROC_TYPE = "Shared"
DEFAULT_PROCESSORS = 0.5
DEFAULT_MEMORY_GIB = 32
DEFAULT_REPLICAS = 3
DEFAULT_ARCHITECTURE = "ppc64le"

PER_CAPABILITY = "power-edge-router"


def _mapping(value: Any, path: str) -> dict[str, Any]:
    """A mapping from the document, empty when left out."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SpecificationError(f"{path}: must be a mapping, got {type(value).__name__}")
    return value


def _names(value: Any, path: str) -> tuple[str, ...]:
    """A list of names from the document, empty when left out."""
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SpecificationError(f"{path}: must be a list of names")
    return tuple(value)


@dataclass(frozen=True)
class MachinePool:
    """A control plane or compute machine pool request."""
    name: str
    architecture: str = DEFAULT_ARCHITECTURE
    replicas: int = DEFAULT_REPLICAS
    proc_type: str = DEFAULT_PROC_TYPE
    processors: float = DEFAULT_PROCESSORS
    memory_gib: int = DEFAULT_MEMORY_GIB
    sys_type: str = DEFAULT_SYS_TYPE

    @classmethod
    def from_dict(cls, data: Any, default_name: str, path: str) -> "MachinePool":
        """
        Build a machine pool from its install-config entry.

        Args:
            data: The controlPlane or compute[i] entry
            default_name: Pool name when the entry has none
            path: Location of the entry, used in error messages
        """
        data = _mapping(data, path)
        platform = _mapping(data.get("platform"), f"{path}.platform")
        powervs = _mapping(platform.get("powervs"), f"{path}.platform.powervs")

        proc_type = powervs.get("procType", DEFAULT_PROC_TYPE)
        if proc_type not in PROCESSOR_TYPES:
            raise SpecificationError(
                f"{path}.platform.powervs.procType: unknown processor type {proc_type!r}"
            )

        try:
            replicas = int(data.get("replicas", DEFAULT_REPLICAS))
            processors = float(powervs.get("processors", DEFAULT_PROCESSORS))
            memory_gib = int(powervs.get("memoryGiB", DEFAULT_MEMORY_GIB))
        except (TypeError, ValueError) as e:
            raise SpecificationError(f"{path}: {e}") from e

        if replicas < 0:
            raise SpecificationError(f"{path}.replicas: must be a non-negative integer")
        if not math.isfinite(processors) or processors < 0 or memory_gib < 0:
            raise SpecificationError(f"{path}.platform.powervs: processors and memoryGiB must be non-negative numbers")

        return cls(
            name=data.get("name", default_name),
            architecture=data.get("architecture", DEFAULT_ARCHITECTURE),
            replicas=replicas,
            proc_type=proc_type,
            processors=processors,
            memory_gib=memory_gib,
            sys_type=powervs.get("sysType", DEFAULT_SYS_TYPE),
        )


@dataclass(frozen=True)
class Platform:
    """The platform.powervs block of an install config."""
    region: str
    zone: str
    resource_group: str = ""
    service_instance_id: str | None = None
    user_id: str | None = None
    vpc_name: str | None = None
    vpc_region: str | None = None
    vpc_subnets: tuple[str, ...] = ()
    required_capabilities: tuple[str, ...] = (PER_CAPABILITY,)

    @property
    def has_custom_vpc(self) -> bool:
        return bool(self.vpc_name or self.vpc_region or self.vpc_subnets)

    @classmethod
    def from_dict(cls, data: Any) -> "Platform":
        data = _mapping(data, "platform.powervs")
        for required in ("region", "zone"):
            if not data.get(required):
                raise SpecificationError(f"platform.powervs.{required} is required")
        capabilities = data.get("requiredCapabilities")
        return cls(
            region=data["region"],
            zone=data["zone"],
            resource_group=data.get("powervsResourceGroup", ""),
            service_instance_id=data.get("serviceInstanceID"),
            user_id=data.get("userID"),
            vpc_name=data.get("vpcName"),
            vpc_region=data.get("vpcRegion"),
            vpc_subnets=_names(data.get("vpcSubnets"), "platform.powervs.vpcSubnets"),
            required_capabilities=(
                (PER_CAPABILITY,) if capabilities is None
                else _names(capabilities, "platform.powervs.requiredCapabilities")
            ),
        )


@dataclass(frozen=True)
class InstallConfig:
    """The parts of an install config that PowerVS validation reads."""
    cluster_name: str
    base_domain: str
    platform: Platform
    publish: str = "External"
    machine_networks: tuple[ipaddress.IPv4Network | ipaddress.IPv6Network, ...] = ()
    control_plane: MachinePool = field(default_factory=lambda: MachinePool(name="master"))
    compute: tuple[MachinePool, ...] = field(default_factory=lambda: (MachinePool(name="worker"),))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InstallConfig":
        """Build an InstallConfig from a parsed install-config document."""
        if not isinstance(data, dict):
            raise SpecificationError("install config must be a mapping")

        name = _mapping(data.get("metadata"), "metadata").get("name")
        if not name:
            raise SpecificationError("metadata.name is required")
        if not data.get("baseDomain"):
            raise SpecificationError("baseDomain is required")

        powervs = _mapping(data.get("platform"), "platform").get("powervs")
        if not powervs:
            raise SpecificationError("platform.powervs is required")

        publish = data.get("publish", "External")
        if publish not in ("External", "Internal"):
            raise SpecificationError(f"publish: unknown publishing strategy {publish!r}")

        machine_networks = _mapping(data.get("networking"), "networking").get("machineNetwork") or []
        if not isinstance(machine_networks, list):
            raise SpecificationError("networking.machineNetwork: must be a list")
        networks = []
        for i, entry in enumerate(machine_networks):
            try:
                networks.append(ipaddress.ip_network(entry["cidr"], strict=False))
            except (KeyError, TypeError, ValueError) as e:
                raise SpecificationError(f"networking.machineNetwork[{i}].cidr: {e}") from e

        control_plane = MachinePool.from_dict(data.get("controlPlane"), "master", "controlPlane")
        compute_pools = data.get("compute")
        if compute_pools is None:
            compute = (MachinePool(name="worker"),)
        elif not isinstance(compute_pools, list):
            raise SpecificationError("compute: must be a list of machine pools")
        else:
            compute = tuple(
                MachinePool.from_dict(pool, "worker", f"compute[{i}]") for i, pool in enumerate(compute_pools)
            )

        return cls(
            cluster_name=name,
            base_domain=data["baseDomain"],
            platform=Platform.from_dict(powervs),
            publish=publish,
            machine_networks=tuple(networks),
            control_plane=control_plane,
            compute=compute,
        )


def read_document(path: Path) -> Any:
    """Parse a YAML or TOML file, chosen by suffix."""
    if not path.exists():
        raise FileNotFoundError(path)

    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomli.load(f)

    with open(path) as f:
        return yaml.safe_load(f)


def load_install_config(path: Path) -> InstallConfig:
    """
    Load an install config from disk.

    Args:
        path: Path to install-config.yaml (or .toml)

    Returns:
        The parsed InstallConfig

    Raises:
        SpecificationError: if the file is missing or malformed
    """
    try:
        data = read_document(path)
    except FileNotFoundError as e:
        raise SpecificationError(f"Install config not found: {path}") from e
    except (yaml.YAMLError, tomli.TOMLDecodeError) as e:
        raise SpecificationError(f"Invalid syntax in {path}: {e}") from e

    config = InstallConfig.from_dict(data)
    logger.debug("Loaded install config for cluster %s from %s", config.cluster_name, path)
    return config
