"""
Regional and workspace capability checks.

Capability maps from the cloud have three states: true, false, and absent.
They are translated into a Capability value as soon as they are fetched.
"""

import logging
from enum import Enum

from powervs_preflight.config.install import PER_CAPABILITY, InstallConfig
from powervs_preflight.errors import CloudAPIError
from powervs_preflight.inventory.client import CloudClient
from powervs_preflight.validator.types import FieldError, internal_error, invalid

logger = logging.getLogger(__name__)

ZONE_FIELD = "platform.powervs.zone"
WORKSPACE_FIELD = "platform.powervs.serviceInstanceID"


class Capability(Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"

    @classmethod
    def lookup(cls, capabilities: dict[str, bool], name: str) -> "Capability":
        if name not in capabilities:
            return cls.UNKNOWN
        return cls.AVAILABLE if capabilities[name] else cls.UNAVAILABLE


def region_capability(client: CloudClient, region: str, name: str) -> Capability:
    """Fetch a capability of a datacenter. Raises CloudAPIError."""
    return Capability.lookup(client.get_datacenter_capabilities(region), name)


def workspace_capability(client: CloudClient, workspace_id: str, name: str) -> Capability:
    """Fetch a capability of a workspace. Raises CloudAPIError."""
    return Capability.lookup(client.get_workspace_capabilities(workspace_id), name)


def check_capability(
    client: CloudClient,
    region: str,
    workspace_id: str | None,
    name: str,
) -> list[FieldError]:
    """
    Check that a capability is available in a region and workspace.

    Args:
        client: Cloud inventory client
        region: Datacenter (PowerVS zone) to check
        workspace_id: Workspace to check as well, if any
        name: Capability name, e.g. "power-edge-router"

    Returns:
        List with at most one field error
    """
    try:
        at_region = region_capability(client, region, name)
    except CloudAPIError as e:
        return [internal_error(ZONE_FIELD, e)]

    logger.debug("%s at %s: %s", name, region, at_region.value)
    if at_region == Capability.UNKNOWN:
        return [internal_error(ZONE_FIELD, f"{name} capability unknown at: {region}")]
    if at_region == Capability.UNAVAILABLE:
        return [invalid(ZONE_FIELD, region, f"{name} is not available at: {region}")]

    if not workspace_id:
        return []

    try:
        in_workspace = workspace_capability(client, workspace_id, name)
    except CloudAPIError as e:
        return [internal_error(WORKSPACE_FIELD, e)]

    logger.debug("%s in workspace %s: %s", name, workspace_id, in_workspace.value)
    if in_workspace != Capability.AVAILABLE:
        return [invalid(WORKSPACE_FIELD, workspace_id, f"{name} is not available in workspace: {workspace_id}")]
    return []


def validate_capabilities(client: CloudClient, config: InstallConfig) -> list[FieldError]:
    """Check every capability the install config requires."""
    errors = []
    platform = config.platform
    for name in platform.required_capabilities:
        errors.extend(check_capability(client, platform.zone, platform.service_instance_id, name))
    return errors


def validate_per_availability(client: CloudClient, config: InstallConfig) -> list[FieldError]:
    """Check that Power Edge Router is available for the cluster's zone and workspace."""
    platform = config.platform
    return check_capability(client, platform.zone, platform.service_instance_id, PER_CAPABILITY)
