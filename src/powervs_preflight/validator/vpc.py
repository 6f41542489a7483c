"""
Custom VPC resolution.

Resolves the VPC name, VPC region and subnet names of the install config
against the VPC inventory. When a VPC name is given without a region, the
VPC regions near the PowerVS region are searched in order.
"""

import logging
from dataclasses import dataclass

from powervs_preflight.config.install import InstallConfig
from powervs_preflight.errors import CloudAPIError
from powervs_preflight.inventory.client import CloudClient
from powervs_preflight.inventory.types import VPC
from powervs_preflight.validator.regions import candidate_vpc_regions, is_known_vpc_region
from powervs_preflight.validator.types import FieldError, internal_error, invalid, not_found

logger = logging.getLogger(__name__)

VPC_REGION_FIELD = "platform.powervs.vpcRegion"
VPC_NAME_FIELD = "platform.powervs.vpcName"
VPC_SUBNETS_FIELD = "platform.powervs.vpcSubnets"


@dataclass(frozen=True)
class ResolvedVPC:
    """A VPC found in the inventory, with the region it was found in."""
    vpc: VPC
    region: str


def _find_vpc(client: CloudClient, name: str, region: str) -> VPC | None:
    logger.debug("Looking for VPC %s in %s", name, region)
    for vpc in client.list_vpcs(region):
        if vpc.name == name:
            return vpc
    return None


def resolve_vpc(client: CloudClient, config: InstallConfig) -> tuple[ResolvedVPC | None, list[FieldError]]:
    """
    Resolve the VPC named in the install config.

    Args:
        client: Cloud inventory client
        config: Parsed install config

    Returns:
        The resolved VPC (None if no VPC name was given or it could not be
        resolved) and any errors found on the way
    """
    platform = config.platform

    if platform.vpc_region:
        if not platform.vpc_name:
            if not is_known_vpc_region(platform.vpc_region):
                return None, [not_found(VPC_REGION_FIELD, platform.vpc_region)]
            return None, []

        try:
            vpc = _find_vpc(client, platform.vpc_name, platform.vpc_region)
        except CloudAPIError as e:
            return None, [internal_error(VPC_REGION_FIELD, e)]
        if vpc is None:
            return None, [not_found(VPC_NAME_FIELD, platform.vpc_name)]
        return ResolvedVPC(vpc=vpc, region=platform.vpc_region), []

    if not platform.vpc_name:
        return None, []

    for region in candidate_vpc_regions(platform.region):
        try:
            vpc = _find_vpc(client, platform.vpc_name, region)
        except CloudAPIError as e:
            logger.warning("Could not list VPCs in %s: %s", region, e)
            continue
        if vpc is not None:
            logger.info("Found VPC %s in %s", vpc.name, region)
            return ResolvedVPC(vpc=vpc, region=region), []

    return None, [not_found(VPC_NAME_FIELD, platform.vpc_name)]


def validate_subnets(client: CloudClient, config: InstallConfig, resolved: ResolvedVPC) -> list[FieldError]:
    """Every subnet must exist in the VPC region and belong to the VPC."""
    errors = []

    for i, name in enumerate(config.platform.vpc_subnets):
        path = f"{VPC_SUBNETS_FIELD}[{i}]"
        logger.debug("Looking up subnet %s in %s", name, resolved.region)
        try:
            subnet = client.get_subnet_by_name(name, resolved.region)
        except CloudAPIError as e:
            errors.append(internal_error(path, e))
            continue

        if subnet is None:
            errors.append(not_found(path, name))
        elif subnet.vpc.id != resolved.vpc.id:
            errors.append(invalid(path, name, "not attached to VPC"))

    return errors


def validate_custom_vpc_setup(client: CloudClient, config: InstallConfig) -> list[FieldError]:
    """
    Validate the custom VPC settings of an install config.

    Checks that the VPC region is known, that the VPC exists (searching
    nearby regions when no region is given), and that every listed subnet
    exists and is attached to the VPC.

    Args:
        client: Cloud inventory client
        config: Parsed install config

    Returns:
        List of field errors, empty if the VPC setup is valid
    """
    platform = config.platform

    if platform.vpc_subnets and not platform.vpc_name:
        errors = []
        if platform.vpc_region and not is_known_vpc_region(platform.vpc_region):
            errors.append(not_found(VPC_REGION_FIELD, platform.vpc_region))
        errors.append(invalid(VPC_SUBNETS_FIELD, None, "invalid without vpcName"))
        return errors

    resolved, errors = resolve_vpc(client, config)

    if platform.vpc_subnets:
        if resolved is None:
            logger.info("Skipping subnet checks, VPC %s was not resolved", platform.vpc_name)
        else:
            errors.extend(validate_subnets(client, config, resolved))

    return errors
