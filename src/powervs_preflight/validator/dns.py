"""
Pre-existing DNS record detection.

The installer creates api and api-int records for the cluster; if either
already exists the install would clobber another cluster's records.
"""

import logging

from powervs_preflight.config.install import InstallConfig
from powervs_preflight.errors import CloudAPIError
from powervs_preflight.inventory.client import CloudClient, MetadataProvider
from powervs_preflight.validator.types import FieldError, duplicate, internal_error

logger = logging.getLogger(__name__)

BASE_DOMAIN_FIELD = "baseDomain"
RECORD_PREFIXES = ("api", "api-int")


def record_names(config: InstallConfig) -> list[str]:
    """DNS names the installer will create for the cluster."""
    return [f"{prefix}.{config.cluster_name}.{config.base_domain}" for prefix in RECORD_PREFIXES]


def validate_preexisting_dns(
    client: CloudClient,
    config: InstallConfig,
    metadata: MetadataProvider,
) -> list[FieldError]:
    """
    Check that none of the cluster's DNS records exist yet.

    Both record names are always queried. A failed lookup is reported as
    a single internal error in place of any duplicates.

    Args:
        client: Cloud inventory client
        config: Parsed install config
        metadata: Provides the CIS instance CRN

    Returns:
        List of field errors, empty if no records exist
    """
    try:
        zone_id = client.get_dns_zone_id(config.base_domain, config.publish)
        crn = metadata.cis_instance_crn()
    except CloudAPIError as e:
        logger.debug("DNS zone lookup for %s failed: %s", config.base_domain, e)
        return [internal_error(BASE_DOMAIN_FIELD)]

    errors = []
    lookup_failed = False
    for name in record_names(config):
        logger.debug("Looking up DNS records named %s in zone %s", name, zone_id)
        try:
            records = client.get_dns_records(crn, zone_id, name, config.publish)
        except CloudAPIError as e:
            logger.debug("DNS record lookup for %s failed: %s", name, e)
            lookup_failed = True
            continue

        if records:
            errors.append(duplicate(
                BASE_DOMAIN_FIELD,
                f"record {name} already exists in CIS zone ({zone_id}) and might be in use "
                "by another cluster, please remove it to continue",
            ))

    if lookup_failed:
        return [internal_error(BASE_DOMAIN_FIELD)]
    return errors
