"""
Install-time validation for PowerVS install configs.

This module validates configs before any infrastructure is created:
- Static shape (architecture, machine network CIDR)
- Custom VPC setup (VPC name/region, subnets)
- Pre-existing DNS records for the cluster
- Required capabilities (Power Edge Router) in zone and workspace
- System pool capacity for the requested machines
"""

from powervs_preflight.validator.types import ErrorKind, FieldError, aggregate, format_number
from powervs_preflight.validator.core import (
    validate_all,
    validate_config,
    ValidationResults,
    CheckResult,
    format_results,
)
from powervs_preflight.validator.shape import validate
from powervs_preflight.validator.vpc import resolve_vpc, validate_custom_vpc_setup
from powervs_preflight.validator.dns import validate_preexisting_dns
from powervs_preflight.validator.capacity import (
    CapacityShortage,
    NodeRequest,
    plan_capacity,
    validate_capacity,
)
from powervs_preflight.validator.capability import (
    Capability,
    check_capability,
    validate_per_availability,
)

__all__ = [
    # Core validation
    "validate_all",
    "validate_config",
    "ValidationResults",
    "CheckResult",
    "format_results",
    "ErrorKind",
    "FieldError",
    "aggregate",
    "format_number",
    # Individual checks
    "validate",
    "resolve_vpc",
    "validate_custom_vpc_setup",
    "validate_preexisting_dns",
    "CapacityShortage",
    "NodeRequest",
    "plan_capacity",
    "validate_capacity",
    "Capability",
    "check_capability",
    "validate_per_availability",
]
