"""
powervs-preflight: install-time validation for PowerVS clusters.

Checks an install config against the PowerVS platform and the live cloud
inventory before anything is provisioned.
"""

__version__ = "0.1.0"

from powervs_preflight.validator import validate, validate_all, validate_config
from powervs_preflight.config import InstallConfig, load_install_config
from powervs_preflight.inventory import SnapshotClient

__all__ = [
    "validate",
    "validate_all",
    "validate_config",
    "InstallConfig",
    "load_install_config",
    "SnapshotClient",
]
