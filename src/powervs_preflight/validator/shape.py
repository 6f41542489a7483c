"""
Static checks on the install config.

These need no cloud access.
"""

from powervs_preflight.config.install import InstallConfig
from powervs_preflight.validator.regions import SUPPORTED_ARCHITECTURES
from powervs_preflight.validator.types import FieldError, invalid, not_supported

MACHINE_NETWORK_PREFIX = 24


def validate_architecture(config: InstallConfig) -> list[FieldError]:
    """Every machine pool must use the one architecture PowerVS supports."""
    errors = []

    if config.control_plane.architecture not in SUPPORTED_ARCHITECTURES:
        errors.append(not_supported(
            "controlPlane.architecture",
            config.control_plane.architecture,
            SUPPORTED_ARCHITECTURES,
        ))

    for i, pool in enumerate(config.compute):
        if pool.architecture not in SUPPORTED_ARCHITECTURES:
            errors.append(not_supported(
                f"compute[{i}].architecture",
                pool.architecture,
                SUPPORTED_ARCHITECTURES,
            ))

    return errors


def validate_machine_network(config: InstallConfig) -> list[FieldError]:
    """The first machine network must be exactly a /24."""
    if not config.machine_networks:
        return []

    cidr = config.machine_networks[0]
    if cidr.prefixlen != MACHINE_NETWORK_PREFIX:
        return [invalid(
            "Networking.MachineNetwork.CIDR",
            str(cidr),
            f"Machine Pool CIDR must be /{MACHINE_NETWORK_PREFIX}.",
        )]
    return []


def validate(config: InstallConfig) -> list[FieldError]:
    """
    Run the static checks on an install config.

    Args:
        config: Parsed install config

    Returns:
        List of field errors, empty if the config is well formed
    """
    errors = []
    errors.extend(validate_architecture(config))
    errors.extend(validate_machine_network(config))
    return errors
