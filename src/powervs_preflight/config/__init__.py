"""
Configuration for powervs-preflight.

Provides the install config model and loader, and user settings.
"""

from powervs_preflight.config.install import (
    InstallConfig,
    MachinePool,
    Platform,
    load_install_config,
    PER_CAPABILITY,
)
from powervs_preflight.config.settings import Settings

__all__ = [
    "InstallConfig",
    "MachinePool",
    "Platform",
    "load_install_config",
    "PER_CAPABILITY",
    "Settings",
]
