"""
Core validation logic for PowerVS install configs.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from powervs_preflight.config.install import InstallConfig, load_install_config
from powervs_preflight.inventory.client import CloudClient, MetadataProvider
from powervs_preflight.inventory.snapshot import SnapshotClient
from powervs_preflight.validator.capability import validate_capabilities
from powervs_preflight.validator.capacity import validate_capacity
from powervs_preflight.validator.dns import validate_preexisting_dns
from powervs_preflight.validator.shape import validate
from powervs_preflight.validator.types import FieldError
from powervs_preflight.validator.vpc import validate_custom_vpc_setup

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Outcome of one group of checks."""
    check: str
    errors: list[FieldError] = field(default_factory=list)
    skipped: str | None = None

    @property
    def passed(self) -> bool:
        return self.skipped is None and not self.errors


@dataclass
class ValidationResults:
    """Collection of validation results."""
    checks: list[CheckResult] = field(default_factory=list)
    config_path: Path | None = None

    @property
    def errors(self) -> list[FieldError]:
        return [e for c in self.checks for e in c.errors]

    @property
    def has_errors(self) -> bool:
        return any(c.errors for c in self.checks)

    def add(self, check: str, errors: list[FieldError]) -> None:
        self.checks.append(CheckResult(check=check, errors=list(errors)))

    def skip(self, check: str, reason: str) -> None:
        logger.info("Skipping %s: %s", check, reason)
        self.checks.append(CheckResult(check=check, skipped=reason))


def validate_all(
    config: InstallConfig,
    client: CloudClient | None = None,
    metadata: MetadataProvider | None = None,
) -> ValidationResults:
    """
    Validate an install config against the PowerVS platform.

    Runs all validation checks:
    1. Static checks (architecture, machine network)
    2. Custom VPC setup, if the config names a VPC, VPC region or subnets
    3. Pre-existing DNS records, if the cluster is published externally
    4. Required capabilities (Power Edge Router by default)
    5. System pool capacity

    Checks 2-5 need a cloud client and are skipped without one. Errors of
    every check are kept; a failing check never stops the others.

    Args:
        config: Parsed install config
        client: Cloud inventory client
        metadata: Provides the CIS instance CRN. Defaults to the client when
            it is also a MetadataProvider; otherwise the DNS check is skipped

    Returns:
        ValidationResults with all check results
    """
    results = ValidationResults()
    platform = config.platform

    results.add("shape", validate(config))

    if client is None:
        for check in ("vpc", "dns", "capabilities", "capacity"):
            results.skip(check, "no inventory available")
        return results

    if platform.has_custom_vpc:
        results.add("vpc", validate_custom_vpc_setup(client, config))
    else:
        results.skip("vpc", "no custom VPC configured")

    if metadata is None and isinstance(client, MetadataProvider):
        metadata = client

    if config.publish != "External":
        results.skip("dns", "cluster is published internally")
    elif metadata is None:
        results.skip("dns", "no CIS instance metadata available")
    else:
        results.add("dns", validate_preexisting_dns(client, config, metadata))

    if platform.required_capabilities:
        results.add("capabilities", validate_capabilities(client, config))
    else:
        results.skip("capabilities", "no capabilities required")

    results.add("capacity", validate_capacity(client, config))

    return results


def validate_config(config_path: Path, inventory_path: Path | None = None) -> ValidationResults:
    """
    Load an install config (and optionally an inventory snapshot) and validate it.

    Raises:
        SpecificationError: if the install config cannot be loaded
        InventoryError: if the inventory snapshot cannot be loaded
    """
    config = load_install_config(config_path)
    client = SnapshotClient.from_file(inventory_path) if inventory_path else None

    results = validate_all(config, client)
    results.config_path = config_path
    return results


CHECK_TITLES = {
    "shape": "Architecture and machine network",
    "vpc": "Custom VPC",
    "dns": "Pre-existing DNS records",
    "capabilities": "Required capabilities",
    "capacity": "System pool capacity",
}


def format_results(results: ValidationResults, console: Console) -> None:
    """Format validation results for display."""
    for check in results.checks:
        title = CHECK_TITLES.get(check.check, check.check)

        if check.skipped:
            console.print(f"[dim]- {title} skipped ({check.skipped})[/dim]")
        elif check.errors:
            console.print(f"[red]✗[/red] {title}")
            for error in check.errors:
                console.print(f"  [red]{escape(str(error))}[/red]", highlight=False)
        else:
            console.print(f"[green]✓[/green] {title}")

    # Summary
    errors = len(results.errors)
    if errors > 0:
        console.print(f"\n[red]{errors} error(s)[/red]")
    else:
        console.print("\n[green]All checks passed[/green]")
