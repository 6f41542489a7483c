"""
powervs-preflight CLI - install-time validation for PowerVS clusters.

Commands:
    validate    Run every check on an install config
    vpc         Check custom VPC settings only
    dns         Check for pre-existing DNS records only
    capacity    Check system pool capacity only
    per         Check Power Edge Router availability only
    regions     List PowerVS regions and their VPC regions
"""

from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.table import Table

from powervs_preflight.config import Settings, load_install_config
from powervs_preflight.errors import PreflightError
from powervs_preflight.inventory import SnapshotClient
from powervs_preflight.log import setup_logging
from powervs_preflight.validator import CheckResult, ValidationResults, format_results

app = typer.Typer(
    name="powervs-preflight",
    help="Install-time validation for PowerVS clusters",
    no_args_is_help=True,
)

console = Console()

state = {"settings": Settings()}


def _inventory_path(inventory: Optional[Path]) -> Path:
    path = inventory or state["settings"].inventory_path
    if path is None:
        console.print("[red]No inventory snapshot given (use --inventory or POWERVS_PREFLIGHT_INVENTORY)[/red]")
        raise typer.Exit(2)
    return path


def _run_check(config_path: Path, inventory: Optional[Path], name: str, check: Callable) -> None:
    """Load inputs, run one check, print it and exit 1 on errors."""
    try:
        config = load_install_config(config_path)
        client = SnapshotClient.from_file(_inventory_path(inventory))
    except PreflightError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    results = ValidationResults(config_path=config_path)
    results.checks.append(CheckResult(check=name, errors=check(client, config)))
    format_results(results, console)

    if results.has_errors:
        raise typer.Exit(1)


InventoryOption = typer.Option(None, "--inventory", "-i", help="Inventory snapshot (YAML or TOML)")


@app.command()
def validate(
    config_path: Path = typer.Argument(..., help="Path to install-config.yaml"),
    inventory: Optional[Path] = InventoryOption,
) -> None:
    """
    Pre-flight validation of PowerVS install configs.

    Checks:
    - Architecture is ppc64le and the machine network is a /24
    - Custom VPC, VPC region and subnets exist and belong together
    - api/api-int DNS records do not exist yet
    - Power Edge Router is available in the zone and workspace
    - System pools have enough cores and memory

    Without an inventory snapshot only the static checks run.

    Example:
        powervs-preflight validate install-config.yaml -i inventory.yaml
    """
    from powervs_preflight.validator import validate_config

    inventory = inventory or state["settings"].inventory_path
    console.print(f"[bold]Validating[/bold] {config_path}")

    try:
        results = validate_config(config_path, inventory)
    except PreflightError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    format_results(results, console)

    if results.has_errors:
        raise typer.Exit(1)


@app.command()
def vpc(
    config_path: Path = typer.Argument(..., help="Path to install-config.yaml"),
    inventory: Optional[Path] = InventoryOption,
) -> None:
    """Check the custom VPC name, region and subnets."""
    from powervs_preflight.validator import validate_custom_vpc_setup

    _run_check(config_path, inventory, "vpc", validate_custom_vpc_setup)


@app.command()
def dns(
    config_path: Path = typer.Argument(..., help="Path to install-config.yaml"),
    inventory: Optional[Path] = InventoryOption,
) -> None:
    """Check that the cluster's api and api-int records do not exist yet."""
    from powervs_preflight.validator import validate_preexisting_dns

    _run_check(
        config_path, inventory, "dns",
        lambda client, config: validate_preexisting_dns(client, config, client),
    )


@app.command()
def capacity(
    config_path: Path = typer.Argument(..., help="Path to install-config.yaml"),
    inventory: Optional[Path] = InventoryOption,
) -> None:
    """Check that the system pools can host the requested machines."""
    from powervs_preflight.validator import validate_capacity

    _run_check(config_path, inventory, "capacity", validate_capacity)


@app.command()
def per(
    config_path: Path = typer.Argument(..., help="Path to install-config.yaml"),
    inventory: Optional[Path] = InventoryOption,
) -> None:
    """Check Power Edge Router availability in the zone and workspace."""
    from powervs_preflight.validator import validate_per_availability

    _run_check(config_path, inventory, "capabilities", validate_per_availability)


@app.command()
def regions() -> None:
    """List PowerVS regions, their zones and nearby VPC regions."""
    from powervs_preflight.validator.regions import REGIONS

    table = Table(title="PowerVS Regions")
    table.add_column("Region", style="cyan")
    table.add_column("Location")
    table.add_column("Zones")
    table.add_column("VPC Regions")

    for region in REGIONS.values():
        table.add_row(
            region.name,
            region.description,
            ", ".join(region.zones),
            ", ".join(region.vpc_regions),
        )

    console.print(table)


def _show_version(value: bool) -> None:
    if value:
        from powervs_preflight import __version__
        console.print(f"powervs-preflight {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version", callback=_show_version, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Log cloud lookups"),
) -> None:
    """powervs-preflight: install-time validation for PowerVS clusters."""
    try:
        state["settings"] = Settings.load()
    except PreflightError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    setup_logging("DEBUG" if verbose else state["settings"].log_level)


if __name__ == "__main__":
    app()
