"""
PowerVS region catalogue.

Maps each PowerVS region to its zones and to the VPC regions that sit
close enough to host the cluster's VPC.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Region:
    """A PowerVS region and the VPC regions nearest to it."""
    name: str
    description: str
    zones: tuple[str, ...]
    vpc_regions: tuple[str, ...]

# Candidate VPC regions are searched in order when a VPC name is given
# without a region.
REGIONS: dict[str, Region] = {
    "dal": Region("dal", "Dallas, USA", ("dal10", "dal12"), ("us-south",)),
    "us-south": Region("us-south", "Dallas, USA", ("us-south",), ("us-south",)),
    "wdc": Region("wdc", "Washington DC, USA", ("wdc06", "wdc07"), ("us-east", "us-south")),
    "us-east": Region("us-east", "Washington DC, USA", ("us-east",), ("us-east", "us-south")),
    "sao": Region("sao", "São Paulo, Brazil", ("sao01", "sao04"), ("br-sao", "us-south")),
    "tor": Region("tor", "Toronto, Canada", ("tor01",), ("ca-tor", "us-east")),
    "mon": Region("mon", "Montreal, Canada", ("mon01",), ("ca-tor", "us-east")),
    "eu-de": Region("eu-de", "Frankfurt, Germany", ("eu-de-1", "eu-de-2"), ("eu-de", "eu-gb", "eu-es")),
    "lon": Region("lon", "London, UK", ("lon04", "lon06"), ("eu-gb", "eu-de")),
    "mad": Region("mad", "Madrid, Spain", ("mad02", "mad04"), ("eu-es", "eu-de")),
    "syd": Region("syd", "Sydney, Australia", ("syd04", "syd05"), ("au-syd", "jp-tok")),
    "tok": Region("tok", "Tokyo, Japan", ("tok04",), ("jp-tok", "jp-osa")),
    "osa": Region("osa", "Osaka, Japan", ("osa21",), ("jp-osa", "jp-tok")),
}

KNOWN_VPC_REGIONS: frozenset[str] = frozenset(
    vpc_region for region in REGIONS.values() for vpc_region in region.vpc_regions
)

SUPPORTED_ARCHITECTURES: tuple[str, ...] = ("ppc64le",)


def get_region(name: str) -> Region | None:
    """Get a PowerVS region by name."""
    return REGIONS.get(name.lower())


def candidate_vpc_regions(region: str) -> list[str]:
    """
    VPC regions to search for a VPC near the given PowerVS region.

    Unknown PowerVS regions yield no candidates.
    """
    entry = get_region(region)
    if entry is None:
        return []
    return list(entry.vpc_regions)


def is_known_vpc_region(name: str) -> bool:
    return name in KNOWN_VPC_REGIONS
