"""Selection helpers for Oracle Cloud images, availability domains, subnets and VCNs."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Image:
    """A compute image with its OCID and creation time."""

    id: str
    time_created: datetime


@dataclass(frozen=True)
class AvailabilityDomain:
    """An availability domain."""

    name: str


@dataclass(frozen=True)
class Subnet:
    """A subnet and the availability domain it lives in."""

    id: str
    availability_domain: str


@dataclass(frozen=True)
class Vcn:
    """A virtual cloud network."""

    id: str


def most_recent_image(images: Sequence[Image]) -> Image:
    """Return the image created most recently, compared to the second."""
    if not images:
        raise ValueError("No images to choose from")
    return sorted(images, key=lambda image: int(image.time_created.timestamp()))[-1]


def availability_domain_names(domains: Iterable[AvailabilityDomain]) -> list[str]:
    """Return the names of the availability domains, in order."""
    return [domain.name for domain in domains]


def map_subnets_by_availability_domain(
    all_subnets: dict[str, list[str]], subnets: Iterable[Subnet]
) -> dict[str, list[str]]:
    """Add each subnet's OCID under its availability domain in all_subnets and return it."""
    for subnet in subnets:
        all_subnets.setdefault(subnet.availability_domain, []).append(subnet.id)
    return all_subnets


def vcn_ids(vcns: Iterable[Vcn]) -> list[str]:
    """Return the OCIDs of the VCNs, in order."""
    return [vcn.id for vcn in vcns]