from datetime import datetime, timedelta, timezone

import pytest

from infratest.oci import (
    AvailabilityDomain,
    Image,
    Subnet,
    Vcn,
    availability_domain_names,
    map_subnets_by_availability_domain,
    most_recent_image,
    vcn_ids,
)

BASE = datetime(2019, 1, 1, tzinfo=timezone.utc)


def test_most_recent_image_picks_latest():
    old = Image("img-old", BASE)
    new = Image("img-new", BASE + timedelta(days=3))
    middle = Image("img-mid", BASE + timedelta(days=1))
    assert most_recent_image([old, new, middle]).id == "img-new"


def test_most_recent_image_single():
    only = Image("img-only", BASE)
    assert most_recent_image([only]) == only


def test_most_recent_image_does_not_mutate_input():
    images = [Image("b", BASE + timedelta(hours=2)), Image("a", BASE)]
    copy = list(images)
    most_recent_image(images)
    assert images == copy


def test_most_recent_image_empty_raises():
    with pytest.raises(ValueError):
        most_recent_image([])


def test_availability_domain_names_preserves_order():
    domains = [AvailabilityDomain("ad-2"), AvailabilityDomain("ad-1")]
    assert availability_domain_names(domains) == ["ad-2", "ad-1"]


def test_availability_domain_names_empty():
    assert availability_domain_names([]) == []


def test_map_subnets_groups_by_domain():
    subnets = [
        Subnet("subnet-a", "ad-1"),
        Subnet("subnet-b", "ad-2"),
        Subnet("subnet-c", "ad-1"),
    ]
    result = map_subnets_by_availability_domain({}, subnets)
    assert result == {"ad-1": ["subnet-a", "subnet-c"], "ad-2": ["subnet-b"]}


def test_map_subnets_accumulates_into_given_mapping():
    existing = {"ad-1": ["subnet-x"]}
    result = map_subnets_by_availability_domain(existing, [Subnet("subnet-y", "ad-1")])
    assert result is existing
    assert existing["ad-1"] == ["subnet-x", "subnet-y"]


def test_vcn_ids():
    assert vcn_ids([Vcn("vcn-1"), Vcn("vcn-2")]) == ["vcn-1", "vcn-2"]