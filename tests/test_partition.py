import pytest

from tepi.services.partition import ANONYMOUS, COMMUNITY, PUBLIC, resolve_partition


@pytest.mark.parametrize("section", [None, "", "   ", "public"])
def test_missing_or_public_section_is_public(section):
    partition = resolve_partition(section)
    assert partition.kind == PUBLIC
    assert partition.section == PUBLIC
    assert partition.community_id is None
    assert partition.suppress_authors is False


def test_anonymous_section_suppresses_authors():
    partition = resolve_partition("anonymous")
    assert partition.kind == ANONYMOUS
    assert partition.suppress_authors is True


def test_any_other_section_is_a_community():
    partition = resolve_partition("c-cars")
    assert partition.kind == COMMUNITY
    assert partition.community_id == "c-cars"
    assert partition.suppress_authors is False


def test_in_memory_matching_follows_query_rules():
    public = resolve_partition("public")
    anonymous = resolve_partition("anonymous")
    cars = resolve_partition("c-cars")

    assert public.matches("public", None)
    assert not public.matches("public", "c-cars")
    assert not public.matches("anonymous", None)
    assert anonymous.matches("anonymous", None)
    assert not anonymous.matches("anonymous", "c-cars")
    # Community membership ignores visibility
    assert cars.matches("public", "c-cars")
    assert cars.matches("anonymous", "c-cars")
    assert not cars.matches("public", None)


def test_partitions_compare_by_value():
    assert resolve_partition(None) == resolve_partition("public")
    assert resolve_partition("c-cars") != resolve_partition("c-bikes")
