import pytest

from fbaskit.fbas import Fbas
from fbaskit.groupings import Grouping, Groupings


def make_groupings():
    fbas = Fbas.generic_unconfigured(43)
    groups = [
        Grouping(name="test1", validators=[2, 3, 4]),
        Grouping(name="test2", validators=[23, 42]),
    ]
    return groups, Groupings(groups, fbas)


def test_number_of_groupings_matches_input():
    groups, groupings = make_groupings()
    assert groupings.number_of_groupings() == len(groups)


def test_get_by_member_finds_grouping():
    groups, groupings = make_groupings()
    for grouping in groups:
        for member in grouping.validators:
            assert groupings.get_by_member(member) == grouping


def test_get_by_member_of_ungrouped_node_is_none():
    _, groupings = make_groupings()
    assert groupings.get_by_member(0) is None


def test_get_by_name():
    groups, groupings = make_groupings()
    assert groupings.get_by_name("test2") == groups[1]
    assert groupings.get_by_name("missing") is None


def test_members_merge_into_first_member():
    groups, groupings = make_groupings()
    for grouping in groups:
        first = grouping.validators[0]
        assert all(groupings.merged_ids[v] == first for v in grouping.validators)


def test_ungrouped_nodes_keep_their_ids():
    groups, groupings = make_groupings()
    grouped = {v for g in groups for v in g.validators}
    for node_id, merged in enumerate(groupings.merged_ids):
        if node_id not in grouped:
            assert merged == node_id


def test_empty_grouping_changes_nothing():
    fbas = Fbas.generic_unconfigured(3)
    groupings = Groupings([Grouping(name="empty")], fbas)
    assert groupings.merged_ids == list(range(3))
    assert groupings.get_by_member(0) is None


def test_member_outside_fbas_raises():
    fbas = Fbas.generic_unconfigured(2)
    with pytest.raises(IndexError):
        Groupings([Grouping(name="g", validators=[0, 5])], fbas)


def test_equality():
    _, first = make_groupings()
    _, second = make_groupings()
    assert first == second
    other = Groupings([Grouping(name="test1", validators=[2, 3])], first.fbas)
    assert not first == other