"""Domain Types — identity wrappers, sentinel and predicate enums."""

from donor_registry.core.domain_types import (
    ALL_BLOOD_GROUPS, DistrictId, DonorColumn, DonorId, Operator, TalukId,
)


def test_identity_types_wrap_int():
    assert DonorId(7) == 7
    assert DistrictId(3) == 3
    assert TalukId(9) == 9


def test_all_blood_groups_sentinel():
    assert ALL_BLOOD_GROUPS == "all"


def test_searchable_columns_match_indexed_columns():
    assert {c.value for c in DonorColumn} == {
        "blood_group", "district", "taluk", "name", "last_donated",
    }


def test_operators_serialize_to_str():
    assert Operator.CONTAINS_CI.value == "icontains"
    assert isinstance(Operator.EQUALS, str)
