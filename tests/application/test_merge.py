from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_mapping_literal.application.merge import merge_mappings
from lib_mapping_literal.domain.errors import InvalidShape


SCALAR = st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=5))
MAPPING = st.dictionaries(st.text(min_size=1, max_size=5), SCALAR, max_size=4)


def test_empty_override_values_do_not_clobber() -> None:
    merged = merge_mappings({"A": "", "B": "Main", "C": "Main"}, [{"A": "", "B": "", "C": "Override"}])
    assert merged == {"A": "", "B": "Main", "C": "Override"}


def test_overrides_apply_left_to_right() -> None:
    merged = merge_mappings(
        {"Mode": "Main", "Name": "Main"},
        [{"Mode": "Override1", "Name": "Override1"}, {"Mode": "", "Name": "Override2"}],
    )
    assert merged == {"Mode": "Override1", "Name": "Override2"}


def test_force_lets_empty_values_replace() -> None:
    merged = merge_mappings({"Mode": "Main", "Level": 3}, [{"Mode": None, "Level": ""}], force=True)
    assert merged == {"Mode": None, "Level": ""}


def test_new_keys_appear_even_when_empty() -> None:
    merged = merge_mappings({"A": 1}, [{"B": None}, {"C": ""}])
    assert list(merged) == ["A", "B", "C"]
    assert merged["B"] is None and merged["C"] == ""


def test_inputs_are_not_mutated_and_nested_values_are_shared() -> None:
    nested = {"Inner": 1}
    base = {"Nested": nested, "Name": "base"}
    override = {"Name": "override"}
    merged = merge_mappings(base, [override])
    assert base == {"Nested": {"Inner": 1}, "Name": "base"}
    assert override == {"Name": "override"}
    assert merged["Nested"] is nested


def test_no_overrides_returns_copy() -> None:
    base = {"A": 1}
    merged = merge_mappings(base, [])
    assert merged == base and merged is not base


def test_overrides_may_be_a_generator() -> None:
    merged = merge_mappings({"A": 1}, ({"A": value} for value in (2, 3)))
    assert merged == {"A": 3}


@pytest.mark.parametrize(("base", "overrides"), [([1], []), ({"A": 1}, [["A"]]), ("A", [])])
def test_non_mapping_inputs_fail_fast(base, overrides) -> None:
    with pytest.raises(InvalidShape):
        merge_mappings(base, overrides)


@given(MAPPING, MAPPING)
def test_every_key_survives(lhs, rhs) -> None:
    merged = merge_mappings(lhs, [rhs])
    assert set(merged) == set(lhs) | set(rhs)


@given(MAPPING, MAPPING)
def test_last_non_empty_write_wins(lhs, rhs) -> None:
    merged = merge_mappings(lhs, [rhs])
    for key, value in rhs.items():
        if value is None or value == "":
            assert merged[key] == lhs.get(key, value)
        else:
            assert merged[key] == value


@given(MAPPING, MAPPING, MAPPING)
def test_folding_is_associative_under_force(lhs, mid, rhs) -> None:
    left = merge_mappings(merge_mappings(lhs, [mid], force=True), [rhs], force=True)
    right = merge_mappings(lhs, [merge_mappings(mid, [rhs], force=True)], force=True)
    assert left == right
