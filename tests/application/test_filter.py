from __future__ import annotations

from collections import OrderedDict

import pytest

from lib_mapping_literal.application.filter import remove_entries
from lib_mapping_literal.domain.errors import InvalidShape
from lib_mapping_literal.domain.values import ValueKind


def _sample() -> dict[str, object]:
    return {
        "Name": "demo",
        "Blank": "",
        "Missing": None,
        "Port": 8080,
        "Ratio": 0.5,
        "Enabled": True,
        "Tags": ["a"],
        "Nested": {"A": 1},
    }


def test_null_or_empty_removes_only_blank_values() -> None:
    mapping = _sample()
    original = len(mapping)
    result = remove_entries(mapping, null_or_empty=True)
    assert result is mapping
    assert "Blank" not in mapping and "Missing" not in mapping
    assert len(mapping) == original - 2


def test_remove_types_uses_concrete_kind() -> None:
    mapping = remove_entries(_sample(), remove_types=[ValueKind.INTEGER])
    assert "Port" not in mapping
    assert "Enabled" in mapping
    assert "Ratio" in mapping


def test_remove_keys() -> None:
    mapping = remove_entries(_sample(), remove_keys=["Name", "Unknown"])
    assert "Name" not in mapping
    assert len(mapping) == 7


def test_keep_rules_win_over_remove_all() -> None:
    mapping = remove_entries(
        _sample(),
        remove_all=True,
        keep_keys=["Name"],
        keep_types=[ValueKind.MAPPING],
    )
    assert list(mapping) == ["Name", "Nested"]


def test_keep_key_wins_over_remove_key_and_type() -> None:
    mapping = remove_entries(
        _sample(),
        remove_keys=["Port"],
        remove_types=[ValueKind.INTEGER],
        keep_keys=["Port"],
    )
    assert mapping["Port"] == 8080


def test_keep_null_or_empty_wins_over_null_or_empty_and_remove_all() -> None:
    mapping = remove_entries(_sample(), null_or_empty=True, keep_null_or_empty=True, remove_all=True)
    assert list(mapping) == ["Blank", "Missing"]


def test_keep_type_wins_over_null_or_empty() -> None:
    mapping = remove_entries(_sample(), null_or_empty=True, keep_types=[ValueKind.NULL])
    assert "Missing" in mapping
    assert "Blank" not in mapping


def test_default_keeps_everything() -> None:
    mapping = remove_entries(_sample())
    assert mapping == _sample()


def test_order_of_survivors_is_preserved() -> None:
    mapping = OrderedDict([("c", None), ("b", 1), ("a", "")])
    remove_entries(mapping, null_or_empty=True)
    assert list(mapping) == ["b"]


def test_immutable_mapping_is_rejected() -> None:
    from types import MappingProxyType

    with pytest.raises(InvalidShape):
        remove_entries(MappingProxyType({"A": 1}), remove_all=True)
