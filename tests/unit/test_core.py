from __future__ import annotations

from collections import OrderedDict
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest

from lib_mapping_literal import (
    CodecError,
    InvalidFormat,
    InvalidShape,
    NotFound,
    UnsupportedFormat,
    load_mapping,
    read_mappings,
    save_mapping,
)
from lib_mapping_literal.core import reader_for, writer_for


def test_load_dispatches_on_suffix_case_insensitively(tmp_path: Path) -> None:
    path = tmp_path / "settings.JSON"
    path.write_text('{"Name": "demo"}', encoding="utf-8")
    assert load_mapping(path) == {"Name": "demo"}


def test_unknown_suffix_is_unsupported(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedFormat, match="unsupported suffix '.ini'"):
        load_mapping(tmp_path / "settings.ini")
    with pytest.raises(UnsupportedFormat):
        save_mapping({"A": 1}, tmp_path / "settings.ini")


@pytest.mark.parametrize("name", ["settings.psd1", "settings.ps1"])
def test_literal_files_are_write_only(tmp_path: Path, name: str) -> None:
    with pytest.raises(UnsupportedFormat, match="write-only"):
        reader_for(tmp_path / name)
    assert writer_for(tmp_path / name).format_name == name.rsplit(".", 1)[1]


def test_missing_file_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        load_mapping(tmp_path / "missing.toml")


def test_invalid_content_is_wrapped(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(CodecError) as excinfo:
        load_mapping(path)
    assert excinfo.value.__cause__ is not None


def test_write_failure_is_wrapped(tmp_path: Path) -> None:
    with pytest.raises(CodecError) as excinfo:
        save_mapping({"A": 1}, tmp_path / "missing-dir" / "out.psd1")
    assert isinstance(excinfo.value.__cause__, OSError)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (("a", "b"), ["a", "b"]),
        (Decimal("1.5"), "1.5"),
        (OrderedDict(a=1), {"a": 1}),
    ],
)
def test_yaml_save_accepts_tuples_decimals_and_mapping_subclasses(tmp_path: Path, value: Any, expected: Any) -> None:
    pytest.importorskip("yaml")
    target = save_mapping({"Key": value}, tmp_path / "out.yaml")
    assert load_mapping(target) == {"Key": expected}


def test_render_failure_is_wrapped(tmp_path: Path) -> None:
    looped: dict[str, Any] = {}
    looped["Self"] = looped
    with pytest.raises(CodecError) as excinfo:
        save_mapping(looped, tmp_path / "out.json")
    assert isinstance(excinfo.value.__cause__, InvalidFormat)
    assert not (tmp_path / "out.json").exists()


def test_cyclic_mapping_fails_cleanly_as_yaml(tmp_path: Path) -> None:
    pytest.importorskip("yaml")
    looped: dict[str, Any] = {}
    looped["Self"] = looped
    with pytest.raises(CodecError) as excinfo:
        save_mapping(looped, tmp_path / "out.yaml")
    assert isinstance(excinfo.value.__cause__, InvalidFormat)


def test_save_writes_literal_verbatim(tmp_path: Path) -> None:
    target = save_mapping({"Name": "O'Reilly", "Tags": ["a", "b"]}, tmp_path / "out.ps1")
    assert target.read_text(encoding="utf-8") == (
        "@{\n    Name = 'O''Reilly'\n    Tags = @(\n        'a'\n        'b'\n    )\n}\n"
    )


def test_save_rejects_non_mappings(tmp_path: Path) -> None:
    with pytest.raises(InvalidShape):
        save_mapping([1, 2], tmp_path / "out.json")  # type: ignore[arg-type]


def test_json_save_then_load(tmp_path: Path) -> None:
    mapping = {"b": 1, "a": {"c": [1, None, "x"]}}
    assert load_mapping(save_mapping(mapping, tmp_path / "out.json")) == mapping


def test_read_mappings_keeps_order(tmp_path: Path) -> None:
    first = tmp_path / "a.json"
    second = tmp_path / "b.toml"
    first.write_text('{"A": 1}', encoding="utf-8")
    second.write_text('A = 2\n', encoding="utf-8")
    assert read_mappings([first, second]) == [{"A": 1}, {"A": 2}]
