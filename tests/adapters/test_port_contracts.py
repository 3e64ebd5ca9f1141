"""Adapter contract tests for the codec ports.

Verify the default readers and writers keep satisfying the protocols in
``src/lib_mapping_literal/application/ports.py`` so suffix dispatch in the
composition root stays interchangeable.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from lib_mapping_literal.adapters.codecs import structured as structured_module
from lib_mapping_literal.adapters.codecs.structured import (
    JSONFileReader,
    JSONFileWriter,
    LiteralFileWriter,
    TOMLFileReader,
    YAMLFileReader,
    YAMLFileWriter,
)
from lib_mapping_literal.application import ports

readers = [TOMLFileReader, JSONFileReader]
writers = [LiteralFileWriter, JSONFileWriter]
if structured_module.yaml is not None:
    readers.append(YAMLFileReader)
    writers.append(YAMLFileWriter)


@pytest.mark.parametrize("reader_cls", readers)
def test_structured_reader_contract(tmp_path: Path, reader_cls) -> None:
    """Each reader should satisfy MappingReader and decode its target format."""

    reader = reader_cls()
    assert isinstance(reader, ports.MappingReader)

    if isinstance(reader, TOMLFileReader):
        path = tmp_path / "config.toml"
        path.write_text("[service]\nvalue = 1\n", encoding="utf-8")
    elif isinstance(reader, JSONFileReader):
        path = tmp_path / "config.json"
        path.write_text('{"service": {"value": 1}}', encoding="utf-8")
    else:
        path = tmp_path / "config.yaml"
        path.write_text("service:\n  value: 1\n", encoding="utf-8")

    data = reader.load(str(path))
    assert data["service"]["value"] == 1


@pytest.mark.parametrize("writer_cls", writers)
def test_structured_writer_contract(tmp_path: Path, writer_cls) -> None:
    """Each writer should satisfy MappingWriter and write exactly what it renders."""

    writer = writer_cls()
    assert isinstance(writer, ports.MappingWriter)

    mapping = {"service": {"value": 1}}
    path = tmp_path / f"out.{writer.format_name}"
    writer.save(mapping, str(path))
    assert path.read_text(encoding="utf-8") == writer.render(mapping) + "\n"
