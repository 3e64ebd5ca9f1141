"""Composition root for ``lib_mapping_literal``.

Purpose
-------
Provide the entry points that connect the codec adapters (file readers and
writers selected by suffix) with the pure converter, filter, merger, and
formatter.

Contents
--------
* :data:`_READERS` / :data:`_WRITERS` – mapping of file suffixes to adapters.
* :class:`CodecError` – raised when an adapter fails to read or write a file.
* :func:`load_mapping` / :func:`read_mappings` – suffix-dispatched loading.
* :func:`save_mapping` – suffix-dispatched persistence.
* :func:`reader_for` / :func:`writer_for` – dispatch helpers.

System Role
-----------
The only module that touches the filesystem through adapters. It binds a fresh
trace identifier per public call and emits structured events so operators can
follow which files were read or written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping
from uuid import uuid4

from .adapters.codecs.structured import (
    JSONFileReader,
    JSONFileWriter,
    LiteralFileWriter,
    TOMLFileReader,
    YAMLFileReader,
    YAMLFileWriter,
)
from .application.convert import to_mapping, to_object
from .application.filter import remove_entries
from .application.merge import merge_mappings
from .application.ports import MappingReader, MappingWriter
from .domain.errors import (
    DepthExceeded,
    InvalidFormat,
    InvalidShape,
    MappingError,
    NotFound,
    UnsupportedFormat,
)
from .domain.values import ValueKind
from .formatting.literal import format_literal
from .observability import bind_trace_id, log_debug, log_error, log_info, make_event

# Literal suffixes are write-only: parsing the notation back is left to the
# external reader that consumes these files.
LITERAL_SUFFIXES = (".psd1", ".ps1")

_READERS: dict[str, MappingReader] = {
    ".json": JSONFileReader(),
    ".toml": TOMLFileReader(),
    ".yaml": YAMLFileReader(),
    ".yml": YAMLFileReader(),
}

_WRITERS: dict[str, MappingWriter] = {
    ".psd1": LiteralFileWriter("psd1"),
    ".ps1": LiteralFileWriter("ps1"),
    ".json": JSONFileWriter(),
    ".yaml": YAMLFileWriter(),
    ".yml": YAMLFileWriter(),
}


class CodecError(MappingError):
    """Raised when a file cannot be read or written by its codec adapter.

    Why
    ----
    Callers catch a single library exception family; the adapter failure
    (:class:`InvalidFormat`, :class:`OSError`) stays available as
    ``__cause__``.
    """


def reader_for(path: str | Path) -> MappingReader:
    """Return the reader registered for the suffix of *path*.

    Examples
    --------
    >>> reader_for("settings.JSON").format_name
    'json'
    >>> reader_for("settings.psd1")
    Traceback (most recent call last):
    ...
    lib_mapping_literal.domain.errors.UnsupportedFormat: Reading '.psd1' files is not supported; the literal notation is write-only
    """

    suffix = Path(path).suffix.lower()
    if suffix in LITERAL_SUFFIXES:
        raise UnsupportedFormat(f"Reading {suffix!r} files is not supported; the literal notation is write-only")
    try:
        return _READERS[suffix]
    except KeyError:
        raise UnsupportedFormat(_unsupported_message("read", path, _READERS)) from None


def writer_for(path: str | Path) -> MappingWriter:
    """Return the writer registered for the suffix of *path*.

    Examples
    --------
    >>> writer_for("build/settings.psd1").format_name
    'psd1'
    """

    suffix = Path(path).suffix.lower()
    try:
        return _WRITERS[suffix]
    except KeyError:
        raise UnsupportedFormat(_unsupported_message("write", path, _WRITERS)) from None


def load_mapping(path: str | Path) -> dict[str, Any]:
    """Read *path* with the reader chosen by its suffix and return a ``dict``.

    Raises
    ------
    UnsupportedFormat
        For unknown or write-only suffixes.
    NotFound
        When the file does not exist.
    CodecError
        When the file cannot be parsed or read.
    """

    bind_trace_id(uuid4().hex)
    reader = reader_for(path)
    data = _load_with(reader, str(path))
    log_info("mapping_loaded", **make_event("load", data, path=str(path), format=reader.format_name))
    return data


def read_mappings(paths: Iterable[str | Path]) -> list[dict[str, Any]]:
    """Load every file in *paths* in order (lowest precedence first)."""

    bind_trace_id(uuid4().hex)
    collected = [_load_with(reader_for(path), str(path)) for path in paths]
    log_debug("mappings_loaded", **make_event("load", files=len(collected)))
    return collected


def save_mapping(mapping: Mapping[str, Any], path: str | Path, **format_options: Any) -> Path:
    """Write *mapping* to *path* using the writer chosen by its suffix.

    ``format_options`` (``indent_level``, ``align_keys``,
    ``flatten_sequences``, ``max_depth``) apply to the literal writers and are
    ignored by the JSON and YAML writers.

    Returns
    -------
    Path
        The written path.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = save_mapping({"Name": "demo"}, Path(tmp.name) / "demo.psd1")
    >>> print(target.read_text(encoding="utf-8"), end="")
    @{
        Name = 'demo'
    }
    >>> tmp.cleanup()
    """

    if not isinstance(mapping, Mapping):
        raise InvalidShape(f"Cannot save {type(mapping).__name__}: expected a mapping")
    bind_trace_id(uuid4().hex)
    target = Path(path)
    writer = writer_for(target)
    try:
        writer.save(mapping, str(target), **format_options)
    except (InvalidFormat, OSError) as exc:
        log_error("mapping_save_failed", **make_event("save", mapping, path=str(target), error=str(exc)))
        raise CodecError(f"Failed to write {target}: {exc}") from exc
    log_info("mapping_saved", **make_event("save", mapping, path=str(target), format=writer.format_name))
    return target


def _load_with(reader: MappingReader, path: str) -> dict[str, Any]:
    try:
        return dict(reader.load(path))
    except (InvalidFormat, OSError) as exc:
        log_debug("mapping_load_failed", **make_event("load", path=path, error=str(exc)))
        raise CodecError(f"Failed to load {path}: {exc}") from exc


def _unsupported_message(action: str, path: str | Path, registry: Mapping[str, object]) -> str:
    suffix = Path(path).suffix or "<none>"
    known = ", ".join(sorted(registry))
    return f"Cannot {action} {path}: unsupported suffix {suffix!r} (expected one of: {known})"


__all__ = [
    "CodecError",
    "DepthExceeded",
    "InvalidFormat",
    "InvalidShape",
    "MappingError",
    "NotFound",
    "UnsupportedFormat",
    "ValueKind",
    "format_literal",
    "load_mapping",
    "merge_mappings",
    "read_mappings",
    "reader_for",
    "remove_entries",
    "save_mapping",
    "to_mapping",
    "to_object",
    "writer_for",
]
