"""Structured file readers and writers.

Purpose
-------
Convert on-disk artifacts into Python mappings and back. Readers are small
wrappers around ``tomllib``/``json``/``yaml.safe_load``; writers wrap
:func:`~lib_mapping_literal.formatting.literal.format_literal`, ``json.dumps``,
and ``yaml.safe_dump`` so error handling and observability live in one place.

Contents
--------
* :class:`BaseFileReader` – shared helpers for reading files and validating
  mapping outputs.
* :class:`TOMLFileReader` / :class:`JSONFileReader` / :class:`YAMLFileReader`.
* :class:`BaseFileWriter` – shared helper that writes UTF-8 text.
* :class:`LiteralFileWriter` – mapping-literal writer (``.psd1``/``.ps1``).
* :class:`JSONFileWriter` / :class:`YAMLFileWriter`.

System Role
-----------
Invoked by :func:`lib_mapping_literal.core.load_mapping` and
:func:`lib_mapping_literal.core.save_mapping` after suffix dispatch.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

from ...domain.errors import InvalidFormat, NotFound
from ...domain.values import DEFAULT_MAX_DEPTH, ValueKind, kind_of
from ...formatting.literal import format_literal
from ...observability import log_debug, log_error, make_event

try:
    import yaml  # type: ignore[import-untyped]
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    yaml = None  # type: ignore[assignment]


class BaseFileReader:
    """Common utilities shared by the structured readers."""

    format_name = "base"

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile(delete=False)
        >>> _ = tmp.write(b"key = 'value'")
        >>> tmp.close()
        >>> BaseFileReader()._read(tmp.name)[:3]
        b'key'
        >>> Path(tmp.name).unlink()
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Mapping file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("mapping_file_read", **make_event("load", path=path, size=len(payload)))
        return payload

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[str, object]:
        """Ensure *data* behaves like a mapping, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> BaseFileReader._ensure_mapping({"key": 1}, path="demo")
        {'key': 1}
        >>> BaseFileReader._ensure_mapping([1], path="demo")
        Traceback (most recent call last):
        ...
        lib_mapping_literal.domain.errors.InvalidFormat: File demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a mapping")
        return data

    def _invalid(self, path: str, exc: Exception) -> InvalidFormat:
        log_error("mapping_file_invalid", **make_event("load", path=path, format=self.format_name, error=str(exc)))
        return InvalidFormat(f"Invalid {self.format_name.upper()} in {path}: {exc}")

    def _loaded(self, data: object, path: str) -> Mapping[str, object]:
        result = self._ensure_mapping(data, path=path)
        log_debug("mapping_file_loaded", **make_event("load", result, path=path, format=self.format_name))
        return result


class TOMLFileReader(BaseFileReader):
    """Load TOML documents using the standard library parser."""

    format_name = "toml"

    def load(self, path: str) -> Mapping[str, object]:
        """Return mapping extracted from TOML file at *path*.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', delete=False, encoding='utf-8')
        >>> _ = tmp.write('key = "value"')
        >>> tmp.close()
        >>> TOMLFileReader().load(tmp.name)["key"]
        'value'
        >>> Path(tmp.name).unlink()
        """

        try:
            data = tomllib.loads(self._read(path).decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc
        return self._loaded(data, path)


class JSONFileReader(BaseFileReader):
    """Load JSON documents."""

    format_name = "json"

    def load(self, path: str) -> Mapping[str, object]:
        """Return mapping extracted from JSON file at *path*."""

        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc
        return self._loaded(data, path)


class YAMLFileReader(BaseFileReader):
    """Load YAML documents when PyYAML is available."""

    format_name = "yaml"

    def load(self, path: str) -> Mapping[str, object]:
        """Return mapping extracted from YAML file at *path*; an empty file yields ``{}``.

        Raises
        ------
        NotFound
            When PyYAML is not installed.
        """

        if yaml is None:
            raise NotFound("PyYAML is required for YAML support")
        try:
            data = yaml.safe_load(self._read(path))
        except yaml.YAMLError as exc:
            raise self._invalid(path, exc) from exc
        if data is None:
            data = {}
        return self._loaded(data, path)


class BaseFileWriter:
    """Common utilities shared by the writers."""

    format_name = "base"

    def render(self, mapping: Mapping[str, Any], **options: Any) -> str:  # pragma: no cover - abstract
        raise NotImplementedError

    def save(self, mapping: Mapping[str, Any], path: str, **options: Any) -> None:
        """Render *mapping* and write it to *path* as UTF-8 with a trailing newline.

        Parent directories must exist; ``OSError`` propagates to the caller.
        """

        text = self.render(mapping, **options)
        Path(path).write_text(text + "\n", encoding="utf-8")
        event = make_event("save", mapping, path=path, format=self.format_name, size=len(text))
        log_debug("mapping_file_written", **event)


class LiteralFileWriter(BaseFileWriter):
    """Write the mapping-literal notation verbatim.

    The same notation serves structured-data files (``.psd1``) and script
    files (``.ps1``); only :attr:`format_name` differs.

    Examples
    --------
    >>> LiteralFileWriter("psd1").render({"Name": "demo"})
    "@{\\n    Name = 'demo'\\n}"
    """

    def __init__(self, format_name: str = "psd1") -> None:
        self.format_name = format_name

    def render(self, mapping: Mapping[str, Any], **options: Any) -> str:
        """Return :func:`format_literal` output; *options* are passed through."""

        return format_literal(mapping, **options)


class JSONFileWriter(BaseFileWriter):
    """Write JSON with two-space indentation and non-ASCII text preserved.

    Values JSON cannot express (``Decimal``, arbitrary objects) are written as
    their ``str`` text.

    Examples
    --------
    >>> print(JSONFileWriter().render({"name": "Zoë", "ports": [80]}))
    {
      "name": "Zoë",
      "ports": [
        80
      ]
    }
    """

    format_name = "json"

    def render(self, mapping: Mapping[str, Any], **options: Any) -> str:
        try:
            return json.dumps(mapping, indent=2, ensure_ascii=False, default=str)
        except (TypeError, ValueError) as exc:
            raise _unrenderable(self.format_name, exc) from exc


class YAMLFileWriter(BaseFileWriter):
    """Write YAML preserving key order (requires PyYAML).

    The tree is reduced to plain ``dict``/``list``/scalar values first, using
    the same ``str`` fallback as the JSON writer, because ``yaml.safe_dump``
    refuses tuples, ``Decimal``, and mapping subclasses.

    Examples
    --------
    >>> from decimal import Decimal
    >>> print(YAMLFileWriter().render({"pair": ("a", "b"), "rate": Decimal("1.5")}))
    pair:
    - a
    - b
    rate: '1.5'
    """

    format_name = "yaml"

    def render(self, mapping: Mapping[str, Any], **options: Any) -> str:
        if yaml is None:
            raise NotFound("PyYAML is required for YAML support")
        try:
            return yaml.safe_dump(_plain(mapping), sort_keys=False, allow_unicode=True).rstrip("\n")
        except yaml.YAMLError as exc:
            raise _unrenderable(self.format_name, exc) from exc


def _plain(value: Any, depth: int = 0) -> Any:
    """Return *value* as nested ``dict``/``list``/scalar values only."""

    if depth > DEFAULT_MAX_DEPTH:
        raise yaml.representer.RepresenterError(f"Nesting exceeds the maximum depth of {DEFAULT_MAX_DEPTH}")
    kind = kind_of(value)
    if kind is ValueKind.MAPPING:
        return {str(key): _plain(item, depth + 1) for key, item in value.items()}
    if kind is ValueKind.SEQUENCE:
        return [_plain(item, depth + 1) for item in value]
    if kind is ValueKind.FLOAT and isinstance(value, Decimal):
        return str(value)
    if kind is ValueKind.OBJECT:
        return str(value)
    return value


def _unrenderable(format_name: str, exc: Exception) -> InvalidFormat:
    log_error("mapping_render_failed", **make_event("save", format=format_name, error=str(exc)))
    return InvalidFormat(f"Cannot render mapping as {format_name}: {exc}")
