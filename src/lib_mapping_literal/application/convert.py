"""Deep conversion between named-field objects and mappings.

Purpose
-------
Reshape data between record-like objects (dataclasses, named tuples,
``SimpleNamespace`` and plain instances) and ordered ``dict`` trees so it can be
filtered, merged, formatted, or handed to a generic encoder.

Contents
    - ``to_mapping``: object (or mapping) → ``dict``.
    - ``to_object``: mapping → ``types.SimpleNamespace``.
    - ``_mapping_value`` / ``_object_value``: per-value stanzas of each direction.

System Role
-----------
Pure application-layer helpers with no I/O. Both directions build new
containers and never mutate their input; field order follows the source order
so ``to_mapping(to_object(m)) == m`` including key order.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import SimpleNamespace
from typing import Any

from ..domain.errors import DepthExceeded, InvalidShape
from ..domain.values import DEFAULT_MAX_DEPTH, ValueKind, fields_of, is_field_bearing, kind_of


def to_mapping(obj: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> dict[str, Any]:
    """Return a ``dict`` holding the named fields of *obj*, converted deeply.

    Why
    ----
    Records produced by parsers or application code need a mapping shape before
    they can be merged, filtered, or rendered as a literal.

    What
    ----
    Field values that are themselves field-bearing (or mappings) recurse.
    Sequence values become lists whose field-bearing elements recurse; other
    elements pass through unchanged. Scalars are copied as-is.

    Raises
    ------
    InvalidShape
        When *obj* is neither field-bearing nor a mapping.
    DepthExceeded
        When nesting goes deeper than *max_depth*.

    Examples
    --------
    >>> from types import SimpleNamespace
    >>> to_mapping(SimpleNamespace(name="demo", tags=[SimpleNamespace(id=1), "x"]))
    {'name': 'demo', 'tags': [{'id': 1}, 'x']}
    """

    if not _is_record(obj):
        raise InvalidShape(f"Expected an object with named fields or a mapping, got {type(obj).__name__}")
    return _record_to_mapping(obj, max_depth, 0)


def to_object(mapping: Mapping[Any, Any], *, max_depth: int = DEFAULT_MAX_DEPTH) -> SimpleNamespace:
    """Return a ``SimpleNamespace`` mirroring *mapping*, converted deeply.

    Why
    ----
    Attribute access reads better than subscripts for code that inspects
    configuration, and generic encoders often expect objects.

    What
    ----
    Mapping values recurse; sequences become lists whose mapping elements
    recurse; other values are copied. An empty mapping produces an empty
    namespace, never ``None``.

    Examples
    --------
    >>> obj = to_object({"service": {"port": 8080}, "hosts": [{"name": "a"}, 1]})
    >>> obj.service.port, obj.hosts[0].name, obj.hosts[1]
    (8080, 'a', 1)
    >>> vars(to_object({}))
    {}
    """

    if kind_of(mapping) is not ValueKind.MAPPING:
        raise InvalidShape(f"Expected a mapping, got {type(mapping).__name__}")
    return _mapping_to_object(mapping, max_depth, 0)


def _record_to_mapping(obj: Any, max_depth: int, depth: int) -> dict[str, Any]:
    _check_depth(depth, max_depth)
    items = obj.items() if isinstance(obj, Mapping) else fields_of(obj)
    return {str(key): _mapping_value(value, max_depth, depth) for key, value in items}


def _mapping_value(value: Any, max_depth: int, depth: int) -> Any:
    if _is_record(value):
        return _record_to_mapping(value, max_depth, depth + 1)
    if kind_of(value) is ValueKind.SEQUENCE:
        return [_record_to_mapping(item, max_depth, depth + 1) if _is_record(item) else item for item in value]
    return value


def _mapping_to_object(mapping: Mapping[Any, Any], max_depth: int, depth: int) -> SimpleNamespace:
    _check_depth(depth, max_depth)
    namespace = SimpleNamespace()
    for key, value in mapping.items():
        setattr(namespace, str(key), _object_value(value, max_depth, depth))
    return namespace


def _object_value(value: Any, max_depth: int, depth: int) -> Any:
    kind = kind_of(value)
    if kind is ValueKind.MAPPING:
        return _mapping_to_object(value, max_depth, depth + 1)
    if kind is ValueKind.SEQUENCE:
        return [
            _mapping_to_object(item, max_depth, depth + 1) if kind_of(item) is ValueKind.MAPPING else item
            for item in value
        ]
    return value


def _is_record(value: Any) -> bool:
    return kind_of(value) is ValueKind.MAPPING or is_field_bearing(value)


def _check_depth(depth: int, max_depth: int) -> None:
    if depth > max_depth:
        raise DepthExceeded(f"Nesting exceeds the maximum depth of {max_depth}")
