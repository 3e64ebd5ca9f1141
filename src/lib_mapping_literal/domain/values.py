"""Value kinds shared by the filter, converter, and formatter.

Purpose
-------
Classify the plain Python objects that make up a mapping tree into a closed set
of kinds. Every "is this value of type X" decision in the library is a
comparison against :class:`ValueKind` rather than an ad-hoc ``isinstance``
chain, which keeps the filter and the formatter in agreement.

Contents
--------
* :class:`ValueKind` – the type tag of a value.
* :func:`kind_of` – compute the tag for a runtime value.
* :func:`is_null_or_empty` – the null-or-empty predicate used by filter and merge.
* :func:`is_field_bearing` – detect objects the converter treats as records.
* :data:`DEFAULT_MAX_DEPTH` – nesting limit shared by recursive operations.
"""

from __future__ import annotations

import dataclasses
import types
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Final

DEFAULT_MAX_DEPTH: Final[int] = 100
"""Maximum nesting depth accepted by the converter and the formatter."""


class ValueKind(Enum):
    """Concrete runtime kind of a value inside a mapping tree.

    Examples
    --------
    >>> ValueKind.parse("integer") is ValueKind.INTEGER
    True
    >>> ValueKind.parse("Bool")
    Traceback (most recent call last):
    ...
    ValueError: Unknown value kind 'Bool'; expected one of: null, boolean, integer, float, string, sequence, mapping, object
    """

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OBJECT = "object"

    @classmethod
    def parse(cls, name: str) -> ValueKind:
        """Return the kind named *name* (case-insensitive)."""

        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown value kind {name!r}; expected one of: {choices}") from None


def kind_of(value: Any) -> ValueKind:
    """Return the :class:`ValueKind` of *value*.

    ``bool`` is checked before ``int`` because it is a subclass of it; strings
    are never treated as sequences.

    Examples
    --------
    >>> [kind_of(v).value for v in (None, True, 3, 1.5, "x", [1], {"a": 1})]
    ['null', 'boolean', 'integer', 'float', 'string', 'sequence', 'mapping']
    >>> kind_of(object()).value
    'object'
    """

    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, (float, Decimal)):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.OBJECT


def is_null_or_empty(value: Any) -> bool:
    """Return ``True`` for ``None`` and the empty string, ``False`` otherwise.

    Empty sequences and mappings are *not* null-or-empty.

    Examples
    --------
    >>> is_null_or_empty(None), is_null_or_empty(""), is_null_or_empty([]), is_null_or_empty(0)
    (True, True, False, False)
    """

    return value is None or (isinstance(value, str) and value == "")


def is_field_bearing(value: Any) -> bool:
    """Return ``True`` when *value* is a record whose named fields can be listed.

    Only dataclass instances, named tuples, and ``types.SimpleNamespace``
    qualify. Other objects (exceptions, loggers, service instances) are opaque
    values and are copied as-is by the converter.

    Examples
    --------
    >>> from types import SimpleNamespace
    >>> is_field_bearing(SimpleNamespace(a=1)), is_field_bearing({"a": 1}), is_field_bearing("a")
    (True, False, False)
    """

    if isinstance(value, type):
        return False
    return dataclasses.is_dataclass(value) or _is_named_tuple(value) or isinstance(value, types.SimpleNamespace)


def fields_of(value: Any) -> list[tuple[str, Any]]:
    """Return ``(name, value)`` pairs of a field-bearing object in declaration order."""

    if dataclasses.is_dataclass(value):
        return [(field.name, getattr(value, field.name)) for field in dataclasses.fields(value)]
    if _is_named_tuple(value):
        return list(zip(value._fields, value))
    return list(vars(value).items())


def _is_named_tuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")
