"""In-place removal of mapping entries by value, kind, or key.

Purpose
-------
Strip entries that should not be persisted (blank values, secrets, runtime-only
objects) before a mapping is formatted or merged.

Contents
    - ``remove_entries``: public entry point.
    - ``_should_remove``: the ordered rule list evaluated per key.

Rule order
----------
The first matching rule decides and later rules are not consulted:

1. key in ``keep_keys`` → keep
2. kind of value in ``keep_types`` → keep
3. value null-or-empty and ``keep_null_or_empty`` → keep
4. value null-or-empty and ``null_or_empty`` → remove
5. kind of value in ``remove_types`` → remove
6. key in ``remove_keys`` → remove
7. ``remove_all`` → remove
8. otherwise keep
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Iterable, TypeVar

from ..domain.errors import InvalidShape
from ..domain.values import ValueKind, is_null_or_empty, kind_of
from ..observability import log_debug, make_event

M = TypeVar("M", bound=MutableMapping[str, Any])


def remove_entries(
    mapping: M,
    *,
    null_or_empty: bool = False,
    remove_types: Iterable[ValueKind] = (),
    remove_keys: Iterable[str] = (),
    keep_types: Iterable[ValueKind] = (),
    keep_keys: Iterable[str] = (),
    remove_all: bool = False,
    keep_null_or_empty: bool = False,
) -> M:
    """Remove entries from *mapping* in place and return the same object.

    Keys are evaluated against a snapshot taken before the first removal, so
    mutation never skips or repeats a key. Keep rules always win over remove
    rules, ``remove_all`` included.

    Raises
    ------
    InvalidShape
        When *mapping* is not a mutable mapping.

    Examples
    --------
    >>> settings = {"Name": "demo", "Token": "", "Port": 80, "Debug": None}
    >>> remove_entries(settings, null_or_empty=True)
    {'Name': 'demo', 'Port': 80}
    >>> remove_entries({"Name": "demo", "Port": 80}, remove_all=True, keep_types=[ValueKind.INTEGER])
    {'Port': 80}
    """

    if not isinstance(mapping, MutableMapping):
        raise InvalidShape(f"Cannot filter entries of {type(mapping).__name__}: expected a mutable mapping")
    rules = _Rules(
        null_or_empty=null_or_empty,
        remove_types=frozenset(remove_types),
        remove_keys=frozenset(remove_keys),
        keep_types=frozenset(keep_types),
        keep_keys=frozenset(keep_keys),
        remove_all=remove_all,
        keep_null_or_empty=keep_null_or_empty,
    )
    removed = [key for key in list(mapping.keys()) if _should_remove(key, mapping[key], rules)]
    for key in removed:
        del mapping[key]
    if removed:
        log_debug("entries_removed", **make_event("filter", mapping, removed=removed))
    return mapping


@dataclass(frozen=True, slots=True)
class _Rules:
    null_or_empty: bool
    remove_types: frozenset[ValueKind]
    remove_keys: frozenset[str]
    keep_types: frozenset[ValueKind]
    keep_keys: frozenset[str]
    remove_all: bool
    keep_null_or_empty: bool


def _should_remove(key: str, value: Any, rules: _Rules) -> bool:
    kind = kind_of(value)
    if key in rules.keep_keys or kind in rules.keep_types:
        return False
    blank = is_null_or_empty(value)
    if blank and rules.keep_null_or_empty:
        return False
    if blank and rules.null_or_empty:
        return True
    if kind in rules.remove_types or key in rules.remove_keys:
        return True
    return rules.remove_all
