"""Application-layer merge policy.

Purpose
-------
Fold a sequence of override mappings onto a base mapping, last write wins,
while letting empty override values leave existing content alone unless the
caller forces them through. Free of I/O so it can be reused by any composition
root.

Contents
    - ``merge_mappings``: public entry point driven by a simple loop.
    - ``_apply_override``: one override folded into the accumulator.
    - ``_require_mapping``: boundary check shared by base and overrides.

System Role
-----------
Called by :mod:`lib_mapping_literal.cli` (``merge`` command) after the codec
adapter has loaded each file, and directly by library consumers.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from ..domain.errors import InvalidShape
from ..domain.values import is_null_or_empty
from ..observability import log_debug, make_event


def merge_mappings(
    base: Mapping[str, Any],
    overrides: Iterable[Mapping[str, Any]],
    *,
    force: bool = False,
) -> dict[str, Any]:
    """Merge *overrides* onto a shallow copy of *base* in argument order.

    Why
    ----
    Layered settings (defaults, then site, then user) are combined top-level
    key by top-level key; a blank value in a later layer usually means "not
    set" rather than "erase".

    What
    ----
    For every key of every override: the key is added to the result when
    missing, then its value is replaced when ``force`` is set or the override
    value is not null-or-empty (``None`` or ``""``).

    Parameters
    ----------
    base:
        Lowest-precedence mapping. It is copied, never mutated.
    overrides:
        Mappings ordered from lowest to highest precedence.
    force:
        Let null-or-empty override values replace existing values.

    Returns
    -------
    dict[str, Any]
        New mapping. Nested values are shared with the inputs, not copied.

    Raises
    ------
    InvalidShape
        When *base* or any override is not a mapping.

    Examples
    --------
    >>> merge_mappings({"A": "", "B": "Main", "C": "Main"}, [{"A": "", "B": "", "C": "Override"}])
    {'A': '', 'B': 'Main', 'C': 'Override'}
    >>> merge_mappings({"Mode": "Main"}, [{"Mode": ""}], force=True)
    {'Mode': ''}
    """

    _require_mapping(base, "base")
    merged: dict[str, Any] = dict(base)
    applied = 0
    for position, override in enumerate(overrides):
        _require_mapping(override, f"override #{position}")
        _apply_override(merged, override, force)
        applied += 1
    log_debug("mapping_merged", **make_event("merge", merged, overrides=applied, force=force))
    return merged


def _apply_override(target: dict[str, Any], override: Mapping[str, Any], force: bool) -> None:
    for key, value in override.items():
        if key not in target:
            target[key] = value
        if force or not is_null_or_empty(value):
            target[key] = value


def _require_mapping(candidate: object, label: str) -> None:
    if not isinstance(candidate, Mapping):
        raise InvalidShape(f"Cannot merge {label}: expected a mapping, got {type(candidate).__name__}")
