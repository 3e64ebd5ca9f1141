"""Mapping-literal formatter.

Purpose
-------
Render a mapping tree into the deterministic ``@{ key = value }`` notation used
by structured-data (``.psd1``) and script (``.ps1``) configuration files. The
output is meant to be read back by an external literal reader, so quoting,
keywords, and indentation follow that notation exactly.

Contents
--------
* :func:`format_literal` – public entry point.
* :func:`quote_string` – single-quote a string, doubling embedded quotes.
* :func:`_render` – dispatch on :class:`~lib_mapping_literal.domain.values.ValueKind`.
* :func:`_format_mapping` / :func:`_format_sequence` / :func:`_format_scalar` –
  one stanza per kind.

Layout rules
------------
A mapping rendered at level ``L`` opens with ``@{``, places each entry on its
own line indented by ``4 * L`` spaces, and closes with ``}`` indented by
``4 * (L - 1)`` spaces. Sequences follow the same scheme with ``@(`` and
``)``. A nested block starts on the line of its parent key (or element) and
carries absolute indentation on every following line, so rendered children are
concatenated without re-indenting.

Floating-point values are written as positional decimal text with a decimal
point (``1e16`` becomes ``10000000000000000.0``, ``1e-5`` becomes ``0.00001``),
never in exponent form; the digits are those of the shortest ``repr`` so the
text reads back as the same float.

System Role
-----------
Pure function with no I/O and no logging; called by the literal writers in
:mod:`lib_mapping_literal.adapters.codecs.structured` and by the CLI.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Final, Iterator

from ..domain.errors import DepthExceeded
from ..domain.values import DEFAULT_MAX_DEPTH, ValueKind, kind_of

INDENT_WIDTH: Final[int] = 4
"""Spaces per indentation level."""

NULL_LITERAL: Final[str] = "$null"
TRUE_LITERAL: Final[str] = "$true"
FALSE_LITERAL: Final[str] = "$false"
EMPTY_MAPPING: Final[str] = "@{}"
EMPTY_SEQUENCE: Final[str] = "@()"

# The literal reader treats typographic single quotes as quote characters too.
_QUOTE_RUN: Final[re.Pattern[str]] = re.compile("['‘’‚‛]+")


@dataclass(frozen=True, slots=True)
class _Options:
    align_keys: bool
    flatten_sequences: bool
    max_depth: int


def format_literal(
    value: Any,
    indent_level: int = 1,
    *,
    align_keys: bool = False,
    flatten_sequences: bool = True,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Return the mapping-literal text for *value*.

    Why
    ----
    Configuration files written in the literal notation must be stable across
    runs (clean diffs) and readable by humans, so the rendering is fully
    determined by the input order and kinds.

    Parameters
    ----------
    value:
        Usually a mapping. Sequences and scalars are accepted as well and are
        rendered with the same rules used for mapping values.
    indent_level:
        Level of the entries of the outermost block (``1`` for a document).
    align_keys:
        Pad keys within each mapping to a common width so ``=`` signs line up.
    flatten_sequences:
        Splice nested sequences into their parent (the historical output).
        ``False`` renders them as nested ``@( ... )`` blocks instead.
    max_depth:
        Maximum nesting of mappings and sequences before
        :class:`~lib_mapping_literal.domain.errors.DepthExceeded` is raised.

    Returns
    -------
    str
        Lines joined with ``\\n`` and no trailing newline.

    Examples
    --------
    >>> format_literal({})
    '@{}'
    >>> print(format_literal({"Key": [1, 2, 3]}))
    @{
        Key = @(
            1
            2
            3
        )
    }
    >>> print(format_literal({"Name": "O'Reilly", "Enabled": True, "Parent": {"Id": None}}))
    @{
        Name = 'O''Reilly'
        Enabled = $true
        Parent = @{
            Id = $null
        }
    }
    >>> print(format_literal({"A": 1, "Long": 2}, align_keys=True))
    @{
        A    = 1
        Long = 2
    }
    """

    if indent_level < 1:
        raise ValueError(f"indent_level must be >= 1, got {indent_level}")
    options = _Options(align_keys=align_keys, flatten_sequences=flatten_sequences, max_depth=max_depth)
    return _render(value, indent_level, options, 0)


def quote_string(text: str) -> str:
    """Return *text* single-quoted with every run of quote characters doubled.

    Nothing else is escaped; newlines are embedded as-is.

    Examples
    --------
    >>> quote_string("Yes, it's deep!")
    "'Yes, it''s deep!'"
    >>> quote_string("''")
    "''''''"
    """

    return "'" + _QUOTE_RUN.sub(lambda match: match.group(0) * 2, text) + "'"


def _render(value: Any, level: int, options: _Options, depth: int) -> str:
    """Render *value*; nested entries or elements go to indentation *level*."""

    kind = kind_of(value)
    if kind is ValueKind.MAPPING:
        return _format_mapping(value, level, options, depth + 1)
    if kind is ValueKind.SEQUENCE:
        return _format_sequence(value, level, options, depth + 1)
    return _format_scalar(value, kind)


def _format_mapping(mapping: Mapping[Any, Any], level: int, options: _Options, depth: int) -> str:
    _check_depth(depth, options)
    if not mapping:
        return EMPTY_MAPPING
    indent = _indent(level)
    keys = [str(key) for key in mapping]
    width = max(len(key) for key in keys) if options.align_keys else 0
    lines = ["@{"]
    for key, value in zip(keys, mapping.values()):
        lines.append(f"{indent}{key.ljust(width)} = {_render(value, level + 1, options, depth)}")
    lines.append(_indent(level - 1) + "}")
    return "\n".join(lines)


def _format_sequence(items: Sequence[Any], level: int, options: _Options, depth: int) -> str:
    _check_depth(depth, options)
    elements = list(_flatten(items, options, depth)) if options.flatten_sequences else list(items)
    if not elements:
        return EMPTY_SEQUENCE
    indent = _indent(level)
    lines = ["@("]
    lines.extend(f"{indent}{_render(element, level + 1, options, depth)}" for element in elements)
    lines.append(_indent(level - 1) + ")")
    return "\n".join(lines)


def _flatten(items: Sequence[Any], options: _Options, depth: int) -> Iterator[Any]:
    """Yield *items* with nested sequences spliced in place."""

    for item in items:
        if kind_of(item) is ValueKind.SEQUENCE:
            _check_depth(depth + 1, options)
            yield from _flatten(item, options, depth + 1)
        else:
            yield item


def _format_scalar(value: Any, kind: ValueKind) -> str:
    if kind is ValueKind.NULL:
        return NULL_LITERAL
    if kind is ValueKind.BOOLEAN:
        return TRUE_LITERAL if value else FALSE_LITERAL
    if kind is ValueKind.INTEGER:
        return str(int(value))
    if kind is ValueKind.FLOAT:
        return _format_float(value)
    return quote_string(value if kind is ValueKind.STRING else str(value))


def _format_float(value: float | Decimal) -> str:
    """Render finite numbers as positional decimal text that always carries a
    decimal point; NaN and infinities fall back to quoted text.
    """

    if isinstance(value, Decimal):
        if not value.is_finite():
            return quote_string(str(value))
        exact = value
    else:
        if not math.isfinite(value):
            return quote_string(str(value))
        # repr is the shortest text that reads back as the same float
        exact = Decimal(repr(float(value)))
    text = format(exact, "f")
    return text if "." in text else text + ".0"


def _check_depth(depth: int, options: _Options) -> None:
    if depth > options.max_depth:
        raise DepthExceeded(f"Nesting exceeds the maximum depth of {options.max_depth}")


def _indent(level: int) -> str:
    return " " * (INDENT_WIDTH * level)


__all__ = ["INDENT_WIDTH", "format_literal", "quote_string"]
