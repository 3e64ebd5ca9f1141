"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the converter, filter, merger,
formatter, codec adapters, and consuming applications. The hierarchy lives in
the domain layer so inner layers never depend on outer ones.

Contents
--------
* :class:`MappingError` – umbrella base class for every library failure.
* :class:`InvalidShape` – a mapping (or field-bearing object) was required but
  something else was supplied.
* :class:`DepthExceeded` – nesting went deeper than the configured maximum.
* :class:`InvalidFormat` – parsing problems while reading files.
* :class:`NotFound` – an expected file is missing.
* :class:`UnsupportedFormat` – no codec is registered for a file suffix.

System Role
-----------
Core functions raise :class:`InvalidShape` and :class:`DepthExceeded` at their
boundaries. Codec adapters raise the format-related errors while the
composition root wraps unexpected adapter failures in
:class:`lib_mapping_literal.core.CodecError`. Callers catch
:class:`MappingError` to handle all library failures uniformly.
"""

from __future__ import annotations


class MappingError(Exception):
    """Base type for all exceptions emitted by ``lib_mapping_literal``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidShape(MappingError, TypeError):
    """Raised when an operation receives a value of the wrong structural kind.

    Why
    ----
    Merging, filtering, and converting never coerce their inputs silently; a
    non-mapping where a mapping is mandatory is a caller bug that must surface
    at the boundary.

    Examples
    --------
    >>> issubclass(InvalidShape, TypeError)
    True
    """


class DepthExceeded(MappingError, RecursionError):
    """Raised when a tree is nested deeper than the permitted maximum.

    Why
    ----
    Recursion depth equals input nesting depth; a hard limit turns pathological
    or cyclic input into a descriptive error instead of an interpreter crash.
    """


class InvalidFormat(MappingError):
    """Raised when an input artifact cannot be parsed into a mapping.

    Typical Sources
    ---------------
    Structured readers (:mod:`tomllib`, :mod:`json`, :mod:`yaml`).
    """


class NotFound(MappingError):
    """Represents missing files or optional backends that are not installed."""


class UnsupportedFormat(MappingError):
    """Raised when no reader or writer is registered for a file suffix.

    Also used for the literal suffixes on the read side: this library renders
    mapping literals but never parses them back.
    """
