"""Structured log events for mapping operations.

Purpose
    Every operation that reads, writes, merges, or filters a mapping reports
    the same event shape: which operation ran, which file it touched (if any),
    and how many top-level keys the resulting mapping holds. Log processors can
    then follow a mapping through a load, merge, and save by its trace id.

Contents
    - ``TRACE_ID``: context variable holding the trace id of the current call.
    - ``get_logger``: the package logger (silent until a handler is attached).
    - ``bind_trace_id``: set or clear the trace id.
    - ``log_debug`` / ``log_info`` / ``log_error``: emit an event; the fields
      travel in ``record.context``.
    - ``make_event``: build the event fields for an operation on a mapping.

System Integration
    Used by the merge and filter operations, the codec adapters, and
    :mod:`lib_mapping_literal.core`. The formatter and converter do not log.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_mapping_literal_trace_id", default=None)
"""Trace id bound by the public entry points of :mod:`lib_mapping_literal.core`."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_mapping_literal")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Return the package logger so applications can attach handlers."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind *trace_id* to the current context, or clear it with ``None``.

    Examples
    --------
    >>> bind_trace_id('abc123')
    >>> TRACE_ID.get()
    'abc123'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    _emit(logging.ERROR, message, fields)


def make_event(
    operation: str,
    mapping: Mapping[Any, Any] | None = None,
    *,
    path: str | None = None,
    **details: Any,
) -> dict[str, Any]:
    """Return the fields of an event for *operation* on *mapping*.

    ``operation`` is one of ``load``, ``save``, ``merge``, or ``filter``.
    When *mapping* is given its top-level key count is recorded as ``keys``;
    the mapping itself is never logged, only its size. ``path`` is always
    present (``None`` for in-memory operations) so file and memory events share
    one shape. *details* are appended as-is.

    Examples
    --------
    >>> make_event('merge', {'A': 1, 'B': 2}, force=False)
    {'operation': 'merge', 'path': None, 'keys': 2, 'force': False}
    >>> make_event('load', path='app.json', error='bad')
    {'operation': 'load', 'path': 'app.json', 'error': 'bad'}
    """

    event: dict[str, Any] = {"operation": operation, "path": path}
    if mapping is not None:
        event["keys"] = len(mapping)
    event.update(details)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    _LOGGER.log(level, message, extra={"context": context})
