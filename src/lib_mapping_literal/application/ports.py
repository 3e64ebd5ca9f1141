"""Application-layer ports describing codec responsibilities.

Purpose
-------
Define the structural contracts that codec adapters must satisfy so the
composition root can dispatch on file suffixes without depending on concrete
implementations.

Contents
--------
* :class:`MappingReader` – parses a file into a mapping.
* :class:`MappingWriter` – renders a mapping and writes it to a file.

System Role
-----------
These protocols keep the formatter, merger, and filter independent of file
formats. Each adapter in :mod:`lib_mapping_literal.adapters.codecs.structured`
implements one protocol.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class MappingReader(Protocol):
    """Parse a structured file into a mapping.

    Why
    ----
    Segregate parsing concerns (JSON/TOML/YAML) from orchestration logic.
    """

    format_name: str

    def load(self, path: str) -> Mapping[str, object]:
        """Read *path* and return a mapping or raise ``InvalidFormat``/``NotFound``."""


@runtime_checkable
class MappingWriter(Protocol):
    """Render a mapping into text and persist it.

    Why
    ----
    The literal notation, JSON, and YAML are interchangeable targets for the
    same in-memory tree; callers pick one by file suffix.
    """

    format_name: str

    def render(self, mapping: Mapping[str, Any], **options: Any) -> str:
        """Return the text that :meth:`save` would write."""

    def save(self, mapping: Mapping[str, Any], path: str, **options: Any) -> None:
        """Write the rendered *mapping* to *path*."""
