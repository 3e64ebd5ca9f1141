"""Public package surface for mapping conversion, filtering, merging, and literal formatting.

Exporting the composition-root helpers here allows both
``import lib_mapping_literal`` and ``python -m lib_mapping_literal`` flows to
exercise the same functions.
"""

from __future__ import annotations

from .core import (
    CodecError,
    DepthExceeded,
    InvalidFormat,
    InvalidShape,
    MappingError,
    NotFound,
    UnsupportedFormat,
    ValueKind,
    format_literal,
    load_mapping,
    merge_mappings,
    read_mappings,
    remove_entries,
    save_mapping,
    to_mapping,
    to_object,
)
from .observability import bind_trace_id, get_logger

__all__ = [
    "CodecError",
    "DepthExceeded",
    "InvalidFormat",
    "InvalidShape",
    "MappingError",
    "NotFound",
    "UnsupportedFormat",
    "ValueKind",
    "bind_trace_id",
    "format_literal",
    "get_logger",
    "load_mapping",
    "merge_mappings",
    "read_mappings",
    "remove_entries",
    "save_mapping",
    "to_mapping",
    "to_object",
]
