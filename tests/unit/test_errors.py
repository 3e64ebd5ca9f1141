from __future__ import annotations

from lib_mapping_literal import CodecError
from lib_mapping_literal.domain.errors import (
    DepthExceeded,
    InvalidFormat,
    InvalidShape,
    MappingError,
    NotFound,
    UnsupportedFormat,
)


def test_error_hierarchy() -> None:
    for error_type in (InvalidShape, DepthExceeded, InvalidFormat, NotFound, UnsupportedFormat, CodecError):
        assert issubclass(error_type, MappingError)
    for exception in (InvalidFormat(""), InvalidShape(""), NotFound(""), UnsupportedFormat("")):
        assert isinstance(exception, MappingError)


def test_builtin_bases_are_kept() -> None:
    assert issubclass(InvalidShape, TypeError)
    assert issubclass(DepthExceeded, RecursionError)
