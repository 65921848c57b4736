"""Two-way mapping between schema scalar types and native Python types.

The ``optional`` qualifier is never part of a table row. It is stripped from
(or added to) a type before the base lookup, so optional and plain variants of
a scalar always share one mapping.
"""

import types
import typing
from typing import Any

from .types import ScalarType, UnsupportedType

OPTIONAL_KEYWORD = "optional"

SCALAR_TO_NATIVE: dict[ScalarType, str] = {
    ScalarType.DOUBLE: "Float64",
    ScalarType.FLOAT: "Float32",
    ScalarType.INT32: "Int32",
    ScalarType.INT64: "Int64",
    ScalarType.UINT32: "UInt32",
    ScalarType.UINT64: "UInt64",
    ScalarType.SINT32: "Int32",
    ScalarType.SINT64: "Int64",
    ScalarType.FIXED32: "UInt32",
    ScalarType.FIXED64: "UInt64",
    ScalarType.SFIXED32: "Int32",
    ScalarType.SFIXED64: "Int64",
    ScalarType.BOOL: "bool",
    ScalarType.STRING: "str",
    ScalarType.BYTES: "bytes",
}

# Lossy: sint/sfixed collapse to int32/int64 and fixed to uint32/uint64.
NATIVE_TO_SCALAR: dict[str, ScalarType] = {
    "Float64": ScalarType.DOUBLE,
    "Float32": ScalarType.FLOAT,
    "Int32": ScalarType.INT32,
    "Int64": ScalarType.INT64,
    "UInt32": ScalarType.UINT32,
    "UInt64": ScalarType.UINT64,
    "bool": ScalarType.BOOL,
    "str": ScalarType.STRING,
    "bytes": ScalarType.BYTES,
}


def parse_scalar(type_text: str) -> ScalarType:
    """Look up a schema scalar keyword."""
    try:
        return ScalarType(type_text)
    except ValueError:
        raise UnsupportedType(type_text) from None


def scalar_to_native(scalar: ScalarType | str) -> str:
    """Return the native type name for a schema scalar type."""
    return SCALAR_TO_NATIVE[parse_scalar(scalar)]


def native_to_scalar(native: str) -> ScalarType:
    """Return the canonical schema scalar type for a native type name."""
    try:
        return NATIVE_TO_SCALAR[native]
    except KeyError:
        raise UnsupportedType(native) from None


def split_optional(type_text: str) -> tuple[str, bool]:
    """Strip a leading ``optional`` keyword from a schema type.

    Returns the remaining type text and whether the keyword was present.
    """
    words = type_text.split()
    if words and words[0] == OPTIONAL_KEYWORD:
        return " ".join(words[1:]), True
    return " ".join(words), False


def schema_type_text(scalar: ScalarType, optional: bool) -> str:
    """Render a schema field type, with the ``optional`` prefix if needed."""
    if optional:
        return f"{OPTIONAL_KEYWORD} {scalar.value}"
    return scalar.value


def native_annotation(scalar: ScalarType, optional: bool) -> str:
    """Render the native annotation for a field, wrapped if optional."""
    native = scalar_to_native(scalar)
    if optional:
        return f"{native} | None"
    return native


def resolve_annotation(hint: Any) -> tuple[str, bool]:
    """Unwrap a resolved type hint into (native type name, optional).

    Accepts ``X``, ``X | None`` and ``Optional[X]``. Any other union, or a
    generic such as ``list[int]``, is rejected.
    """
    optional = False
    if typing.get_origin(hint) in (typing.Union, types.UnionType):
        members = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(members) != 1 or len(members) == len(typing.get_args(hint)):
            raise UnsupportedType(_hint_name(hint))
        optional = True
        hint = members[0]

    name = getattr(hint, "__name__", None)
    if not isinstance(name, str) or typing.get_origin(hint) is not None:
        raise UnsupportedType(_hint_name(hint))
    return name, optional


def _hint_name(hint: Any) -> str:
    if isinstance(hint, type):
        return hint.__name__
    return repr(hint)
