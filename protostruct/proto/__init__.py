"""Runtime support for records generated by protostruct."""

from .message import Message, ProtoField, schema_document
from .type_mapper import (
    native_annotation,
    native_to_scalar,
    parse_scalar,
    resolve_annotation,
    scalar_to_native,
    schema_type_text,
    split_optional,
)
from .types import (
    NATIVE_TYPES,
    SCHEMA_HEADER,
    Float32,
    Float64,
    Int32,
    Int64,
    ScalarType,
    SchemaError,
    UInt32,
    UInt64,
    UnsupportedType,
)

__all__ = [
    "NATIVE_TYPES",
    "SCHEMA_HEADER",
    "Float32",
    "Float64",
    "Int32",
    "Int64",
    "Message",
    "ProtoField",
    "ScalarType",
    "SchemaError",
    "UInt32",
    "UInt64",
    "UnsupportedType",
    "native_annotation",
    "native_to_scalar",
    "parse_scalar",
    "resolve_annotation",
    "scalar_to_native",
    "schema_document",
    "schema_type_text",
    "split_optional",
]
