"""Scalar type definitions shared by generated records and the compiler.

The native side of the schema type table is modeled with ``NewType`` aliases
so that record annotations keep the width and signedness of each field.
"""

from enum import StrEnum
from typing import NewType

SCHEMA_HEADER = 'syntax = "proto3";'

Float32 = NewType("Float32", float)
Float64 = NewType("Float64", float)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
UInt32 = NewType("UInt32", int)
UInt64 = NewType("UInt64", int)


class SchemaError(RuntimeError):
    """Base class for all schema compilation failures."""


class UnsupportedType(SchemaError):
    """Raised when a type name is outside the scalar type table."""

    def __init__(self, type_name: str, line: int | None = None) -> None:
        self.type_name = type_name
        self.line = line
        if line is None:
            super().__init__(f"unsupported type: '{type_name}'")
        else:
            super().__init__(f"line {line}: unsupported type: '{type_name}'")


class ScalarType(StrEnum):
    """Scalar type keywords accepted in schema text."""

    DOUBLE = "double"
    FLOAT = "float"
    INT32 = "int32"
    INT64 = "int64"
    UINT32 = "uint32"
    UINT64 = "uint64"
    SINT32 = "sint32"
    SINT64 = "sint64"
    FIXED32 = "fixed32"
    FIXED64 = "fixed64"
    SFIXED32 = "sfixed32"
    SFIXED64 = "sfixed64"
    BOOL = "bool"
    STRING = "string"
    BYTES = "bytes"


NATIVE_TYPES = {
    "Float32": Float32,
    "Float64": Float64,
    "Int32": Int32,
    "Int64": Int64,
    "UInt32": UInt32,
    "UInt64": UInt64,
    "bool": bool,
    "str": str,
    "bytes": bytes,
}
