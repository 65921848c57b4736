"""Descriptor types produced by the schema parser."""

from dataclasses import dataclass, field

from dataclasses_json import DataClassJsonMixin

from protostruct.proto.type_mapper import native_annotation
from protostruct.proto.types import SCHEMA_HEADER, ScalarType


@dataclass(frozen=True)
class FieldDescriptor(DataClassJsonMixin):
    """Represents a single field declaration.

    ``tag`` is the 1-based position of the field in its message, not the
    number written in the schema.
    """

    name: str
    type: ScalarType
    optional: bool
    tag: int

    @property
    def native_type(self) -> str:
        """Native annotation for this field, wrapped if optional."""
        return native_annotation(self.type, self.optional)


@dataclass(frozen=True)
class MessageDescriptor(DataClassJsonMixin):
    """Represents a message block with its ordered fields."""

    name: str
    fields: tuple[FieldDescriptor, ...]


@dataclass(frozen=True)
class SchemaDocument(DataClassJsonMixin):
    """Represents a complete schema file."""

    messages: tuple[MessageDescriptor, ...]
    header: str = field(default=SCHEMA_HEADER)
