"""Base class for generated records and the schema text emitter."""

import dataclasses
import logging
import typing
from dataclasses import dataclass

from .type_mapper import native_to_scalar, resolve_annotation, schema_type_text
from .types import SCHEMA_HEADER, ScalarType, UnsupportedType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProtoField:
    """Schema view of one record field."""

    name: str
    type: ScalarType
    optional: bool
    tag: int


class Message:
    """Base class for generated record types.

    Subclasses must be ``@dataclass`` decorated and annotate every field with
    one of the native scalar types, optionally wrapped as ``X | None``.

    Example:
        @dataclass(kw_only=True)
        class Person(Message):
            name: str
            age: UInt32
            role: str | None = None

        Person(name="Ada", age=36).to_schema_text()
    """

    @classmethod
    def proto_fields(cls) -> tuple[ProtoField, ...]:
        """Describe the record's fields in declaration order.

        Tags are numbered 1..N from that order; no original tag is kept.
        """
        if not dataclasses.is_dataclass(cls):
            raise TypeError(f"{cls.__name__} must be a dataclass to describe its schema")

        hints = typing.get_type_hints(cls)
        result: list[ProtoField] = []
        for tag, fld in enumerate(dataclasses.fields(cls), start=1):
            try:
                native, optional = resolve_annotation(hints[fld.name])
                scalar = native_to_scalar(native)
            except UnsupportedType as exc:
                raise UnsupportedType(f"{cls.__name__}.{fld.name}: {exc.type_name}") from exc
            result.append(ProtoField(name=fld.name, type=scalar, optional=optional, tag=tag))
        return tuple(result)

    @classmethod
    def schema_text(cls) -> str:
        """Render the message block for this record type."""
        lines = [f"message {cls.__name__} {{"]
        for fld in cls.proto_fields():
            lines.append(f"  {schema_type_text(fld.type, fld.optional)} {fld.name} = {fld.tag};")
        lines.append("}")
        logger.debug("Emitted schema for %s (%d fields)", cls.__name__, len(lines) - 2)
        return "\n".join(lines)

    def to_schema_text(self) -> str:
        """Render the schema message block this record was declared from."""
        return type(self).schema_text()


def schema_document(*message_types: type[Message]) -> str:
    """Render a complete schema file for the given record types."""
    blocks = [SCHEMA_HEADER]
    blocks.extend(message_type.schema_text() for message_type in message_types)
    return "\n\n".join(blocks) + "\n"
