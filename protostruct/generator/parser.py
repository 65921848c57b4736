"""Line-oriented parser for the proto3 schema subset.

Comments are recognised only at the start of a trimmed line. A comment that
begins after other text on the same line is not stripped.
"""

import keyword
import logging
from dataclasses import dataclass

from protostruct.proto.message import Message
from protostruct.proto.type_mapper import parse_scalar, split_optional
from protostruct.proto.types import NATIVE_TYPES, SCHEMA_HEADER, SchemaError, UnsupportedType

from .types import FieldDescriptor, MessageDescriptor, SchemaDocument

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ("//", "/*", "*", "*/")
MESSAGE_KEYWORD = "message"

# Names bound in every generated module, and attributes every record inherits.
RESERVED_MESSAGE_NAMES = frozenset(["Message", "dataclass", *NATIVE_TYPES])
RESERVED_FIELD_NAMES = frozenset(dir(Message))


class ParseError(SchemaError):
    """Raised when schema text violates the supported syntax."""

    def __init__(self, reason: str, line: int | None = None, text: str | None = None) -> None:
        self.reason = reason
        self.line = line
        self.text = text
        message = reason
        if line is not None:
            message = f"line {line}: {message}"
        if text is not None:
            message = f"{message}: '{text}'"
        super().__init__(message)


class UnsupportedSyntax(ParseError):
    """Raised when the document does not start with the proto3 header."""


class MalformedMessageHeader(ParseError):
    """Raised when a message line is not of the form ``message Name {``."""


class MissingSemicolon(ParseError):
    """Raised when a field declaration does not end with ``;``."""


class MalformedField(ParseError):
    """Raised when a field declaration cannot be split into its parts."""


class UnbalancedBrace(ParseError):
    """Raised when message braces do not pair up."""


class DuplicateName(ParseError):
    """Raised when a message or field name is declared twice."""


@dataclass(frozen=True)
class _Line:
    number: int
    text: str


def _significant_lines(text: str) -> list[_Line]:
    """Trim lines and drop blanks and comments, keeping source line numbers."""
    lines: list[_Line] = []
    for number, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIXES):
            continue
        lines.append(_Line(number, stripped))
    return lines


def _is_plain_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


def _is_message_header(text: str) -> bool:
    words = text.split(maxsplit=1)
    return bool(words) and words[0] == MESSAGE_KEYWORD


def _parse_message_header(line: _Line) -> str:
    if not line.text.endswith("{"):
        raise MalformedMessageHeader("message must open a block with '{'", line.number, line.text)

    name = line.text[len(MESSAGE_KEYWORD) : -1].strip()
    if not _is_plain_identifier(name):
        raise MalformedMessageHeader("invalid message name", line.number, line.text)
    if name in RESERVED_MESSAGE_NAMES:
        raise MalformedMessageHeader("message name is reserved", line.number, line.text)
    return name


def _parse_field(line: _Line, position: int) -> FieldDescriptor:
    if not line.text.endswith(";"):
        raise MissingSemicolon("field declaration must end with ';'", line.number, line.text)

    declaration, sep, number = line.text[:-1].partition("=")
    if not sep:
        raise MalformedField("field must have a number assigned", line.number, line.text)

    number = number.strip()
    if not (number.isascii() and number.isdigit()):
        raise MalformedField("field number must be an integer", line.number, line.text)
    declared_tag = int(number)
    if declared_tag < 1:
        raise MalformedField("field number must be positive", line.number, line.text)

    type_text, space, name = declaration.strip().rpartition(" ")
    if not space:
        raise MalformedField("field must have a type and a name", line.number, line.text)
    if not _is_plain_identifier(name):
        raise MalformedField("invalid field name", line.number, line.text)
    if name in RESERVED_FIELD_NAMES:
        raise MalformedField("field name is reserved", line.number, line.text)

    base_type, optional = split_optional(type_text)
    try:
        scalar = parse_scalar(base_type)
    except UnsupportedType as exc:
        raise UnsupportedType(exc.type_name, line.number) from None

    if declared_tag != position:
        logger.debug(
            "Line %d: field '%s' declared as %d, renumbered to %d",
            line.number,
            name,
            declared_tag,
            position,
        )
    return FieldDescriptor(name=name, type=scalar, optional=optional, tag=position)


def _build_message(name: str, fields: list[FieldDescriptor]) -> MessageDescriptor:
    logger.debug("Parsed message %s with %d fields", name, len(fields))
    return MessageDescriptor(name=name, fields=tuple(fields))


def parse(text: str) -> SchemaDocument:
    """Parse schema text into a :class:`SchemaDocument`.

    Raises a :class:`ParseError` subclass or :class:`UnsupportedType` on the
    first violation found.
    """
    lines = _significant_lines(text)
    if not lines:
        raise UnsupportedSyntax(f"expected header {SCHEMA_HEADER}")
    if lines[0].text != SCHEMA_HEADER:
        raise UnsupportedSyntax("only proto3 is supported", lines[0].number, lines[0].text)

    messages: list[MessageDescriptor] = []
    message_names: set[str] = set()
    current: str | None = None
    opened_at: _Line | None = None
    fields: list[FieldDescriptor] = []

    for line in lines[1:]:
        if _is_message_header(line.text):
            if current is not None:
                raise UnbalancedBrace("nested messages are not supported", line.number, line.text)
            current = _parse_message_header(line)
            if current in message_names:
                raise DuplicateName(f"message '{current}' already declared", line.number)
            message_names.add(current)
            opened_at = line
            fields = []
            continue

        if line.text == "}":
            if current is None:
                raise UnbalancedBrace("closing brace without an open message", line.number)
            messages.append(_build_message(current, fields))
            current = None
            continue

        if current is None:
            raise MalformedField("field declared outside of a message", line.number, line.text)

        descriptor = _parse_field(line, len(fields) + 1)
        if any(existing.name == descriptor.name for existing in fields):
            raise DuplicateName(
                f"field '{descriptor.name}' already declared in {current}", line.number
            )
        fields.append(descriptor)

    if current is not None and opened_at is not None:
        raise UnbalancedBrace(f"message '{current}' is never closed", opened_at.number)

    return SchemaDocument(messages=tuple(messages))
