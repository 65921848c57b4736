"""Read schema files from disk."""

import logging
import os
from pathlib import Path

from protostruct.proto.types import SchemaError

from .parser import parse
from .types import SchemaDocument

logger = logging.getLogger(__name__)

SCHEMA_EXTENSION = ".proto"


class InvalidPath(SchemaError):
    """Raised when a schema path does not end with the schema extension."""


class IoFailure(SchemaError):
    """Raised when a schema file cannot be read."""


def read_schema(path: str | os.PathLike[str]) -> str:
    """Return the text of a schema file."""
    schema_path = Path(path)
    if schema_path.suffix != SCHEMA_EXTENSION:
        raise InvalidPath(f"{schema_path} is not a {SCHEMA_EXTENSION} file")

    try:
        with open(schema_path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise IoFailure(f"could not read {schema_path}: {exc}") from exc

    logger.debug("Read %d bytes from %s", len(text), schema_path)
    return text


def load(path: str | os.PathLike[str]) -> SchemaDocument:
    """Read and parse a schema file."""
    return parse(read_schema(path))
