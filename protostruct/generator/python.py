"""Python record generator for proto3 schemas."""

from importlib import resources

from jinja2 import Environment, PackageLoader

from protostruct.proto.type_mapper import scalar_to_native

from .types import MessageDescriptor, SchemaDocument

RUNTIME_FILES = [
    "__init__.py",
    "types.py",
    "type_mapper.py",
    "message.py",
]

BUILTIN_NATIVE_TYPES = frozenset(["bool", "str", "bytes"])

env = Environment(
    loader=PackageLoader("protostruct.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

module_template = env.get_template("python.py.j2")
record_template = env.get_template("record.py.j2")


def _native_imports(messages: tuple[MessageDescriptor, ...]) -> list[str]:
    """Collect the runtime type aliases referenced by the given messages."""
    names = {
        scalar_to_native(field.type)
        for message in messages
        for field in message.fields
    }
    return sorted(names - BUILTIN_NATIVE_TYPES)


def synthesize(message: MessageDescriptor) -> str:
    """Render the record class declaration for a single message."""
    return record_template.render(message=message)


def render(
    document: SchemaDocument,
    runtime_import: str = "protostruct.proto",
    source: str | None = None,
) -> str:
    """Render a schema document to a Python module."""
    return module_template.render(
        messages=document.messages,
        imports=["Message", *_native_imports(document.messages)],
        runtime_import=runtime_import,
        source=source,
        BLANK_LINE="",
    )


def runtime() -> dict[str, str]:
    """Return the Python runtime files as a dict of filename -> content."""
    result: dict[str, str] = {}
    for filename in RUNTIME_FILES:
        content = resources.files("protostruct.proto").joinpath(filename).read_text()
        result[filename] = content
    return result
