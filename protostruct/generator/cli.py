"""Command-line interface for protostruct code generation."""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from protostruct.generator import load, python
from protostruct.proto import Message, SchemaError, schema_document, schema_type_text

if TYPE_CHECKING:
    from types import ModuleType

    from protostruct.generator.types import SchemaDocument

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Protostruct proto3 schema compiler."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input .proto file")
@click.option("--output", "-o", "output_file", required=True, help="Output file")
@click.option(
    "--runtime-import",
    "runtime_import",
    is_flag=False,
    flag_value="protostruct_runtime",
    default="protostruct.proto",
    help="Import path for runtime. No value=protostruct_runtime, omit=protostruct.proto",
)
def gen(input_file: str, output_file: str, runtime_import: str) -> None:
    """Generate Python records from a schema file."""
    try:
        document = load(input_file)
    except SchemaError as exc:
        _fail(exc)

    generated_file = python.render(
        document, runtime_import=runtime_import, source=Path(input_file).name
    )
    logger.debug("Writing %d messages to %s", len(document.messages), output_file)

    with open(output_file, "w", encoding="utf-8") as f:
        f.write(generated_file)


@cli.command()
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
@click.option("--name", default="protostruct_runtime", help="Runtime folder name")
def runtime(output_path: str, name: str) -> None:
    """Generate runtime support code."""
    runtime_dir = Path(output_path) / name
    runtime_dir.mkdir(parents=True, exist_ok=True)
    for filename, content in python.runtime().items():
        (runtime_dir / filename).write_text(content, encoding="utf-8")
    print(f"Generated Python runtime in {runtime_dir}")


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input .proto file")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str, output_json: bool) -> None:
    """Display the messages and fields of a schema file."""
    try:
        document = load(input_file)
    except SchemaError as exc:
        _fail(exc)

    if output_json:
        print(document.to_json(indent=2))
    else:
        _output_plain(document)


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Python file declaring records")
@click.option(
    "--message",
    "-m",
    "message_names",
    multiple=True,
    help="Record class to emit (repeatable, default all)",
)
@click.option("--output", "-o", "output_file", default=None, help="Output .proto file")
def emit(input_file: str, message_names: tuple[str, ...], output_file: str | None) -> None:
    """Emit schema text for the records declared in a Python file."""
    module = _import_file(Path(input_file))
    records = _find_records(module)

    if message_names:
        missing = [name for name in message_names if name not in records]
        if missing:
            print(f"Error: no record named {', '.join(missing)} in {input_file}")
            sys.exit(1)
        selected = [records[name] for name in message_names]
    else:
        selected = list(records.values())

    try:
        text = schema_document(*selected)
    except SchemaError as exc:
        _fail(exc)

    if output_file is None:
        print(text, end="")
    else:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(text)


def _fail(exc: SchemaError) -> NoReturn:
    print(f"Error: {exc}")
    sys.exit(1)


def _import_file(path: Path) -> ModuleType:
    """Import a Python source file as a standalone module."""
    spec = importlib.util.spec_from_file_location(f"_protostruct_emit_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise click.BadParameter(f"{path} is not a Python file", param_hint="--input")

    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except FileNotFoundError as exc:
        del sys.modules[spec.name]
        raise click.BadParameter(f"{path} does not exist", param_hint="--input") from exc
    except (OSError, SyntaxError, ImportError) as exc:
        del sys.modules[spec.name]
        raise click.BadParameter(f"could not import {path}: {exc}", param_hint="--input") from exc
    return module


def _find_records(module: ModuleType) -> dict[str, type[Message]]:
    """Return the Message subclasses defined in a module, in source order."""
    return {
        name: obj
        for name, obj in vars(module).items()
        if inspect.isclass(obj)
        and issubclass(obj, Message)
        and obj is not Message
        and obj.__module__ == module.__name__
    }


def _output_plain(document: SchemaDocument) -> None:
    """Output schema info using rich text formatting."""
    console = Console()

    console.print(f"[bold cyan]Syntax[/bold cyan] {document.header}")
    console.print()

    for message in document.messages:
        console.print(f"[bold cyan]{message.name}[/bold cyan]")

        table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        table.add_column("Tag", style="green", justify="right")
        table.add_column("Name", style="white")
        table.add_column("Schema type", style="yellow")
        table.add_column("Python type", style="dim")

        for field in message.fields:
            schema_type = schema_type_text(field.type, field.optional)
            table.add_row(str(field.tag), field.name, schema_type, field.native_type)

        console.print(table)
        console.print()


def main() -> None:
    """Main entry point."""
    cli(auto_envvar_prefix="PROTOSTRUCT")


if __name__ == "__main__":
    main()
