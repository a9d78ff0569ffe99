"""Command-line interface for dmmf-typegen."""

import logging
from pathlib import Path

import click

from .core.config import GeneratorConfig
from .core.dmmf import load_document
from .core.generator import TypeGenerator
from .core.hooks import SECTIONS, AddHeaderHook, HookRunner, TypeFilterHook
from .core.ir import SchemaDocument, TypegenError
from .core.parser import SCHEMA_EXTENSIONS, SDLParser


def load_schema(schema_path: Path, schema_format: str) -> SchemaDocument:
    """Load a schema document, picking the loader from the file type in auto mode."""
    if schema_format == "auto":
        is_sdl = schema_path.is_dir() or schema_path.name.endswith(SCHEMA_EXTENSIONS)
        schema_format = "sdl" if is_sdl else "dmmf"
    if schema_format == "sdl":
        return SDLParser(str(schema_path)).parse()
    return load_document(schema_path)


@click.group()
@click.version_option(package_name="dmmf-typegen")
def main():
    """TypeScript resolver type generator for Prisma DMMF schemas.

    Generate typed resolver declarations from a DMMF document or GraphQL SDL.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to a DMMF JSON file, or a GraphQL schema file or directory.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    help="Output file for generated types (default: print to stdout).",
)
@click.option(
    "--format",
    "schema_format",
    type=click.Choice(["auto", "dmmf", "sdl"]),
    default="auto",
    show_default=True,
    help="Schema format.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON configuration file.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--include",
    multiple=True,
    metavar="PATTERN",
    help="Only generate types whose name matches this glob (repeatable).",
)
@click.option(
    "--exclude",
    multiple=True,
    metavar="PATTERN",
    help="Skip types whose name matches this glob (repeatable).",
)
@click.option(
    "--section",
    "sections",
    multiple=True,
    type=click.Choice(sorted(SECTIONS)),
    help="Restrict --include/--exclude to output, input or enum types (repeatable).",
)
@click.option(
    "--header",
    help="Header comment added to the top of the generated file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    output: str | None,
    schema_format: str,
    config_path: str | None,
    template_dir: str | None,
    include: tuple[str, ...],
    exclude: tuple[str, ...],
    sections: tuple[str, ...],
    header: str | None,
    verbose: bool,
):
    """Generate TypeScript resolver types from a schema.

    Examples:

        dmmf-typegen generate --schema ./dmmf.json --output ./resolversTypes.ts

        dmmf-typegen generate -s ./schema.graphql -o ./types.ts --exclude "*CreateMany*" --section input
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    schema_path = Path(schema).resolve()
    try:
        config = GeneratorConfig.from_file(config_path) if config_path else GeneratorConfig()
        if template_dir:
            config.template_dir = template_dir

        if verbose:
            click.echo(f"Schema: {schema_path}", err=True)
        document = load_schema(schema_path, schema_format)

        if verbose:
            click.echo(f"  Output types: {len(document.output_types)}", err=True)
            click.echo(f"  Input types: {len(document.input_types)}", err=True)
            click.echo(f"  Enums: {len(document.enums)}", err=True)

        hooks = HookRunner()
        if include or exclude:
            hooks.add(TypeFilterHook(include, exclude, sections or SECTIONS))
        if header:
            hooks.add(AddHeaderHook(header))
        code = TypeGenerator(document, config, hooks).generate()
    except TypegenError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo(code)
        return

    output_path = Path(output).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(code)
    click.echo(f"Done! Generated types in {output_path}", err=True)


if __name__ == "__main__":
    main()
