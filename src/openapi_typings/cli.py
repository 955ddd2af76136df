"""CLI entry point for openapi-typings-gen."""

import logging
from pathlib import Path

import click

from openapi_typings.generator.document import build_ir, render_typings
from openapi_typings.generator.validator import check_delimiters, check_duplicate_ids
from openapi_typings.parser.loader import DocumentError, load_document


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug information.")
def main(verbose: bool):
    """OpenAPI typings generator: TypeScript declarations and Zod validators from OpenAPI docs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("-i", "--input", "input_path", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Bundled OpenAPI document (json|yaml).")
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Output .ts file. Prints to stdout when omitted.")
@click.option("-k", "--keep", is_flag=True, envvar="OPENAPI_TYPINGS_KEEP", help="Keep operations without an operationId.")
@click.option("-z", "--zod", is_flag=True, envvar="OPENAPI_TYPINGS_ZOD", help="Also generate Zod validation schemas.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "yaml", "json"]), help="Document format.")
def generate(input_path: Path, output: Path | None, keep: bool, zod: bool, fmt: str):
    """Generate TypeScript typings from an OpenAPI document."""
    try:
        document = load_document(input_path, fmt)
        components, operations = build_ir(document, keep)
    except DocumentError as e:
        raise click.ClickException(str(e)) from e

    typings = render_typings(components, operations, zod)
    problems = check_duplicate_ids(operations) + check_delimiters(typings)
    for problem in problems:
        click.echo(f"Warning: {problem}", err=True)

    if output is None:
        click.echo(typings, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(typings, encoding="utf-8")
    click.echo(f"Typings saved to {output}", err=True)
