"""Command-line interface for gql-tsschema."""

import logging
from pathlib import Path

import click

from .core.errors import ConversionError
from .core.hooks import AddHeaderHook, HookRunner
from .core.pipeline import convert_file


@click.command()
@click.version_option(package_name="gql-tsschema")
@click.option(
    "--input",
    "-i",
    "input_path",
    required=True,
    type=click.Path(dir_okay=False),
    help="Path to the TypeScript file with type declarations.",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    help="Output file for the GraphQL schema. Prints to stdout when omitted.",
)
@click.option(
    "--header",
    help="Comment header to put at the top of the generated schema.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def main(input_path: str, output_path: str | None, header: str | None, verbose: bool):
    """Convert TypeScript type declarations to a GraphQL schema.

    Examples:

        gql-tsschema -i ./src/generated/graphql.ts

        gql-tsschema -i ./graphql.ts -o ./schema.graphql

        gql-tsschema -i ./graphql.ts -o ./schema.graphql --header "Generated - do not edit"
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    source_path = Path(input_path).resolve()
    destination = Path(output_path).resolve() if output_path else None

    hooks = HookRunner()
    if header:
        hooks.add_post_print_hook(AddHeaderHook(header))

    if verbose:
        click.echo(f"Input: {source_path}", err=True)
        click.echo(f"Output: {destination or '<stdout>'}", err=True)

    try:
        result = convert_file(source_path, destination, hooks=hooks)
    except ConversionError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"  Fragments: {result.extraction.fragment_count}", err=True)
        args_table = result.extraction.args_table
        click.echo(f"  Argument declarations: {len(args_table.names())}", err=True)
        for name in args_table.names():
            click.echo(f"    {name}{args_table[name]}", err=True)
        click.echo(f"  Bound fields: {len(result.bound_fields)}", err=True)
        click.echo(f"  Input types: {', '.join(result.reclassified) or '-'}", err=True)
        click.echo(f"  Definitions: {len(result.document.definitions)}", err=True)

    if destination is None:
        click.echo(result.sdl, nl=False)
    else:
        click.echo(f"GraphQL schema successfully regenerated at: {destination}", err=True)


if __name__ == "__main__":
    main()
