"""Table listing command."""

import typer

from cli.config import OUTPUT_FORMATS, get_generator_defaults, get_output_defaults, load_config, resolve_connection_argument
from cli.output import error_message, format_json
from core.database.catalog import list_tables, open_connection_context
from core.database.introspection import describe_columns
from core.database.type_mapping import map_native_type_to_csharp


def tables(
    connection: str | None = typer.Argument(None, help="Database URL or @name of a configured connection"),
    schema: str | None = typer.Option(
        None, "--schema", "-s", help="Schema used to describe columns (default: from config, else 'dbo')"
    ),
    with_fields: bool = typer.Option(False, "--with-fields", help="Include columns and their C# types"),
    output_format: str | None = typer.Option(None, "--format", "-f", help="Output format: text or json"),
) -> None:
    """List the tables models would be generated for.

    Only tables of the connected database are listed.

    Example:
        model-gen tables @default --schema sales --with-fields --format json
    """
    try:
        config = load_config()
        connection_string = resolve_connection_argument(connection, config)
        if schema is None:
            schema = get_generator_defaults(config).schema_name
        if output_format is None:
            output_format = get_output_defaults(config).format
    except KeyError as e:
        error_message(e.args[0], hint="Add the connection to the config file or pass a database URL")
        raise typer.Exit(1) from e
    except ValueError as e:
        error_message(str(e))
        raise typer.Exit(1) from e

    if output_format not in OUTPUT_FORMATS:
        error_message(f"Unknown output format: {output_format}", hint="Use one of: " + ", ".join(OUTPUT_FORMATS))
        raise typer.Exit(1)

    try:
        context = open_connection_context(connection_string, schema)
        table_list = list_tables(context)

        entries = [table.model_dump() for table in table_list]
        if with_fields:
            for entry in entries:
                entry["columns"] = [
                    {
                        "name": column.name,
                        "type": map_native_type_to_csharp(column.native_type_name, column.is_nullable),
                        "nullable": column.is_nullable,
                    }
                    for column in describe_columns(context, entry["name"])
                ]

    except Exception as e:
        error_message(f"Failed to list tables: {e}")
        raise typer.Exit(1) from e

    if output_format == "json":
        typer.echo(format_json(entries))
        return

    if not entries:
        typer.echo(f"No tables found in '{context.catalog}'.")
        return

    typer.echo(f"Tables in '{context.catalog}' ({len(entries)} total):")
    for entry in entries:
        typer.echo(f"  {entry['name']}")

        if with_fields:
            for col in entry["columns"]:
                typer.echo(f"    - {col['name']} ({col['type']})")
