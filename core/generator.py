"""Model generation pipeline

Connects to a database, lists the tables of the active catalog and writes one
C# model file per table. A failing table is recorded and skipped; only
failures before the first table is processed abort the run.
"""

import logging
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from core.database.catalog import list_tables, open_connection_context
from core.database.engine import sanitize_connection_string
from core.database.introspection import describe_columns
from core.models import ConnectionContext, GenerationSummary, TableDescriptor, TableResult
from core.rendering import model_file_name, render_model

logger = logging.getLogger(__name__)


def write_model(output_directory: Path, table_name: str, model_code: str) -> Path:
    """Write a model file, replacing any existing one"""
    model_path = output_directory / model_file_name(table_name)
    model_path.write_text(model_code, encoding="utf-8")
    return model_path


def generate_table_model(context: ConnectionContext, table: TableDescriptor, output_directory: Path) -> TableResult:
    """Describe, render and write the model for one table.

    Args:
        context: Connection context of the run
        table: Table to generate
        output_directory: Directory receiving the model file

    Returns:
        TableResult with the written path, or the failure message
    """
    try:
        columns = describe_columns(context, table.name)
        model_code = render_model(table.name, columns)
        model_path = write_model(output_directory, table.name, model_code)

    except (ValueError, OSError, SQLAlchemyError) as e:
        # Missing table, permissions, invalid identifier, unwritable file
        result = TableResult(table=table, error=str(e))
        logger.error(result.message)
        return result
    except Exception as e:
        result = TableResult(table=table, error=str(e))
        logger.error(result.message, exc_info=True)
        return result

    logger.debug(f"Generated model for table '{table.name}' ({len(columns)} columns) at {model_path}")
    return TableResult(table=table, path=model_path)


def generate_models(connection_string: str, schema: str | None, output_directory: str | Path) -> GenerationSummary:
    """Generate C# models for every table of the connected catalog.

    Args:
        connection_string: Database connection string
        schema: Schema qualifying table names in the describe query
        output_directory: Directory to write models into (created if missing)

    Returns:
        GenerationSummary of the run

    Raises:
        ValueError: If the database dialect is not supported
        sqlalchemy.exc.SQLAlchemyError: If connecting or listing tables fails
    """
    output_dir = Path(output_directory)
    output_dir.mkdir(parents=True, exist_ok=True)

    logger.info(f"Generating models from {sanitize_connection_string(connection_string)} into {output_dir}")
    context = open_connection_context(connection_string, schema)
    tables = list_tables(context)

    summary = GenerationSummary(
        output_directory=output_dir,
        results=[generate_table_model(context, table, output_dir) for table in tables],
    )

    if summary.failed:
        logger.info(
            f"Successfully generated {summary.succeeded}/{len(summary.results)} models. "
            f"Failed tables: {', '.join(r.table.name for r in summary.results if not r.ok)}"
        )

    return summary
