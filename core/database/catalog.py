"""Catalog resolution and table listing."""

import logging
from collections.abc import Iterable
from typing import NamedTuple

from core.database.engine import create_database_engine, sanitize_connection_string
from core.models import ConnectionContext, TableDescriptor

logger = logging.getLogger(__name__)


class CatalogQuery(NamedTuple):
    """Dialect-specific statements for reading catalog metadata.

    ``tables`` must return ``(TABLE_NAME, TABLE_CATALOG)`` rows.
    """

    current_catalog: str
    tables: str


_INFORMATION_SCHEMA_TABLES = "SELECT TABLE_NAME, TABLE_CATALOG FROM INFORMATION_SCHEMA.TABLES"
# MySQL reports 'def' as TABLE_CATALOG; the database is exposed as TABLE_SCHEMA
_MYSQL_TABLES = "SELECT TABLE_NAME, TABLE_SCHEMA FROM INFORMATION_SCHEMA.TABLES"

CATALOG_QUERIES: dict[str, CatalogQuery] = {
    "mssql": CatalogQuery("SELECT DB_NAME()", _INFORMATION_SCHEMA_TABLES),
    "postgresql": CatalogQuery(
        "SELECT current_database()",
        "SELECT table_name, table_catalog FROM information_schema.tables "
        "WHERE table_schema NOT IN ('pg_catalog', 'information_schema')",
    ),
    "mysql": CatalogQuery("SELECT DATABASE()", _MYSQL_TABLES),
    "mariadb": CatalogQuery("SELECT DATABASE()", _MYSQL_TABLES),
    "sqlite": CatalogQuery(
        "SELECT name FROM pragma_database_list WHERE seq = 0",
        "SELECT name, 'main' FROM sqlite_master WHERE type IN ('table', 'view') AND name NOT LIKE 'sqlite_%'",
    ),
}


def get_catalog_query(dialect: str) -> CatalogQuery:
    """Return the catalog statements for a SQLAlchemy dialect name.

    Raises:
        ValueError: If the dialect is not supported
    """
    try:
        return CATALOG_QUERIES[dialect]
    except KeyError:
        supported = ", ".join(sorted(CATALOG_QUERIES))
        raise ValueError(f"Unsupported database dialect: {dialect}. Must be one of: {supported}") from None


def open_connection_context(connection_string: str, schema: str | None = None) -> ConnectionContext:
    """Connect to the database and capture the active catalog.

    The catalog is read from the live connection rather than parsed from the
    connection string, so server-side defaults are honoured.

    Args:
        connection_string: Database connection string
        schema: Schema used to qualify table names (optional)

    Returns:
        ConnectionContext for the connected database

    Raises:
        ValueError: If the dialect is not supported or no database is active
    """
    engine = create_database_engine(connection_string)

    try:
        dialect = engine.dialect.name
        query = get_catalog_query(dialect)

        logger.debug(f"Connecting to {sanitize_connection_string(connection_string)}")
        with engine.connect() as conn:
            catalog = conn.exec_driver_sql(query.current_catalog).scalar()

        if not catalog:
            raise ValueError("The connection has no active database; specify one in the connection string")

        return ConnectionContext(
            connection_string=connection_string,
            schema_name=schema or None,
            catalog=str(catalog),
            dialect=dialect,
        )

    finally:
        engine.dispose()


def filter_tables_by_catalog(rows: Iterable[tuple[str, str]], catalog: str) -> list[TableDescriptor]:
    """Keep only tables that belong to the given catalog.

    Some providers also surface tables of linked or cross-database catalogs;
    those are dropped. The comparison is case-insensitive.

    Args:
        rows: ``(table_name, table_catalog)`` pairs
        catalog: The active catalog name

    Returns:
        Table descriptors of the active catalog, in input order
    """
    active = catalog.casefold()
    tables = []

    for table_name, table_catalog in rows:
        if str(table_catalog or "").casefold() != active:
            logger.debug(f"Skipping table '{table_name}' from catalog '{table_catalog}'")
            continue
        tables.append(TableDescriptor(name=str(table_name), catalog=str(table_catalog)))

    return tables


def list_tables(context: ConnectionContext) -> list[TableDescriptor]:
    """List the tables of the active catalog.

    Args:
        context: Connection context from :func:`open_connection_context`

    Returns:
        Table descriptors filtered to ``context.catalog``
    """
    query = get_catalog_query(context.dialect)
    engine = create_database_engine(context.connection_string)

    try:
        with engine.connect() as conn:
            rows = [(row[0], row[1]) for row in conn.exec_driver_sql(query.tables)]

        tables = filter_tables_by_catalog(rows, context.catalog)
        logger.info(f"Found {len(tables)} tables in catalog '{context.catalog}'")
        return tables

    finally:
        engine.dispose()
