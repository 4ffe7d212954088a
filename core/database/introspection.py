"""Database schema introspection utilities."""

import logging
import re
from collections.abc import Sequence
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.engine import Dialect
from sqlalchemy.exc import NoSuchTableError

from core.database.engine import create_database_engine
from core.models import ColumnDescriptor, ConnectionContext

logger = logging.getLogger(__name__)

# DB-API drivers report cursor.description type codes in different shapes:
# pyodbc uses Python types, psycopg uses type OIDs and PyMySQL uses FIELD_TYPE
# constants. Each dialect gets a table keyed by the normalized code.
DRIVER_TYPE_NAMES: dict[str, dict[str, str]] = {
    "mssql": {
        "bool": "bit",
        "int": "int",
        "float": "float",
        "decimal": "decimal",
        "str": "nvarchar",
        "datetime": "datetime",
        "date": "date",
        "time": "time",
        "bytes": "varbinary",
        "bytearray": "varbinary",
        "uuid": "uniqueidentifier",
    },
    "postgresql": {
        "16": "bit",
        "17": "varbinary",
        "20": "bigint",
        "21": "smallint",
        "23": "int",
        "25": "text",
        "700": "real",
        "701": "float",
        "790": "money",
        "1042": "char",
        "1043": "varchar",
        "1082": "date",
        "1083": "time",
        "1114": "datetime2",
        "1184": "datetimeoffset",
        "1700": "numeric",
        "2950": "uniqueidentifier",
    },
    "mysql": {
        "0": "decimal",
        "1": "tinyint",
        "2": "smallint",
        "3": "int",
        "4": "real",
        "5": "float",
        "7": "datetime",
        "8": "bigint",
        "9": "int",
        "10": "date",
        "11": "time",
        "12": "datetime",
        "13": "smallint",
        "15": "varchar",
        "16": "bit",
        "246": "decimal",
        # BLOB and TEXT columns share this code
        "252": "text",
        "253": "varchar",
        "254": "char",
    },
}
DRIVER_TYPE_NAMES["mariadb"] = DRIVER_TYPE_NAMES["mysql"]

# pyodbc reports every integer column as ``int``; the precision tells them apart
_MSSQL_INTEGER_PRECISIONS = {3: "tinyint", 5: "smallint", 10: "int", 19: "bigint"}
_MSSQL_FLOAT_PRECISIONS = {24: "real", 53: "float"}

# Reflected types print in SQLAlchemy's spelling (INTEGER, BOOLEAN, ...)
_COMMON_TYPE_ALIASES = {
    "integer": "int",
    "boolean": "bit",
    "double precision": "float",
    "double": "float",
    "uuid": "uniqueidentifier",
    "blob": "varbinary",
}

REFLECTED_TYPE_ALIASES: dict[str, dict[str, str]] = {
    "postgresql": {
        "timestamp": "datetime2",
        "timestamp without time zone": "datetime2",
        "timestamp with time zone": "datetimeoffset",
        "time without time zone": "time",
        "time with time zone": "time",
        "bytea": "varbinary",
        "character varying": "varchar",
        "character": "char",
    },
    "mysql": {
        "mediumint": "int",
        "float": "real",
        # MySQL TIMESTAMP is a point in time, not a row version
        "timestamp": "datetime",
        "year": "smallint",
        "tinyblob": "varbinary",
        "mediumblob": "varbinary",
        "longblob": "varbinary",
        "tinytext": "text",
        "mediumtext": "text",
        "longtext": "text",
    },
}
REFLECTED_TYPE_ALIASES["mariadb"] = REFLECTED_TYPE_ALIASES["mysql"]


def _normalize_type_code(type_code: Any) -> str:
    if isinstance(type_code, int) and not isinstance(type_code, bool):
        return str(type_code)
    return str(getattr(type_code, "__name__", type_code)).lower()


def resolve_native_type_name(dialect: str, type_code: Any, precision: Any = None) -> str:
    """Resolve a cursor description type code to a native type name.

    Args:
        dialect: SQLAlchemy dialect name
        type_code: The ``type_code`` entry of a cursor description
        precision: The ``precision`` entry of a cursor description

    Returns:
        The native type name, or an empty string when the driver gives none
    """
    if type_code is None:
        return ""
    if isinstance(type_code, str):
        return type_code.lower()

    native_type = DRIVER_TYPE_NAMES.get(dialect, {}).get(_normalize_type_code(type_code), "")

    if dialect == "mssql" and native_type == "int":
        native_type = _MSSQL_INTEGER_PRECISIONS.get(precision, native_type)
    elif dialect == "mssql" and native_type == "float":
        native_type = _MSSQL_FLOAT_PRECISIONS.get(precision, native_type)

    return native_type


def build_describe_query(dialect: Dialect, table_name: str, schema: str | None = None) -> str:
    """Build a query returning a table's result metadata without any rows.

    Args:
        dialect: SQLAlchemy dialect used to quote identifiers
        table_name: Name of the table
        schema: Schema qualifying the table (optional)

    Returns:
        A ``SELECT * ... WHERE 1 = 0`` statement
    """
    preparer = dialect.identifier_preparer
    target = preparer.quote_identifier(table_name)
    if schema:
        target = f"{preparer.quote_identifier(schema)}.{target}"
    return f"SELECT * FROM {target} WHERE 1 = 0"


def reflected_type_name(dialect: str, type_string: str) -> str:
    """Normalize a reflected SQLAlchemy type to a native type name.

    Length, precision, collation and sign modifiers are dropped, then
    dialect spellings are folded onto the names the type mapping knows.

    Examples::

        reflected_type_name("mssql", 'NVARCHAR(50) COLLATE "Latin1_General_CI_AS"')  ->  "nvarchar"
        reflected_type_name("postgresql", "TIMESTAMP(6) WITHOUT TIME ZONE")  ->  "datetime2"
        reflected_type_name("sqlite", "INTEGER")  ->  "int"
    """
    type_name = re.sub(r"\(.*?\)", "", type_string).lower()
    type_name = re.split(r"\s+(?:collate|character set|charset)\s", type_name)[0]
    type_name = " ".join(token for token in type_name.split() if token not in ("unsigned", "zerofill"))

    aliases = REFLECTED_TYPE_ALIASES.get(dialect, {})
    return aliases.get(type_name, _COMMON_TYPE_ALIASES.get(type_name, type_name))


def columns_from_description(
    dialect: str,
    description: Sequence[Sequence[Any]],
    reflected: dict[str, dict[str, Any]] | None = None,
) -> list[ColumnDescriptor]:
    """Convert a DB-API cursor description into column descriptors.

    Columns keep the driver's order. Type and nullability come from the
    reflected column of the same name when there is one, otherwise from the
    description; nullability nobody reports is treated as nullable.
    """
    reflected = reflected or {}
    columns = []

    for name, type_code, _display_size, _internal_size, precision, _scale, null_ok in description:
        reflected_column = reflected.get(name)

        if reflected_column is not None:
            native_type_name = reflected_type_name(dialect, str(reflected_column["type"]))
            is_nullable = bool(reflected_column.get("nullable", True))
        else:
            native_type_name = resolve_native_type_name(dialect, type_code, precision)
            is_nullable = True if null_ok is None else bool(null_ok)

        columns.append(ColumnDescriptor(name=name, native_type_name=native_type_name, is_nullable=is_nullable))

    return columns


def describe_columns(context: ConnectionContext, table_name: str) -> list[ColumnDescriptor]:
    """Describe a table's columns with a zero-row query.

    A fresh connection is opened for every table. The zero-row query checks
    the table is readable and fixes the column order; the SQLAlchemy
    inspector supplies declared types and nullability.

    Args:
        context: Connection context from ``open_connection_context``
        table_name: Name of the table to describe

    Returns:
        Column descriptors in the order the driver reports them

    Raises:
        sqlalchemy.exc.DBAPIError: If the table cannot be queried
    """
    engine = create_database_engine(context.connection_string)

    try:
        query = build_describe_query(engine.dialect, table_name, context.schema_name)
        logger.debug(f"Describing table '{table_name}': {query}")

        with engine.connect() as conn:
            result = conn.exec_driver_sql(query)
            try:
                description = result.cursor.description or []
            finally:
                result.close()

            try:
                reflected = {
                    col["name"]: col for col in inspect(conn).get_columns(table_name, schema=context.schema_name)
                }
            except (NotImplementedError, NoSuchTableError) as e:
                # Fall back to what the driver reported
                logger.debug(f"Could not reflect columns of '{table_name}': {e}")
                reflected = {}

        return columns_from_description(context.dialect, description, reflected)

    finally:
        engine.dispose()
