"""Database access for model generation.

This package provides utilities for resolving the active catalog, listing
its tables and describing their columns.
"""

from core.database.catalog import filter_tables_by_catalog, get_catalog_query, list_tables, open_connection_context
from core.database.engine import create_database_engine, sanitize_connection_string
from core.database.introspection import build_describe_query, describe_columns, resolve_native_type_name
from core.database.type_mapping import map_native_type_to_csharp

__all__ = [
    # Engine
    "create_database_engine",
    "sanitize_connection_string",
    # Catalog
    "open_connection_context",
    "get_catalog_query",
    "filter_tables_by_catalog",
    "list_tables",
    # Introspection
    "build_describe_query",
    "describe_columns",
    "resolve_native_type_name",
    # Type mapping
    "map_native_type_to_csharp",
]
