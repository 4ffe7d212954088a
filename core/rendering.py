"""C# model source rendering."""

from collections.abc import Iterable

from core.database.type_mapping import map_native_type_to_csharp
from core.models import ColumnDescriptor
from core.naming import property_name

MODEL_FILE_EXTENSION = ".cs"
_INDENT = "    "


def render_property(column: ColumnDescriptor) -> str:
    """Render one auto-property line for a column"""
    csharp_type = map_native_type_to_csharp(column.native_type_name, column.is_nullable)
    return f"{_INDENT}public {csharp_type} {property_name(column.name)} {{ get; set; }}"


def render_model(table_name: str, columns: Iterable[ColumnDescriptor]) -> str:
    """Render a C# class with one property per column.

    The class is named after the table as-is. Properties follow the column
    order given.

    Args:
        table_name: Name of the table (used verbatim as the class name)
        columns: Columns of the table

    Returns:
        The C# source text
    """
    lines = ["using System;", "", f"public class {table_name}", "{"]
    lines.extend(render_property(column) for column in columns)
    lines.append("}")
    return "\n".join(lines) + "\n"


def model_file_name(table_name: str) -> str:
    """Return the file name for a table's model"""
    return f"{table_name}{MODEL_FILE_EXTENSION}"
