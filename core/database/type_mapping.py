"""Database type mapping utilities."""

from types import MappingProxyType

_CSHARP_TYPES = MappingProxyType(
    {
        "bigint": "long",
        "int64": "long",
        "binary": "byte[]",
        "image": "byte[]",
        "timestamp": "byte[]",
        "varbinary": "byte[]",
        "bit": "bool",
        "char": "string",
        "nchar": "string",
        "nvarchar": "string",
        "varchar": "string",
        "text": "string",
        "ntext": "string",
        "string": "string",
        "datetime": "DateTime",
        "smalldatetime": "DateTime",
        "date": "DateTime",
        "datetime2": "DateTime",
        "decimal": "decimal",
        "money": "decimal",
        "numeric": "decimal",
        "smallmoney": "decimal",
        "float": "double",
        "int": "int",
        "real": "float",
        "uniqueidentifier": "Guid",
        "smallint": "short",
        "tinyint": "byte",
        "time": "TimeSpan",
        "datetimeoffset": "DateTimeOffset",
    }
)

FALLBACK_TYPE = "object"

# Already nullable in C#, so they never get a '?'
REFERENCE_TYPES = frozenset({"string", "byte[]", FALLBACK_TYPE})


def get_base_type(native_type: str) -> str:
    """Extract the base type keyword from a native type name.

    Examples::

        get_base_type("NVARCHAR(50)")  ->  "nvarchar"
        get_base_type("decimal(18, 2)")  ->  "decimal"
        get_base_type("")  ->  ""
    """
    return native_type.split("(")[0].strip().lower()


def map_native_type_to_csharp(native_type: str, is_nullable: bool) -> str:
    """Map a database native type to a C# property type.

    Args:
        native_type: The engine-specific type name (e.g. 'nvarchar', 'INT')
        is_nullable: Whether the column allows NULL

    Returns:
        The C# type name, with a '?' suffix for nullable value types
    """
    csharp_type = _CSHARP_TYPES.get(get_base_type(native_type), FALLBACK_TYPE)

    if is_nullable and csharp_type not in REFERENCE_TYPES:
        csharp_type += "?"

    return csharp_type
