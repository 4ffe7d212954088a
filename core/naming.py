"""Identifier sanitization for generated C# code."""


def sanitize_identifier(name: str) -> str:
    """Reduce a name to letters, digits and underscores.

    Every other character is dropped. If the result starts with a digit, an
    underscore is prepended so it stays a valid identifier.

    Examples::

        sanitize_identifier("Order-Id")  ->  "OrderId"
        sanitize_identifier("2024 total")  ->  "_2024total"
        sanitize_identifier("")  ->  ""
    """
    sanitized = "".join(char for char in name if char.isalnum() or char == "_")

    if sanitized[:1].isdecimal():
        sanitized = "_" + sanitized

    return sanitized


def property_name(column_name: str) -> str:
    """Return the C# property name for a column.

    Spaces become underscores before sanitizing, so ``"Ship Date"`` turns
    into ``"Ship_Date"``.

    Raises:
        ValueError: If no identifier characters are left
    """
    name = sanitize_identifier(column_name.replace(" ", "_"))
    if not name:
        raise ValueError(f"Column name '{column_name}' has no characters usable in an identifier")
    return name
