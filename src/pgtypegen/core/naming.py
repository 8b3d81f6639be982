"""
Naming helpers for generated identifiers.

All names are pure functions of the schema name and are passed around
explicitly through :class:`SchemaNames`.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

_SNAKE_LETTER = re.compile(r"_([a-z])")
_ENUM_NAME_SEPARATORS = re.compile(r"[_-]")


def pascal_schema_name(schema: str) -> str:
    """
    Convert a schema name to the PascalCase form drizzle-kit uses.

    Only underscores followed by a lowercase ASCII letter are folded, so
    digits and uppercase letters after an underscore are kept as-is.

    Examples:
        >>> pascal_schema_name("public")
        'Public'
        >>> pascal_schema_name("order_items")
        'OrderItems'
    """
    if not schema:
        return schema
    rest = _SNAKE_LETTER.sub(lambda m: m.group(1).upper(), schema[1:])
    return schema[0].upper() + rest


def schema_suffix(schema: str) -> str:
    """Suffix appended to schema-scoped identifiers (``public`` -> ``PublicS``)."""
    return pascal_schema_name(schema) + "S"


def schema_var_name(schema: str) -> str:
    """Name of the ``pgSchema`` variable in the declaration file."""
    return f"{schema}Schema"


def rename_search_pattern(schema: str) -> str:
    """Identifier tail drizzle-kit appends for non-public schemas."""
    return f"In{pascal_schema_name(schema)}Schema"


def enum_display_name(enum_name: str, suffix: str) -> str:
    """
    Build the TypeScript enum name for a database enum.

    Examples:
        >>> enum_display_name("order_status", "PublicS")
        'OrderStatusPublicS'
        >>> enum_display_name("PAYMENT-kind", "PublicS")
        'PaymentKindPublicS'
    """
    parts = _ENUM_NAME_SEPARATORS.split(enum_name)
    return "".join(part[:1].upper() + part[1:].lower() for part in parts) + suffix


def table_display_name(name: str) -> str:
    """
    Build the type alias name for a table (or enum) variable.

    Only the first character of each ``_`` segment is changed.

    Examples:
        >>> table_display_name("order_items")
        'OrderItems'
        >>> table_display_name("userProfiles")
        'UserProfiles'
    """
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


class SchemaNames(BaseModel):
    """
    Per-schema naming parameters threaded through every core call.

    Attributes:
        schema_name: The database schema name as given by the user
        suffix: Suffix for schema-scoped identifiers
        var_name: Name of the schema variable in the declaration file
        search_pattern: Identifier tail rewritten by the renamer
    """

    schema_name: str
    suffix: str
    var_name: str
    search_pattern: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def for_schema(cls, schema: str) -> SchemaNames:
        return cls(
            schema_name=schema,
            suffix=schema_suffix(schema),
            var_name=schema_var_name(schema),
            search_pattern=rename_search_pattern(schema),
        )
