"""
Line scanner for drizzle-kit declaration files.

Recognizes two statement shapes, each in a schema-scoped ("custom") form
and a plain form:

    export const status<Suffix> = <schema>Schema.enum('status', [...])
    export const status = pgEnum('status', [...])

    export const users<Suffix> = <schema>Schema.table(...)
    export const users = pgTable(...)

The custom form is tried first. Anything else in the file is ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from pgtypegen.core.models import DeclarationScan, EnumRecord, TableRecord
from pgtypegen.core.naming import SchemaNames

logger = logging.getLogger(__name__)

_PG_ENUM_START = re.compile(r"export const (\w+) = pgEnum\(['\"](\w+)['\"],\s*\[", re.ASCII)
_PG_ENUM_DECL = re.compile(r"export const (\w+) = pgEnum\(", re.ASCII)
_PG_TABLE_DECL = re.compile(r"export const (\w+) = pgTable\(", re.ASCII)

# First bracketed span on the line, non-greedy
_SINGLE_LINE_BRACKET = re.compile(r"\[(.*?)\]")
# Non-empty literal between matching quotes, never spanning a line
_QUOTED_LITERAL = re.compile(r"(['\"])([^'\"]+)\1")


@dataclass(frozen=True)
class _Patterns:
    enum_start: tuple[re.Pattern[str], ...]
    enum_decl: tuple[re.Pattern[str], ...]
    table_decl: tuple[re.Pattern[str], ...]


def _patterns(names: SchemaNames) -> _Patterns:
    suffix = re.escape(names.suffix)
    var_name = re.escape(names.var_name)
    custom_prefix = rf"export const (\w+){suffix} = {var_name}\."
    return _Patterns(
        enum_start=(
            re.compile(custom_prefix + r"enum\(['\"](\w+)['\"],\s*\[", re.ASCII),
            _PG_ENUM_START,
        ),
        enum_decl=(re.compile(custom_prefix + r"enum\(", re.ASCII), _PG_ENUM_DECL),
        table_decl=(re.compile(custom_prefix + r"table\(", re.ASCII), _PG_TABLE_DECL),
    )


def _first_match(patterns: tuple[re.Pattern[str], ...], line: str) -> re.Match[str] | None:
    for pattern in patterns:
        match = pattern.search(line)
        if match:
            return match
    return None


def _collect_literals(text: str, values: list[str]) -> None:
    """Append quoted literals from ``text`` that are not in ``values`` yet."""
    for match in _QUOTED_LITERAL.finditer(text):
        value = match.group(2)
        if value not in values:
            values.append(value)


def extract_enums(text: str, names: SchemaNames) -> list[EnumRecord]:
    """
    Extract enum declarations together with their values.

    Values may sit on the declaration line or span the following lines.
    When the value list never closes, whatever was collected before the
    end of the file is kept. Declarations without any value are dropped.

    Args:
        text: Declaration file content
        names: Naming parameters of the schema

    Returns:
        Enum records in source order
    """
    lines = text.split("\n")
    patterns = _patterns(names)
    records: list[EnumRecord] = []

    for i, line in enumerate(lines):
        if not line:
            continue

        match = _first_match(patterns.enum_start, line)
        if match is None:
            continue

        variable_name, enum_name = match.group(1), match.group(2)
        values: list[str] = []

        bracket = _SINGLE_LINE_BRACKET.search(line)
        if bracket is not None:
            _collect_literals(bracket.group(1), values)
        else:
            _collect_multiline_values(lines, i, values)

        if not values:
            logger.debug("Skipping enum %s: no values found", variable_name)
            continue

        records.append(
            EnumRecord(variable_name=variable_name, enum_name=enum_name, values=tuple(values))
        )

    return records


def _collect_multiline_values(lines: list[str], start: int, values: list[str]) -> None:
    """Collect literals from the lines after ``start`` until the list closes."""
    balance = 1  # "[" on the declaration line
    j = start

    while balance > 0 and j + 1 < len(lines):
        j += 1
        current = lines[j]
        if not current:
            continue

        for char in current:
            if char == "[":
                balance += 1
            elif char == "]":
                balance -= 1

        if balance >= 0:
            _collect_literals(current, values)

    if balance > 0:
        logger.debug("Unclosed enum value list starting at line %d", start + 1)


def scan_declarations(text: str, names: SchemaNames) -> DeclarationScan:
    """
    Find table and enum variable names in one pass.

    A line may contribute to both lists. An empty scan is returned as-is;
    callers decide whether that is an error.

    Args:
        text: Declaration file content
        names: Naming parameters of the schema

    Returns:
        DeclarationScan with tables and enum names in source order
    """
    patterns = _patterns(names)
    tables: list[TableRecord] = []
    enums: list[str] = []

    for line in text.split("\n"):
        if not line:
            continue

        table_match = _first_match(patterns.table_decl, line)
        if table_match is not None:
            tables.append(TableRecord(variable_name=table_match.group(1)))

        enum_match = _first_match(patterns.enum_decl, line)
        if enum_match is not None:
            enums.append(enum_match.group(1))

    return DeclarationScan(tables=tables, enums=enums)


def extract_tables(text: str, names: SchemaNames) -> list[str]:
    """Return table variable names in source order."""
    return scan_declarations(text, names).table_names
