"""
TypeScript emitter for scanned declarations.

Renders the three generated modules of a schema directory:
- enums.ts: a TypeScript enum, a value array and a union type per database enum
- types.ts: select/insert row types per table and a value type per enum
- index.ts: barrel file re-exporting the generated modules

The emitter only builds text; writing files is left to the pipeline.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from pgtypegen.core.models import DeclarationScan, EnumRecord, GenerationMode
from pgtypegen.core.naming import SchemaNames, enum_display_name, table_display_name

TOOL_NAME = "gen-types-enums-psql-schema"
DEFAULT_UTILS_IMPORT = "../../utils"


class TypeScriptEmitter:
    """
    Render generated TypeScript modules for one schema.

    Args:
        names: Naming parameters of the schema
        mode: Generation mode, recorded in file headers
        generated_at: Timestamp for file headers (defaults to now, UTC)
        utils_import: Import path of the module providing TableSelect/TableInsert
    """

    def __init__(
        self,
        names: SchemaNames,
        mode: GenerationMode = GenerationMode.FULL,
        generated_at: datetime | None = None,
        utils_import: str = DEFAULT_UTILS_IMPORT,
    ):
        self.names = names
        self.mode = mode
        self.generated_at = generated_at or datetime.now(UTC)
        self.utils_import = utils_import

    @property
    def timestamp(self) -> str:
        """ISO-8601 timestamp with millisecond precision and a ``Z`` suffix."""
        stamp = self.generated_at.astimezone(UTC).isoformat(timespec="milliseconds")
        return stamp.replace("+00:00", "Z")

    # === Membership checks ===

    def uses_custom_table(self, table_name: str, declaration_text: str) -> bool:
        """Whether ``table_name`` is declared through the schema variable."""
        return (
            f"{table_name}{self.names.suffix} = {self.names.var_name}.table(" in declaration_text
        )

    def uses_custom_enum(self, enum_name: str, declaration_text: str) -> bool:
        """Whether ``enum_name`` is declared through the schema variable."""
        return f"{enum_name}{self.names.suffix} = {self.names.var_name}.enum(" in declaration_text

    # === enums.ts ===

    def render_enums(self, records: Sequence[EnumRecord]) -> str:
        """
        Render the enums module.

        Args:
            records: Enum records from :func:`extract_enums`

        Returns:
            Module text; callers skip writing it when ``records`` is empty
        """
        parts = [
            "/**\n"
            f" * Auto-generated TypeScript enums for the {self.names.schema_name} schema.\n"
            f" * Generated at: {self.timestamp}\n"
            f" * Mode: {self.mode.label}\n"
            " */\n"
            "\n"
            f"import {{ getArrayFromEnum }} from '{self.utils_import}';\n"
            "\n"
        ]
        for record in records:
            parts.append(self._render_enum(record))
        return "".join(parts)

    def _render_enum(self, record: EnumRecord) -> str:
        enum_type = enum_display_name(record.enum_name, self.names.suffix)
        lines = [
            "",
            "/**",
            f" * Defines the `{record.variable_name}` enum type for entities"
            f" in the `{self.names.schema_name}`.",
            " */",
            f"export enum {enum_type} {{",
        ]
        lines.extend(f'  "{value}" = "{value}",' for value in record.values)
        lines.append("}")
        lines.append("")
        lines.append(f"export const {enum_type}Enums = [")
        lines.extend(f'  "{value}",' for value in record.values)
        lines.append("] as const;")
        lines.append("")
        lines.append(f"export type {enum_type}Type = (typeof {enum_type}Enums)[number];")
        lines.append("")
        lines.append("")
        return "\n".join(lines) + "\n"

    # === types.ts ===

    def render_types(
        self,
        scan: DeclarationScan,
        declaration_text: str,
        enums_generated: bool,
    ) -> str:
        """
        Render the types module.

        Args:
            scan: Table and enum names from :func:`scan_declarations`
            declaration_text: Declaration file content, used to tell custom
                declarations from plain ``pgTable``/``pgEnum`` ones
            enums_generated: Whether an enums module was written

        Returns:
            Module text
        """
        enums_export = "\nexport * from './enums';" if enums_generated else ""
        parts = [
            "/**\n"
            f" * This file is auto-generated from the database schema using {TOOL_NAME}.\n"
            " * Do not modify this file directly - instead, run the script again.\n"
            " * \n"
            f" * Generated at: {self.timestamp}\n"
            f" * Schema: {self.names.schema_name}\n"
            f" * Mode: {self.mode.label}\n"
            " */\n"
            "\n"
            f"import {{ type TableInsert, type TableSelect }} from '{self.utils_import}';\n"
            "import type * as schema from './schema';\n"
            "\n"
            "// Export generated schema\n"
            "export * from './schema';\n"
            f"{enums_export}\n"
            "\n"
            "// Generate TypeScript types for all tables\n"
        ]

        for table_name in scan.table_names:
            reference = table_name
            if self.uses_custom_table(table_name, declaration_text):
                reference = f"{table_name}{self.names.suffix}"
            type_name = table_display_name(table_name)
            parts.append(
                "\n"
                "/**\n"
                f" * Defines the `{type_name}` type for entities in the `{self.names.schema_name}`.\n"
                " */\n"
                f"export type {type_name} = TableSelect<typeof schema.{reference}>;\n"
                f"export type {type_name}Insert = TableInsert<typeof schema.{reference}>;\n"
            )

        parts.append("\n// Generate TypeScript types for all enums\n")

        for enum_name in scan.enums:
            reference = enum_name
            if self.uses_custom_enum(enum_name, declaration_text):
                reference = f"{enum_name}{self.names.suffix}"
            type_name = table_display_name(enum_name)
            parts.append(
                "\n"
                "/**\n"
                f" * Defines the `{type_name}` enum type for entities"
                f" in the `{self.names.schema_name}`.\n"
                " */\n"
                f"export type {type_name}Type = typeof schema.{reference}.enumValues[number];\n"
            )

        return "".join(parts)

    # === index.ts ===

    def render_index(self, enums_generated: bool) -> str:
        """Render the barrel module; ``./enums`` is exported only if it exists."""
        enums_export = "\nexport * from './enums';" if enums_generated else ""
        return (
            "/**\n"
            " * This file exports all types and schema components for the"
            f" {self.names.schema_name} schema.\n"
            " * \n"
            f" * Generated at: {self.timestamp}\n"
            " */\n"
            "\n"
            "export * from './types';\n"
            f"export * from './schema';{enums_export}\n"
        )
