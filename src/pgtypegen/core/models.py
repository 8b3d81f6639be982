"""
Data models for scanned declarations.

All models are immutable and rebuilt from the declaration text on every run.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerationMode(StrEnum):
    """How the declaration file was obtained for this run."""

    FULL = "full"  # Schema pulled from the database
    TYPES_ONLY = "types_only"  # Existing declaration file reused

    @property
    def label(self) -> str:
        """Human-readable label written into generated file headers."""
        if self is GenerationMode.TYPES_ONLY:
            return "Types only (manual regeneration)"
        return "Full schema pull + type generation"


class EnumRecord(BaseModel):
    """
    An enum declaration with its literal values.

    Attributes:
        variable_name: Exported variable name, without the schema suffix
        enum_name: Database enum name (first argument of the declaration)
        values: Distinct literal values in first-seen order
    """

    variable_name: str
    enum_name: str
    values: tuple[str, ...]

    model_config = ConfigDict(frozen=True)

    @field_validator("values")
    @classmethod
    def _values_unique_and_present(cls, values: tuple[str, ...]) -> tuple[str, ...]:
        if not values:
            raise ValueError("an enum record needs at least one value")
        if len(set(values)) != len(values):
            raise ValueError("enum values must be unique")
        return values


class TableRecord(BaseModel):
    """A table declaration, identified by its exported variable name."""

    variable_name: str

    model_config = ConfigDict(frozen=True)


class DeclarationScan(BaseModel):
    """
    Names found by a single pass over a declaration file.

    Attributes:
        tables: Table variable names in source order
        enums: Enum variable names in source order
    """

    tables: list[TableRecord] = Field(default_factory=list)
    enums: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        return not self.tables and not self.enums

    @property
    def table_names(self) -> list[str]:
        return [table.variable_name for table in self.tables]
