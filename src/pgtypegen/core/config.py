"""
Project configuration.

Parses an optional ``pgtypegen.toml`` from the project root and derives
the per-schema file layout. Without a config file the defaults reproduce
the standard layout::

    db.config.ts                      template with a schema placeholder
    db.config.<schema>.ts             per-schema drizzle-kit config
    schemas/<schema>/migrations/      drizzle-kit pull output
    schemas/<schema>/schema.ts        final declaration file
    schemas/<schema>/{types,index,enums}.ts
"""

from __future__ import annotations

import logging
import string
import tomllib
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from pgtypegen.core.emitter import DEFAULT_UTILS_IMPORT
from pgtypegen.core.errors import ConfigError

CONFIG_FILENAME = "pgtypegen.toml"
NO_SQL_GENERATED_NOTICE = "[i] No SQL generated"

logger = logging.getLogger(__name__)

COMMAND_PLACEHOLDERS = frozenset({"schema", "config_file", "schema_dir"})
CONFIG_FILE_PLACEHOLDERS = frozenset({"schema"})


def check_placeholders(value: str, allowed: frozenset[str]) -> str:
    """
    Reject ``{placeholders}`` in ``value`` that will not be filled in.

    Raises:
        ValueError: On an unknown placeholder or unbalanced braces
    """
    try:
        fields = [name for _, name, _, _ in string.Formatter().parse(value) if name is not None]
    except ValueError as e:
        raise ValueError(f"invalid placeholder syntax in {value!r}: {e}") from e

    unknown = sorted({name for name in fields if name not in allowed})
    if unknown:
        expected = ", ".join(f"{{{name}}}" for name in sorted(allowed))
        found = ", ".join(f"{{{name}}}" for name in unknown)
        raise ValueError(f"unknown placeholder {found} in {value!r}; expected {expected}")
    return value


class FailurePolicy(StrEnum):
    """What batch mode does when one schema fails."""

    ABORT = "abort"
    CONTINUE = "continue"


class PathsConfig(BaseModel):
    """File layout, relative to the project root."""

    model_config = ConfigDict(extra="forbid")

    schemas_dir: str = "schemas"
    config_template: str = "db.config.ts"
    config_file: str = "db.config.{schema}.ts"
    utils_import: str = DEFAULT_UTILS_IMPORT

    @field_validator("config_file")
    @classmethod
    def _known_placeholders(cls, value: str) -> str:
        return check_placeholders(value, CONFIG_FILE_PLACEHOLDERS)


class CommandsConfig(BaseModel):
    """
    External command lines.

    Placeholders: ``{schema}``, ``{config_file}`` and ``{schema_dir}``.
    """

    model_config = ConfigDict(extra="forbid")

    pull: str = "drizzle-kit pull --config={config_file}"
    lint: str = "npx eslint {schema_dir} --fix"

    @field_validator("pull", "lint")
    @classmethod
    def _known_placeholders(cls, value: str) -> str:
        return check_placeholders(value, COMMAND_PLACEHOLDERS)


class BatchConfig(BaseModel):
    """Batch (``--all``) behaviour."""

    model_config = ConfigDict(extra="forbid")

    on_error: FailurePolicy = FailurePolicy.ABORT


class TypegenConfig(BaseModel):
    """Complete pgtypegen configuration."""

    model_config = ConfigDict(extra="forbid")

    paths: PathsConfig = Field(default_factory=PathsConfig)
    commands: CommandsConfig = Field(default_factory=CommandsConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)

    def schema_paths(self, project_root: Path, schema: str) -> SchemaPaths:
        """Derive the file layout of one schema."""
        schema_dir = project_root / self.paths.schemas_dir / schema
        migrations_dir = schema_dir / "migrations"
        return SchemaPaths(
            config_template=project_root / self.paths.config_template,
            config_file=project_root / self.paths.config_file.format(schema=schema),
            schema_dir=schema_dir,
            migrations_dir=migrations_dir,
            migrations_schema_file=migrations_dir / "schema.ts",
            final_schema_file=schema_dir / "schema.ts",
            meta_dir=migrations_dir / "meta",
            types_file=schema_dir / "types.ts",
            index_file=schema_dir / "index.ts",
            enums_file=schema_dir / "enums.ts",
        )


class SchemaPaths(BaseModel):
    """Files read and written while processing one schema."""

    model_config = ConfigDict(frozen=True)

    config_template: Path
    config_file: Path
    schema_dir: Path
    migrations_dir: Path
    migrations_schema_file: Path
    final_schema_file: Path
    meta_dir: Path
    types_file: Path
    index_file: Path
    enums_file: Path


def load_config(project_root: Path) -> TypegenConfig:
    """
    Load configuration from ``pgtypegen.toml``.

    Args:
        project_root: Project root directory

    Returns:
        TypegenConfig with parsed values or defaults

    Raises:
        ConfigError: If the file is not valid TOML or has invalid values
    """
    toml_path = project_root / CONFIG_FILENAME
    if not toml_path.exists():
        return TypegenConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {toml_path}: {e}") from e

    try:
        config = TypegenConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration in {toml_path}:\n{e}") from e

    logger.debug("Loaded configuration from %s", toml_path)
    return config
