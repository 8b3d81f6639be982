"""
Schema processor - runs the full generation flow for one schema.

Steps:
1. Create the per-schema drizzle-kit config from the template
2. Pull the schema and shorten its identifiers (full mode only)
3. Locate the declaration file
4. Emit enums.ts, types.ts and index.ts
5. Move the declaration file out of the migrations directory (full mode only)
6. Lint the schema directory and optionally remove the declaration file
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from pgtypegen.core.config import NO_SQL_GENERATED_NOTICE, SchemaPaths, TypegenConfig
from pgtypegen.core.emitter import TypeScriptEmitter
from pgtypegen.core.errors import (
    ConfigTemplateError,
    DeclarationsNotFoundError,
    ExternalCommandError,
    MissingDatabaseUrlError,
    SchemaFileNotFoundError,
    SchemaFileReadError,
)
from pgtypegen.core.extractor import extract_enums, scan_declarations
from pgtypegen.core.models import GenerationMode
from pgtypegen.core.naming import SchemaNames
from pgtypegen.core.renamer import rename_identifiers
from pgtypegen.core.templating import render_config_template
from pgtypegen.pipeline.commands import CommandRunner, build_command, run_command

logger = logging.getLogger(__name__)

StepCallback = Callable[[str], None]


@dataclass(frozen=True)
class RunOptions:
    """
    Per-run switches.

    Attributes:
        types_only: Reuse the existing declaration file instead of pulling
        remove_schema: Delete the final declaration file when done
        disable_lint: Skip the lint command
    """

    types_only: bool = False
    remove_schema: bool = False
    disable_lint: bool = False

    @property
    def mode(self) -> GenerationMode:
        return GenerationMode.TYPES_ONLY if self.types_only else GenerationMode.FULL


@dataclass
class SchemaRunResult:
    """
    Result of processing one schema.

    Attributes:
        schema: Schema name
        files_written: Generated or rewritten files
        table_count: Number of tables found
        enum_count: Number of enum declarations found
        enums_generated: Whether enums.ts was written
        warnings: Non-fatal problems (pull warnings, lint output, cleanup)
    """

    schema: str
    files_written: list[Path] = field(default_factory=list)
    table_count: int = 0
    enum_count: int = 0
    enums_generated: bool = False
    warnings: list[str] = field(default_factory=list)

    def add_file(self, path: Path, content: str) -> None:
        """Write ``content`` to ``path`` and record it."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        self.files_written.append(path)

    def add_warning(self, warning: str) -> None:
        logger.warning(warning)
        self.warnings.append(warning)


class SchemaProcessor:
    """
    Generate TypeScript types and enums for a single schema.

    Args:
        project_root: Directory holding the config template and schemas dir
        config: Project configuration
        options: Per-run switches
        database_url: Passed to the pull command as ``DATABASE_URL``
        command_runner: Executes external commands (replaced in tests)
        generated_at: Timestamp for generated file headers
        on_step: Called with a short description before each step
    """

    def __init__(
        self,
        project_root: Path,
        config: TypegenConfig | None = None,
        options: RunOptions | None = None,
        database_url: str | None = None,
        command_runner: CommandRunner = run_command,
        generated_at: datetime | None = None,
        on_step: StepCallback | None = None,
    ):
        self.project_root = project_root
        self.config = config or TypegenConfig()
        self.options = options or RunOptions()
        self.database_url = database_url
        self.command_runner = command_runner
        self.generated_at = generated_at
        self.on_step = on_step

    def run(self, schema: str) -> SchemaRunResult:
        """
        Process ``schema`` end to end.

        Returns:
            SchemaRunResult with written files and warnings

        Raises:
            ConfigTemplateError: The config template is missing
            MissingDatabaseUrlError: A pull is needed but no database URL is set
            ExternalCommandError: The schema pull failed
            SchemaFileNotFoundError: No declaration file to read
            SchemaFileReadError: The declaration file is unreadable or not UTF-8
            DeclarationsNotFoundError: The declaration file has no tables or enums
        """
        names = SchemaNames.for_schema(schema)
        paths = self.config.schema_paths(self.project_root, schema)
        result = SchemaRunResult(schema=schema)

        self._step(f"Creating database config file for {schema}...")
        self.create_config_file(paths, schema)

        if not self.options.types_only:
            self._step(f"Fetching {schema} schema from database...")
            self.pull_schema(paths, schema, result)
            self._step("Processing schema file to improve readability...")
            self.rename_file(paths.migrations_schema_file, names, result)

        self._step("Verifying schema file...")
        schema_file = self.locate_schema_file(paths)
        text = _read_schema_file(schema_file)

        if self.options.types_only and names.search_pattern in text:
            self._step("Processing schema file to improve readability...")
            text = self.rename_file(schema_file, names, result)

        emitter = TypeScriptEmitter(
            names,
            mode=self.options.mode,
            generated_at=self.generated_at,
            utils_import=self.config.paths.utils_import,
        )

        self._step("Generating TypeScript enums file...")
        records = extract_enums(text, names)
        if records:
            result.add_file(paths.enums_file, emitter.render_enums(records))
            result.enums_generated = True
            logger.info("TypeScript enums generated at %s (%d enums)", paths.enums_file, len(records))
        else:
            logger.info("No enums found in the schema")

        self._log_snapshot(paths)

        self._step("Generating TypeScript types from schema...")
        scan = scan_declarations(text, names)
        if scan.is_empty:
            raise DeclarationsNotFoundError(schema_file)
        result.table_count = len(scan.tables)
        result.enum_count = len(scan.enums)
        logger.info("Found %d tables and %d enums in the schema", result.table_count, result.enum_count)

        result.add_file(
            paths.types_file, emitter.render_types(scan, text, result.enums_generated)
        )
        self._step("Creating index file...")
        result.add_file(paths.index_file, emitter.render_index(result.enums_generated))

        if not self.options.types_only:
            self._step("Moving schema file and cleaning up...")
            self.finalize_schema_file(paths, result)

        if self.options.disable_lint:
            logger.info("Skipping lint step as requested")
        else:
            self._step("Running ESLint to fix any style issues...")
            self.lint(paths, schema, result)

        if self.options.remove_schema:
            self._step("Removing schema.ts...")
            self.remove_schema_file(paths, result)

        return result

    # === Steps ===

    def create_config_file(self, paths: SchemaPaths, schema: str) -> bool:
        """
        Write the per-schema config from the template.

        Returns:
            True if a file was created, False if it already existed
        """
        if paths.config_file.exists():
            logger.info("Config file %s already exists, skipping creation", paths.config_file)
            return False
        if not paths.config_template.exists():
            raise ConfigTemplateError(paths.config_template)

        template = paths.config_template.read_text(encoding="utf-8")
        paths.config_file.write_text(render_config_template(template, schema), encoding="utf-8")
        logger.info("Config file created at %s", paths.config_file)
        return True

    def pull_schema(self, paths: SchemaPaths, schema: str, result: SchemaRunResult) -> None:
        """Run the pull command; stderr other than the no-op notice is a warning."""
        if not self.database_url:
            raise MissingDatabaseUrlError()

        args = build_command(
            self.config.commands.pull,
            schema=schema,
            config_file=self._relative(paths.config_file),
            schema_dir=self._relative(paths.schema_dir),
        )
        outcome = self.command_runner(args, self.project_root, {"DATABASE_URL": self.database_url})
        if not outcome.ok:
            raise ExternalCommandError(args, outcome.returncode, outcome.stderr)

        if outcome.stderr and NO_SQL_GENERATED_NOTICE not in outcome.stderr:
            result.add_warning(f"Schema pulled with warnings: {outcome.stderr.strip()}")
        else:
            logger.info("Schema pulled successfully")

    def rename_file(self, path: Path, names: SchemaNames, result: SchemaRunResult) -> str:
        """Shorten schema-scoped identifiers in ``path`` and write it back."""
        if not path.exists():
            raise SchemaFileNotFoundError([path])
        text = rename_identifiers(
            _read_schema_file(path), names.search_pattern, names.suffix
        )
        result.add_file(path, text)
        logger.info("Schema file processed successfully")
        return text

    def locate_schema_file(self, paths: SchemaPaths) -> Path:
        """Return the declaration file for this run's mode."""
        if self.options.types_only:
            candidates = [paths.final_schema_file, paths.migrations_schema_file]
        else:
            candidates = [paths.migrations_schema_file]

        for candidate in candidates:
            if candidate.is_file():
                logger.info("Found schema file at %s", candidate)
                return candidate
        raise SchemaFileNotFoundError(candidates)

    def finalize_schema_file(self, paths: SchemaPaths, result: SchemaRunResult) -> None:
        """Copy the declaration file to its final place and drop the migrations dir."""
        try:
            shutil.copyfile(paths.migrations_schema_file, paths.final_schema_file)
            result.files_written.append(paths.final_schema_file)
            shutil.rmtree(paths.migrations_dir)
            if paths.migrations_schema_file in result.files_written:
                result.files_written.remove(paths.migrations_schema_file)
        except OSError as e:
            result.add_warning(f"Failed to move schema file or clean up migrations directory: {e}")
        else:
            logger.info("Schema file moved and migrations directory removed")

    def lint(self, paths: SchemaPaths, schema: str, result: SchemaRunResult) -> None:
        """Run the lint command; any failure or stderr output is only a warning."""
        args = build_command(
            self.config.commands.lint,
            schema=schema,
            config_file=self._relative(paths.config_file),
            schema_dir=self._relative(paths.schema_dir),
        )
        outcome = self.command_runner(args, self.project_root, None)
        if not outcome.ok:
            detail = (outcome.stderr or outcome.stdout).strip()
            result.add_warning(f"ESLint encountered issues but processing will continue: {detail}")
        elif outcome.stderr.strip():
            result.add_warning(f"ESLint completed with warnings: {outcome.stderr.strip()}")
        else:
            logger.info("ESLint fixes applied successfully")

    def remove_schema_file(self, paths: SchemaPaths, result: SchemaRunResult) -> None:
        try:
            paths.final_schema_file.unlink()
        except OSError as e:
            result.add_warning(f"Failed to remove schema.ts at {paths.final_schema_file}: {e}")
        else:
            if paths.final_schema_file in result.files_written:
                result.files_written.remove(paths.final_schema_file)
            logger.info("Schema.ts removed at %s", paths.final_schema_file)

    # === Helpers ===

    def _log_snapshot(self, paths: SchemaPaths) -> None:
        if not paths.meta_dir.is_dir():
            logger.info("No metadata directory found, will use schema.ts directly")
            return
        snapshots = sorted(paths.meta_dir.glob("*_snapshot.json"))
        if snapshots:
            logger.info("Found metadata snapshot at %s", snapshots[0])
        else:
            logger.info("No metadata snapshot found, will use schema.ts directly")

    def _relative(self, path: Path) -> str:
        try:
            return "./" + path.relative_to(self.project_root).as_posix()
        except ValueError:
            return str(path)

    def _step(self, message: str) -> None:
        logger.debug(message)
        if self.on_step is not None:
            self.on_step(message)


def _read_schema_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SchemaFileReadError(path, f"not valid UTF-8 ({e.reason} at byte {e.start})") from e
    except OSError as e:
        raise SchemaFileReadError(path, e.strerror or str(e)) from e
