"""
CLI command for type generation.

Commands:
- generate SCHEMA: pull one schema and generate its types and enums
- generate --all: do the same for every directory under the schemas dir
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import NoReturn

import typer

from pgtypegen.cli.utils import console, err_console
from pgtypegen.core.config import FailurePolicy, load_config
from pgtypegen.core.errors import TypegenError
from pgtypegen.pipeline import (
    BatchRunner,
    RunOptions,
    SchemaProcessor,
    SchemaRunResult,
    discover_schemas,
)


def generate_command(
    schema: str | None = typer.Argument(
        None, help="Name of the schema to process (required unless --all)"
    ),
    all_schemas: bool = typer.Option(
        False, "--all", help="Pull and generate types for all schemas in the schemas directory"
    ),
    types_only: bool = typer.Option(
        False, "--types-only", help="Skip schema pull, only generate types from existing schema"
    ),
    remove_schema: bool = typer.Option(
        False, "--remove-schema", help="Remove schema.ts after enum generation"
    ),
    disable_eslint: bool = typer.Option(False, "--disable-eslint", help="Skip ESLint step"),
    continue_on_error: bool | None = typer.Option(
        None,
        "--continue-on-error/--fail-fast",
        help="With --all: keep going after a failing schema (default from pgtypegen.toml)",
    ),
    database_url: str | None = typer.Option(
        None,
        "--database-url",
        envvar="DATABASE_URL",
        help="PostgreSQL connection URL used by drizzle-kit",
    ),
    project_dir: Path = typer.Option(
        Path("."), "--project-dir", "-p", help="Project root (contains db.config.ts)"
    ),
) -> None:
    """
    Generate TypeScript types and enums from a PostgreSQL schema.

    Examples:
        pgtypegen generate public
        pgtypegen generate public --types-only
        pgtypegen generate --all --continue-on-error
    """
    project_root = project_dir.resolve()
    try:
        config = load_config(project_root)
    except TypegenError as e:
        err_console.print(str(e), style="red", markup=False)
        raise typer.Exit(code=1)

    processor = SchemaProcessor(
        project_root,
        config=config,
        options=RunOptions(
            types_only=types_only,
            remove_schema=remove_schema,
            disable_lint=disable_eslint,
        ),
        database_url=database_url or os.environ.get("DATABASE_URL"),
    )

    if all_schemas:
        policy = config.batch.on_error
        if continue_on_error is not None:
            policy = FailurePolicy.CONTINUE if continue_on_error else FailurePolicy.ABORT
        _run_batch(processor, project_root / config.paths.schemas_dir, policy)
        return

    if not schema:
        _usage_error()
    try:
        result = _run_one(processor, schema)
    except TypegenError as e:
        err_console.print(f"✗ {schema}: {e}", style="red", markup=False)
        raise typer.Exit(code=1)
    _print_summary(result)


def _run_one(processor: SchemaProcessor, schema: str) -> SchemaRunResult:
    with console.status(f"Processing {schema}...") as status:
        processor.on_step = status.update
        try:
            return processor.run(schema)
        finally:
            processor.on_step = None


def _run_batch(processor: SchemaProcessor, schemas_dir: Path, policy: FailurePolicy) -> None:
    try:
        schemas = discover_schemas(schemas_dir)
    except FileNotFoundError:
        err_console.print("[red]No schemas directory found.[/red]")
        raise typer.Exit(code=1)

    if not schemas:
        console.print(f"No schema directories found in {schemas_dir}")
        return

    with console.status("Processing schemas...") as status:

        def announce(schema: str) -> None:
            processor.on_step = lambda message: status.update(f"[{schema}] {message}")

        batch = BatchRunner(processor, policy=policy, on_schema=announce).run(schemas)
        processor.on_step = None

    for result in batch.results:
        _print_summary(result)
    for schema, error in batch.failures.items():
        err_console.print(f"✗ {schema}: {error}", style="red", markup=False)
    if batch.skipped:
        err_console.print(f"[yellow]Skipped after failure: {', '.join(batch.skipped)}[/yellow]")

    if not batch.success:
        raise typer.Exit(code=1)


def _print_summary(result: SchemaRunResult) -> None:
    for warning in result.warnings:
        console.print(f"⚠ {warning}", style="yellow", markup=False)
    console.print(
        f"[bold green]✅ {result.schema} schema processing completed successfully[/bold green]"
    )
    console.print(
        f"[dim]{result.table_count} tables and {result.enum_count} enums processed[/dim]"
    )


def _usage_error() -> NoReturn:
    err_console.print("[red]Provide a schema name or use --all.[/red]")
    err_console.print("Usage: pgtypegen generate <schema_name|--all> [flags]", markup=False)
    raise typer.Exit(code=1)
