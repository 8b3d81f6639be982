"""CLI command that scaffolds the files generated modules depend on."""

from __future__ import annotations

from pathlib import Path

import typer

from pgtypegen.cli.utils import console, err_console
from pgtypegen.core.config import load_config
from pgtypegen.core.errors import TypegenError
from pgtypegen.core.templating import DB_CONFIG_TEMPLATE, UTILS_TEMPLATE
from pgtypegen.pipeline import SchemaProcessor


def init_command(
    schema: str | None = typer.Argument(
        None, help="Also create the drizzle-kit config for this schema"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing starter files"),
    project_dir: Path = typer.Option(Path("."), "--project-dir", "-p", help="Project root"),
) -> None:
    """
    Write db.config.ts and utils.ts into the project.

    db.config.ts is the drizzle-kit config template; utils.ts provides the
    TableSelect/TableInsert helpers imported by generated types.
    """
    project_root = project_dir.resolve()
    try:
        config = load_config(project_root)
    except TypegenError as e:
        err_console.print(str(e), style="red", markup=False)
        raise typer.Exit(code=1)

    starters = {
        project_root / config.paths.config_template: DB_CONFIG_TEMPLATE,
        project_root / "utils.ts": UTILS_TEMPLATE,
    }
    for path, content in starters.items():
        if path.exists() and not force:
            console.print(f"[blue]{path.name} already exists, skipping[/blue]")
            continue
        path.write_text(content, encoding="utf-8")
        console.print(f"[green]Created {path.name}[/green]")

    if schema:
        processor = SchemaProcessor(project_root, config=config)
        paths = config.schema_paths(project_root, schema)
        if processor.create_config_file(paths, schema):
            console.print(f"[green]Created {paths.config_file.name}[/green]")
        else:
            console.print(f"[blue]{paths.config_file.name} already exists, skipping[/blue]")
