"""
pgtypegen CLI Package.

- generate.py: type and enum generation (single schema or --all)
- init.py: starter db.config.ts / utils.ts
- utils.py: consoles, logging and version callback
"""

import sys

import typer

from pgtypegen.cli.generate import generate_command
from pgtypegen.cli.init import init_command
from pgtypegen.cli.utils import setup_logging, version_callback

app = typer.Typer(
    help="""pgtypegen - PostgreSQL schema types & enums generator

Pulls a schema with drizzle-kit and generates enums.ts, types.ts and
index.ts next to it. DATABASE_URL must be set unless --types-only is used.
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """pgtypegen CLI main callback for global options."""
    setup_logging(verbose)


app.command(name="generate")(generate_command)
app.command(name="init")(init_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "main"]


if __name__ == "__main__":
    main(sys.argv[1:])
