"""
pgtypegen CLI Utilities.

Shared consoles, logging setup and the version callback.
"""

import logging
import platform
import shutil
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from pgtypegen._version import get_version

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        try:
            import pgtypegen

            install_location = Path(pgtypegen.__file__).parent
        except Exception:
            install_location = Path.cwd()

        typer.echo(f"pgtypegen version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {python_impl} {python_version}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        typer.echo(f"  Location:      {install_location}")
        typer.echo("")
        typer.echo("Tools:")
        for tool in ("drizzle-kit", "npx"):
            status = "✓ Found" if shutil.which(tool) else "✗ Not on PATH"
            typer.echo(f"  {tool + ':':<14} {status}")

        raise typer.Exit()
