"""
Error types for schema pulling, declaration scanning and code emission.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class TypegenError(Exception):
    """Base exception for all pgtypegen errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class DeclarationsNotFoundError(TypegenError):
    """
    Raised when a declaration file holds neither tables nor enums.

    The file is expected to come from a schema pull, so an empty scan
    usually means the pull produced an invalid or unrelated file.
    """

    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            "Could not find any tables or enums in the schema. The schema file may be invalid.",
            ErrorContext(file=path),
        )


class SchemaFileNotFoundError(TypegenError):
    """Raised when no declaration file exists at any candidate location."""

    def __init__(self, candidates: Sequence[Path]):
        self.candidates = list(candidates)
        searched = ", ".join(str(path) for path in self.candidates)
        super().__init__(
            f"Schema file not found (searched: {searched}). "
            "Run without --types-only to generate it first."
        )


class SchemaFileReadError(TypegenError):
    """Raised when a declaration file exists but cannot be read as UTF-8 text."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read schema file: {reason}", ErrorContext(file=path))


class ConfigTemplateError(TypegenError):
    """Raised when the database config template cannot be found."""

    def __init__(self, template_path: Path):
        self.template_path = template_path
        super().__init__(
            f"Template config file ({template_path.name}) not found. "
            "Please ensure it exists in the project root, or run `pgtypegen init`."
        )


class ConfigError(TypegenError):
    """
    Raised when pgtypegen.toml cannot be read or validated.

    Examples:
    - Invalid TOML syntax
    - Unknown batch failure policy
    - Wrong value types
    """

    pass


class MissingDatabaseUrlError(TypegenError):
    """Raised when a schema pull is requested without a database URL."""

    def __init__(self) -> None:
        super().__init__(
            "DATABASE_URL environment variable is required to pull a schema. "
            "Set it, pass --database-url, or use --types-only."
        )


class ExternalCommandError(TypegenError):
    """
    Raised when a required external command fails.

    Only the schema pull is required; lint failures are reported as warnings.
    """

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed with exit code {returncode}: {' '.join(self.command)}"
        if stderr.strip():
            message += f"\n{stderr.strip()}"
        super().__init__(message)


@dataclass
class ErrorContext:
    """
    Context information for an error.

    Attributes:
        file: Path to the file the error refers to
    """

    file: Path

    def format(self) -> str:
        """Format error context as a human-readable string."""
        return str(self.file)
