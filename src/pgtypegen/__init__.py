"""
pgtypegen - TypeScript types and enums from PostgreSQL schemas.

Pulls a schema with drizzle-kit, shortens the generated identifiers and
emits ``enums.ts``, ``types.ts`` and ``index.ts`` next to the schema.
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import (
    DeclarationsNotFoundError,
    ExternalCommandError,
    SchemaFileNotFoundError,
    SchemaFileReadError,
    TypegenError,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "TypegenError",
    "DeclarationsNotFoundError",
    "SchemaFileNotFoundError",
    "SchemaFileReadError",
    "ExternalCommandError",
]
