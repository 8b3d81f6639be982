"""
Core of pgtypegen: naming, declaration scanning and TypeScript emission.

Nothing in this package touches the filesystem or spawns processes.
"""

from pgtypegen.core.emitter import TypeScriptEmitter
from pgtypegen.core.extractor import extract_enums, extract_tables, scan_declarations
from pgtypegen.core.models import DeclarationScan, EnumRecord, GenerationMode, TableRecord
from pgtypegen.core.naming import SchemaNames
from pgtypegen.core.renamer import rename_identifiers

__all__ = [
    "TypeScriptEmitter",
    "extract_enums",
    "extract_tables",
    "scan_declarations",
    "rename_identifiers",
    "DeclarationScan",
    "EnumRecord",
    "GenerationMode",
    "TableRecord",
    "SchemaNames",
]
