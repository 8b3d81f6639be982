"""
Filesystem and process side of pgtypegen.

Wraps the core with config creation, the schema pull, file output,
cleanup and linting.
"""

from pgtypegen.pipeline.batch import BatchResult, BatchRunner, discover_schemas
from pgtypegen.pipeline.commands import CommandResult, run_command
from pgtypegen.pipeline.processor import RunOptions, SchemaProcessor, SchemaRunResult

__all__ = [
    "BatchResult",
    "BatchRunner",
    "discover_schemas",
    "CommandResult",
    "run_command",
    "RunOptions",
    "SchemaProcessor",
    "SchemaRunResult",
]
