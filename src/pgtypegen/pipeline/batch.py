"""
Batch runner - processes every schema directory in turn.

Schemas are processed one at a time, sorted by directory name. The
configured failure policy decides whether a failing schema stops the batch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from pgtypegen.core.config import FailurePolicy
from pgtypegen.core.errors import TypegenError
from pgtypegen.pipeline.processor import SchemaProcessor, SchemaRunResult

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """
    Result of a batch run.

    Attributes:
        results: Successful per-schema results, in processing order
        failures: Schema name to error for every failed schema
        skipped: Schemas not attempted because the batch was aborted
    """

    results: list[SchemaRunResult] = field(default_factory=list)
    failures: dict[str, TypegenError] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


def discover_schemas(schemas_dir: Path) -> list[str]:
    """
    List schema names (sub-directories of ``schemas_dir``), sorted.

    Raises:
        FileNotFoundError: If ``schemas_dir`` does not exist
    """
    if not schemas_dir.is_dir():
        raise FileNotFoundError(f"No schemas directory found at {schemas_dir}")
    return sorted(entry.name for entry in schemas_dir.iterdir() if entry.is_dir())


class BatchRunner:
    """
    Run a :class:`SchemaProcessor` over several schemas.

    Args:
        processor: Processor used for every schema
        policy: Whether to abort or continue after a failing schema
        on_schema: Called with each schema name before it is processed
    """

    def __init__(
        self,
        processor: SchemaProcessor,
        policy: FailurePolicy = FailurePolicy.ABORT,
        on_schema: Callable[[str], None] | None = None,
    ):
        self.processor = processor
        self.policy = policy
        self.on_schema = on_schema

    def run(self, schemas: list[str]) -> BatchResult:
        batch = BatchResult()

        for position, schema in enumerate(schemas):
            if self.on_schema is not None:
                self.on_schema(schema)
            try:
                batch.results.append(self.processor.run(schema))
            except TypegenError as e:
                logger.error("Processing schema %s failed: %s", schema, e)
                batch.failures[schema] = e
                if self.policy is FailurePolicy.ABORT:
                    batch.skipped = schemas[position + 1 :]
                    break

        return batch
