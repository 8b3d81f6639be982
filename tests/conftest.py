"""Shared pytest fixtures for pgtypegen tests."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path

import pytest

from pgtypegen.core.naming import SchemaNames
from pgtypegen.core.templating import DB_CONFIG_TEMPLATE
from pgtypegen.pipeline.commands import CommandResult

FIXED_TIME = datetime(2024, 5, 1, 12, 30, 0, tzinfo=UTC)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def public_schema_text(fixtures_dir: Path) -> str:
    """Declaration file using plain pgTable/pgEnum declarations."""
    return (fixtures_dir / "schema_public.ts").read_text()


@pytest.fixture
def billing_raw_text(fixtures_dir: Path) -> str:
    """Declaration file for the billing schema, as pulled (not yet renamed)."""
    return (fixtures_dir / "schema_billing_raw.ts").read_text()


@pytest.fixture
def public_names() -> SchemaNames:
    return SchemaNames.for_schema("public")


@pytest.fixture
def billing_names() -> SchemaNames:
    return SchemaNames.for_schema("billing")


@pytest.fixture
def fixed_time() -> datetime:
    return FIXED_TIME


class FakeCommandRunner:
    """
    Records commands instead of running them.

    ``on_pull`` is called with the working directory when a drizzle-kit
    command runs, so tests can drop a pulled declaration file in place.
    """

    def __init__(
        self,
        pull_result: CommandResult | None = None,
        lint_result: CommandResult | None = None,
        on_pull: Callable[[Path], None] | None = None,
    ):
        self.calls: list[tuple[list[str], Path, dict[str, str] | None]] = []
        self.pull_result = pull_result
        self.lint_result = lint_result
        self.on_pull = on_pull

    def __call__(
        self, args: Sequence[str], cwd: Path, env: Mapping[str, str] | None = None
    ) -> CommandResult:
        args = list(args)
        self.calls.append((args, cwd, dict(env) if env else None))
        if args and args[0] == "drizzle-kit":
            if self.on_pull is not None:
                self.on_pull(cwd)
            return self.pull_result or CommandResult(args=args, returncode=0)
        return self.lint_result or CommandResult(args=args, returncode=0)

    def programs(self) -> list[str]:
        return [args[0] for args, _, _ in self.calls]


@pytest.fixture
def fake_runner() -> FakeCommandRunner:
    return FakeCommandRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project root with the db.config.ts template and an empty schemas dir."""
    (tmp_path / "db.config.ts").write_text(DB_CONFIG_TEMPLATE)
    (tmp_path / "schemas").mkdir()
    return tmp_path


def write_pulled_schema(root: Path, schema: str, text: str) -> Path:
    """Write ``text`` where drizzle-kit puts a pulled declaration file."""
    migrations = root / "schemas" / schema / "migrations"
    (migrations / "meta").mkdir(parents=True, exist_ok=True)
    (migrations / "meta" / "0000_snapshot.json").write_text("{}")
    path = migrations / "schema.ts"
    path.write_text(text)
    return path


@pytest.fixture
def make_runner() -> type[FakeCommandRunner]:
    """Factory for fake command runners with scripted results."""
    return FakeCommandRunner


@pytest.fixture
def pull_into() -> Callable[[Path, str, str], Path]:
    """Helper writing a pulled declaration file into a project."""
    return write_pulled_schema
