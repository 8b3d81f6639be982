"""Tests for external command helpers."""

import sys
from pathlib import Path

from pgtypegen.pipeline.commands import CommandResult, build_command, run_command


class TestBuildCommand:
    """Test build_command."""

    def test_fills_placeholders(self):
        args = build_command(
            "drizzle-kit pull --config={config_file}", config_file="./db.config.public.ts"
        )
        assert args == ["drizzle-kit", "pull", "--config=./db.config.public.ts"]

    def test_quoted_arguments(self):
        args = build_command('npx eslint "{schema_dir}" --fix', schema_dir="./my schemas/public")
        assert args == ["npx", "eslint", "./my schemas/public", "--fix"]

    def test_unused_values_are_ignored(self):
        assert build_command("true", schema="public") == ["true"]


class TestRunCommand:
    """Test run_command."""

    def test_captures_output(self, tmp_path: Path):
        result = run_command([sys.executable, "-c", "print('hello')"], tmp_path)

        assert result.ok
        assert result.stdout.strip() == "hello"

    def test_passes_environment(self, tmp_path: Path):
        result = run_command(
            [sys.executable, "-c", "import os; print(os.environ['DATABASE_URL'])"],
            tmp_path,
            {"DATABASE_URL": "postgresql://db"},
        )
        assert result.stdout.strip() == "postgresql://db"

    def test_nonzero_exit(self, tmp_path: Path):
        result = run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"], tmp_path
        )

        assert not result.ok
        assert result.returncode == 3
        assert result.stderr == "boom"

    def test_missing_executable(self, tmp_path: Path):
        result = run_command(["pgtypegen-no-such-tool"], tmp_path)

        assert result.returncode == 127
        assert not result.ok


def test_command_result_ok():
    assert CommandResult(args=["x"], returncode=0).ok
    assert not CommandResult(args=["x"], returncode=1).ok
