"""External command execution for schema pulls and linting."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of an external command."""

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


CommandRunner = Callable[[Sequence[str], Path, Mapping[str, str] | None], CommandResult]


def build_command(template: str, **values: str) -> list[str]:
    """Fill ``{placeholders}`` in a configured command line and split it."""
    return shlex.split(template.format(**values))


def run_command(
    args: Sequence[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
) -> CommandResult:
    """
    Run a command and capture its output.

    A missing executable is reported as exit code 127 instead of raising,
    so callers handle every failure through the returned result.
    """
    full_env = {**os.environ, **env} if env else None
    logger.debug("Running: %s (cwd=%s)", " ".join(args), cwd)
    try:
        completed = subprocess.run(
            list(args),
            cwd=cwd,
            env=full_env,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        return CommandResult(args=list(args), returncode=127, stderr=str(e))

    return CommandResult(
        args=list(args),
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
