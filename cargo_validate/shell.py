"""Shell and git utilities.

Provides simple wrappers around subprocess calls for running git and cargo,
plus output formatting helpers.
"""

from __future__ import annotations

import logging
import subprocess

import click

from .errors import ExecutionError

logger = logging.getLogger(__name__)


def git(*args: str, git_bin: str = "git") -> str:
    """Run a git command and return its stdout.

    Output is decoded leniently: bytes that are not valid UTF-8 (odd file
    names, mostly) are replaced rather than aborting the run.

    Args:
        *args: Arguments to pass to git (e.g., "status", "--porcelain").
        git_bin: git executable to run.

    Raises:
        ExecutionError: If git cannot be started or exits non-zero.
    """
    cmd = [git_bin, *args]
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, check=False)
    except OSError as exc:
        raise ExecutionError(f"Failed to run {git_bin}: {exc}") from exc
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise ExecutionError(
            f"{' '.join(cmd)} failed with exit code {result.returncode}: {stderr}"
        )
    return result.stdout.decode("utf-8", errors="replace")


def run(*args: str) -> subprocess.CompletedProcess[bytes]:
    """Run an arbitrary command.

    Unlike git(), this doesn't capture output - it streams directly to
    the terminal so users can see what cargo is doing.

    Raises:
        ExecutionError: If the command cannot be started.
    """
    logger.debug("Running %s", " ".join(args))
    try:
        return subprocess.run(args, check=False)
    except OSError as exc:
        raise ExecutionError(f"Failed to run {args[0]}: {exc}") from exc


def step(msg: str) -> None:
    """Print a visually distinct step header."""
    click.echo(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")
