"""Working tree status via `git status --porcelain`.

Porcelain v1 lines are fixed-width records: a two-character status code
(index and worktree columns), one space, then the path.

    " M src/lib.rs"
    "?? notes.txt"
    "R  old.rs -> new.rs"
"""

from __future__ import annotations

from collections.abc import Iterable

from .errors import StatusParseError
from .models import StatusEntry
from .shell import git

CODE_WIDTH = 2


def git_status(git_bin: str = "git") -> list[str]:
    """Return the raw porcelain status lines for the current repository."""
    return git("status", "--porcelain", git_bin=git_bin).splitlines()


def parse_status_line(line: str) -> StatusEntry:
    """Parse one porcelain line into a StatusEntry.

    Raises:
        StatusParseError: If the line is too short or the separator after
            the status code is not a space.
    """
    if len(line) < CODE_WIDTH + 2 or line[CODE_WIDTH] != " ":
        raise StatusParseError(f"Malformed git status line: {line!r}")
    return StatusEntry(status_code=line[:CODE_WIDTH], path=line[CODE_WIDTH + 1 :])


def parse_status(lines: Iterable[str]) -> tuple[StatusEntry, ...]:
    """Parse porcelain output. An empty result means a clean tree."""
    return tuple(parse_status_line(line) for line in lines if line.strip())


def working_tree_status(git_bin: str = "git") -> tuple[StatusEntry, ...]:
    return parse_status(git_status(git_bin))
