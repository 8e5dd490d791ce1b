"""Resolve the operator's crates.io username.

The username is cached in a plain text file under the user's home directory
(~/.cargo/username by default). On first use it is asked for interactively
and written there; later runs read it back.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import click

from .config import Settings, get_settings
from .errors import ErrorKind, IdentityError

logger = logging.getLogger(__name__)

USERNAME_PROMPT = "Please enter your crates.io username"


def username_path(settings: Settings | None = None, home: Path | None = None) -> Path:
    """Location of the username cache file.

    Raises:
        IdentityError: If the home directory cannot be resolved.
    """
    settings = settings or get_settings()
    if home is None:
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as exc:
            raise IdentityError("Home directory not found") from exc
    return home / settings.username_file


def get_or_prompt_username(
    path: Path | None = None,
    prompt: Callable[[str], str] = click.prompt,
) -> str:
    """Return the cached username, asking for it (and caching it) if needed."""
    path = path or username_path()

    if path.exists():
        try:
            cached = path.read_text(encoding="utf-8").strip()
        except UnicodeDecodeError as exc:
            raise IdentityError(
                f"{path} is not valid UTF-8", kind=ErrorKind.INVALID_DATA
            ) from exc
        if cached:
            logger.debug("Using cached username from %s", path)
            return cached

    username = str(prompt(USERNAME_PROMPT)).strip()
    if not username:
        raise IdentityError("No username given", kind=ErrorKind.INVALID_DATA)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(username, encoding="utf-8")
    logger.debug("Saved username to %s", path)
    return username
