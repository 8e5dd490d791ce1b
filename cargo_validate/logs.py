"""Logging setup for the CLI."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send cargo_validate diagnostics to stderr.

    Operator-facing output goes through click; this only covers the
    debug trail (requests issued, commands spawned, files rewritten).
    """
    logger = logging.getLogger("cargo_validate")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
