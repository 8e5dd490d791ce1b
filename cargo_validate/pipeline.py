"""Validation pipeline: read → look up → probe → report → confirm → publish.

This module orchestrates a cargo-validate run:
1. Read [package] from Cargo.toml
2. Resolve the operator's crates.io username
3. Look the crate name and version up on crates.io
4. Collect uncommitted git changes
5. Print the report and ask for confirmation(s)
6. Run `cargo publish` with the user's arguments plus derived flags

Nothing is published unless every confirmation is accepted. A patch bump
accepted in step 5 is written to Cargo.toml immediately and stays there
even if a later step fails.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Callable

import click

from .config import Settings, get_settings
from .identity import get_or_prompt_username, username_path
from .manifest import MANIFEST_NAME, read_package_info, write_version
from .models import Decision, VersionBump
from .publish import build_command, run_publish
from .registry import RegistryClient
from .report import render_bump, render_question, render_report
from .shell import step
from .validation import Confirm, assess, decide
from .vcs import working_tree_status

logger = logging.getLogger(__name__)


def ask(question: str) -> bool:
    """Interactive y/n confirmation; anything but yes declines."""
    return click.confirm(render_question(question), default=False)


def _persist_bump(manifest_path: Path) -> Callable[[VersionBump], None]:
    def hook(bump: VersionBump) -> None:
        click.echo()
        click.echo(render_bump(bump))
        write_version(manifest_path, bump.new)
        click.echo(click.style(f"Updated {manifest_path.name} with new version", fg="green"))

    return hook


def run_validate(
    passthrough: Sequence[str] = (),
    *,
    manifest_path: Path = Path(MANIFEST_NAME),
    confirm: Confirm = ask,
    prompt: Callable[[str], str] = click.prompt,
    client: RegistryClient | None = None,
    settings: Settings | None = None,
) -> Decision:
    """Execute the full validate-and-publish run.

    Args:
        passthrough: Arguments forwarded verbatim to `cargo publish`.
        manifest_path: Cargo.toml to validate (and rewrite on a bump).
        confirm: Answers each yes/no question.
        prompt: Asks for the crates.io username when none is cached.
        client: Registry client; one is built from settings when omitted.
        settings: Runtime settings; read from the environment when omitted.

    Returns:
        The accepted Decision, after cargo publish succeeded.
    """
    settings = settings or get_settings()

    # Phase 1: Gather
    step(f"Reading {manifest_path}")
    package = read_package_info(manifest_path)
    username = get_or_prompt_username(username_path(settings), prompt=prompt)

    step(f"Looking up {package.name} {package.version} on {settings.registry_url}")
    owns_client = client is None
    client = client or RegistryClient.from_settings(settings)
    try:
        lookup = client.check_crate_exists(package.name, package.version)
    finally:
        if owns_client:
            client.close()

    status = working_tree_status(settings.git_bin)

    # Phase 2: Report and confirm
    assessment = assess(
        package, username, lookup, status, expected_edition=settings.expected_edition
    )
    click.echo(render_report(assessment))
    click.echo()

    decision = decide(
        assessment,
        confirm,
        bump=_persist_bump(manifest_path),
        allow_dirty_flag=settings.allow_dirty_flag,
    )

    # Phase 3: Publish
    command = build_command(passthrough, decision.plan)
    logger.debug("Publish command: %s %s", settings.cargo_bin, " ".join(command))
    click.echo(click.style("Proceeding with cargo publish...", fg="green", bold=True))
    run_publish(command, settings.cargo_bin)
    return decision
