"""CLI entry point for cargo-validate.

Installed as `cargo-validate`, which cargo picks up as the `cargo validate`
subcommand (cargo runs `cargo-validate validate ARGS...`).
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import click

from .logs import configure_logging
from .manifest import MANIFEST_NAME
from .pipeline import ask, run_validate


def manifest_path_from_args(args: Sequence[str]) -> Path:
    """Honor a --manifest-path meant for cargo publish when reading Cargo.toml."""
    for i, arg in enumerate(args):
        if arg == "--manifest-path" and i + 1 < len(args):
            return Path(args[i + 1])
        if arg.startswith("--manifest-path="):
            return Path(arg.split("=", 1)[1])
    return Path(MANIFEST_NAME)


@click.group(invoke_without_command=True)
@click.version_option(package_name="cargo-validate")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Cargo publish with confirmation."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command(
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False}
)
@click.option("--yes", "assume_yes", is_flag=True, help="Answer yes to every confirmation.")
@click.option("--debug", is_flag=True, help="Log requests and commands to stderr.")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def validate(assume_yes: bool, debug: bool, args: tuple[str, ...]) -> None:
    """Check the package, then run cargo publish with ARGS."""
    configure_logging(debug)
    passthrough = list(args)

    run_validate(
        passthrough,
        manifest_path=manifest_path_from_args(passthrough),
        confirm=(lambda question: True) if assume_yes else ask,
    )
