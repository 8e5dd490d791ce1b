"""Hand-off to `cargo publish`."""

from __future__ import annotations

from collections.abc import Sequence

from .errors import PublishFailedError
from .models import PublishPlan
from .shell import run


def build_command(passthrough: Sequence[str], plan: PublishPlan) -> list[str]:
    """Arguments for cargo: publish, the user's args, then derived flags.

    Derived flags the user already passed are not repeated; cargo rejects
    a flag given twice.
    """
    extra = [arg for arg in plan.args if arg not in passthrough]
    return ["publish", *passthrough, *extra]


def run_publish(args: Sequence[str], cargo_bin: str = "cargo") -> None:
    """Run cargo with `args`, streaming its output to the terminal.

    Raises:
        PublishFailedError: If cargo exits non-zero.
        ExecutionError: If cargo cannot be started.
    """
    result = run(cargo_bin, *args)
    if result.returncode != 0:
        raise PublishFailedError(result.returncode)
