"""Terminal rendering for validation results.

This is the only module that knows about colors. Everything it renders
comes from plain models, so the validation engine can be tested without
a terminal.
"""

from __future__ import annotations

from enum import Enum

import click

from .models import Assessment, StatusEntry, VersionBump
from .validation import collect_warnings


class Symbol(str, Enum):
    VALID = "✔"
    INVALID = "✖"

    def styled(self) -> str:
        return click.style(self.value, fg="green" if self is Symbol.VALID else "red")


def _label(text: str) -> str:
    return click.style(text, fg="bright_magenta")


def _heading(text: str) -> str:
    return click.style(text, fg="magenta", bold=True)


def _checked(value: str, ok: bool) -> str:
    return f"{value} {(Symbol.VALID if ok else Symbol.INVALID).styled()}"


def render_package(assessment: Assessment) -> list[str]:
    pkg = assessment.package
    # A different edition is only a warning, so no ✖ here
    edition = _checked(pkg.edition, True) if assessment.edition_ok else pkg.edition

    lines = [
        _heading("Package Information:"),
        f" {_label('Name')}: {_checked(pkg.name, not assessment.name_conflict)}",
        f" {_label('Version')}: {_checked(pkg.version, not assessment.version_conflict)}",
        f" {_label('Edition')}: {edition}",
    ]
    if pkg.license is not None:
        lines.append(f" {_label('License')}: {pkg.license}")

    lines.append("")
    lines.append(_heading(" Metadata:"))
    if pkg.repository is not None:
        lines.append(f"  {_label('Repository')}: {pkg.repository}")
    if pkg.description is not None:
        lines.append(f"  {_label('Description')}: {pkg.description}")
    return lines


def render_status(status: tuple[StatusEntry, ...]) -> list[str]:
    if not status:
        return [click.style("No uncommitted git changes", fg="bright_green", bold=True)]
    lines = [click.style("Uncommitted git changes:", fg="red", bold=True)]
    for entry in status:
        code = click.style(entry.status_code.strip(), fg="bright_red")
        lines.append(f" {code} {entry.path.strip()}")
    return lines


def render_report(assessment: Assessment) -> str:
    """Full pre-publish report shown before any confirmation."""
    lines = render_package(assessment)
    warnings = render_warnings(assessment)
    if warnings:
        lines.append("")
        lines.extend(warnings)
    lines.append("")
    lines.extend(render_status(assessment.status))
    return "\n".join(lines)


def render_warnings(assessment: Assessment) -> list[str]:
    return [click.style(w, fg="bright_yellow") for w in collect_warnings(assessment)]


def render_bump(bump: VersionBump) -> str:
    return (
        f"{click.style('Bumping version from', fg='bright_blue')} "
        f"{click.style(bump.old, fg='bright_yellow')} "
        f"{click.style('to', fg='bright_blue')} "
        f"{click.style(bump.new, fg='bright_cyan')}"
    )


def render_question(question: str) -> str:
    return click.style(question, fg="bright_blue", bold=True)
