"""Pre-publish validation: turn package, registry and git state into a decision.

The engine is split in two:

- assess() is pure. It combines the manifest data, the registry lookup and
  the working tree status into an Assessment of plain booleans and lists.
- decide() walks the risk conditions in a fixed order, asking for each
  confirmation through an injected callable, and builds the PublishPlan.

Order of checks in decide():
1. Name taken by someone else: refused outright, nothing is asked.
2. Version already published: offer a patch bump. Accepting rewrites the
   manifest through the `bump` callback and validation continues with the
   new version; declining aborts. If the bumped version is published too,
   the run stops before the manifest is touched.
3. Dirty working tree: ask to publish anyway and add --allow-dirty. A clean
   tree gets a plain "publish?" question instead.

Edition mismatch and missing metadata only produce warnings.

The first declined confirmation aborts the run. A bump that was already
written to disk is not rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Callable

from .errors import NameConflictError, PublishCancelled, VersionConflictError
from .models import (
    Assessment,
    ConfirmationKind,
    Decision,
    PackageInfo,
    PublishPlan,
    RegistryLookupResult,
    StatusEntry,
    VersionBump,
)
from .versions import bump_patch

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]
BumpHook = Callable[[VersionBump], None]

DEFAULT_EDITION = "2021"
ALLOW_DIRTY_FLAG = "--allow-dirty"

QUESTIONS = {
    ConfirmationKind.BUMP_VERSION: "Version already exists. Do you want to bump the patch version?",
    ConfirmationKind.PUBLISH_DIRTY: "Are you sure you want to publish with dirty directory?",
    ConfirmationKind.PUBLISH: "Are you sure you want to publish?",
}


def assess(
    package: PackageInfo,
    username: str,
    lookup: RegistryLookupResult,
    status: Sequence[StatusEntry] = (),
    expected_edition: str = DEFAULT_EDITION,
) -> Assessment:
    """Classify the risk conditions for publishing `package`."""
    return Assessment(
        package=package,
        username=username,
        lookup=lookup,
        status=tuple(status),
        expected_edition=expected_edition,
        name_conflict=lookup.name_conflict(username),
        version_conflict=lookup.version_exists,
        edition_ok=package.edition == expected_edition,
        missing_fields=package.missing_fields(),
    )


def collect_warnings(assessment: Assessment) -> list[str]:
    """Non-blocking findings, one line each."""
    warnings: list[str] = []
    if not assessment.edition_ok:
        warnings.append(
            f"Edition {assessment.package.edition} "
            f"(did you mean {assessment.expected_edition}?)"
        )
    if assessment.missing_fields:
        warnings.append(
            "Package is missing: " + ", ".join(assessment.missing_fields)
        )
    return warnings


def _ask(confirm: Confirm, kind: ConfirmationKind, decision: Decision) -> None:
    if not confirm(QUESTIONS[kind]):
        logger.debug("Declined %s", kind.value)
        raise PublishCancelled("Publish cancelled.")
    decision.confirmed.append(kind)


def decide(
    assessment: Assessment,
    confirm: Confirm,
    bump: BumpHook | None = None,
    allow_dirty_flag: str = ALLOW_DIRTY_FLAG,
) -> Decision:
    """Ask the required confirmations in order and return the publish decision.

    Args:
        assessment: Result of assess().
        confirm: Called with each question; must return True to continue.
        bump: Called with the VersionBump once a patch bump is accepted,
            before anything else is asked. The pipeline uses it to rewrite
            Cargo.toml.
        allow_dirty_flag: Flag appended to the plan for a dirty tree.

    Raises:
        NameConflictError: The crate name belongs to someone else.
        PublishCancelled: A confirmation was declined.
        VersionConflictError: The bumped version is also already published.
    """
    if assessment.name_conflict:
        raise NameConflictError("Publish cancelled: name already exists")

    decision = Decision(package=assessment.package, plan=PublishPlan())

    if assessment.version_conflict:
        _ask(confirm, ConfirmationKind.BUMP_VERSION, decision)
        old = assessment.package.version
        decision.bump = VersionBump(old=old, new=bump_patch(old))
        if assessment.lookup.has_version(decision.bump.new):
            raise VersionConflictError(
                f"Publish cancelled: version {decision.bump.new} is also "
                "already published"
            )
        logger.debug("Bumping %s to %s", old, decision.bump.new)
        if bump is not None:
            bump(decision.bump)
        decision.package = assessment.package.with_version(decision.bump.new)

    if assessment.dirty:
        _ask(confirm, ConfirmationKind.PUBLISH_DIRTY, decision)
        decision.plan.add_flag(allow_dirty_flag)
    else:
        _ask(confirm, ConfirmationKind.PUBLISH, decision)

    return decision
