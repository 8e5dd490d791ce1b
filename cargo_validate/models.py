"""Data models for cargo-validate.

These Pydantic models are the contracts passed between the manifest reader,
the registry client, the git probe and the validation engine. None of them
know anything about terminal colors; rendering lives in report.py.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Order in which missing optional fields are reported
OPTIONAL_FIELDS = ("license", "repository", "description")


class PackageInfo(BaseModel):
    """The [package] fields of Cargo.toml that the validation looks at.

    Attributes:
        name: Crate name.
        version: Semantic version string.
        edition: Rust edition, e.g. "2021".
        license: License expression, None when absent.
        description: Free-form description, None when absent.
        repository: Repository URL, None when absent.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    edition: str
    license: str | None = None
    description: str | None = None
    repository: str | None = None

    def missing_fields(self) -> list[str]:
        return [f for f in OPTIONAL_FIELDS if getattr(self, f) is None]

    def with_version(self, version: str) -> PackageInfo:
        """Return a copy carrying a new version (after a bump)."""
        return self.model_copy(update={"version": version})


class RegistryLookupResult(BaseModel):
    """What the registry knows about a crate name and version.

    Attributes:
        crate_exists: The crate name is taken on the registry.
        version_exists: The queried version has already been published.
        owners: Logins of the users owning the crate.
        versions: Every published version number.
    """

    model_config = ConfigDict(frozen=True)

    crate_exists: bool = False
    version_exists: bool = False
    owners: frozenset[str] = frozenset()
    versions: tuple[str, ...] = ()

    def is_owned_by(self, username: str) -> bool:
        return username in self.owners

    def name_conflict(self, username: str) -> bool:
        """True when the name is taken by someone other than `username`.

        A crate owned by the current user is an update, not a conflict.
        """
        return self.crate_exists and not self.is_owned_by(username)

    def has_version(self, version: str) -> bool:
        return version in self.versions


class StatusEntry(BaseModel):
    """One line of `git status --porcelain` output."""

    model_config = ConfigDict(frozen=True)

    status_code: str = Field(min_length=2, max_length=2)
    path: str


class PublishPlan(BaseModel):
    """Extra arguments appended to the `cargo publish` invocation."""

    args: list[str] = Field(default_factory=list)

    def add_flag(self, flag: str) -> None:
        if flag not in self.args:
            self.args.append(flag)


class VersionBump(BaseModel):
    """Records a version change for a package.

    Attributes:
        old: The version before bumping.
        new: The version after bumping.
    """

    old: str
    new: str


class Assessment(BaseModel):
    """Plain structured result of checking a package before publishing."""

    model_config = ConfigDict(frozen=True)

    package: PackageInfo
    username: str
    lookup: RegistryLookupResult
    status: tuple[StatusEntry, ...] = ()
    expected_edition: str
    name_conflict: bool
    version_conflict: bool
    edition_ok: bool
    missing_fields: list[str] = Field(default_factory=list)

    @property
    def dirty(self) -> bool:
        return bool(self.status)


class ConfirmationKind(str, Enum):
    BUMP_VERSION = "bump_version"
    PUBLISH_DIRTY = "publish_dirty"
    PUBLISH = "publish"


class Decision(BaseModel):
    """Outcome of a validation run in which every confirmation was accepted."""

    package: PackageInfo
    plan: PublishPlan = Field(default_factory=PublishPlan)
    bump: VersionBump | None = None
    confirmed: list[ConfirmationKind] = Field(default_factory=list)
