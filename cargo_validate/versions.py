"""Version parsing and bumping utilities.

Cargo requires full semantic versions (major.minor.patch with optional
pre-release and build metadata), so unlike looser tooling there is no
padding of incomplete version strings here.
"""

from __future__ import annotations

import semver

from .errors import ManifestError


def parse_version(version_str: str) -> semver.Version:
    """Parse a Cargo version string into a semver.Version object.

    Raises:
        ManifestError: If the string is not a valid semantic version.
    """
    try:
        return semver.Version.parse(version_str.strip())
    except (ValueError, TypeError) as exc:
        raise ManifestError(f"Invalid version {version_str!r}: {exc}") from exc


def bump_patch(version_str: str) -> str:
    """Increment the patch component and return the new version string.

    Only the patch number changes; pre-release and build metadata are kept.

    Examples:
        "1.2.3" → "1.2.4"
        "0.1.9" → "0.1.10"
        "1.0.0-beta.1" → "1.0.1-beta.1"
    """
    v = parse_version(version_str)
    return str(v.replace(patch=v.patch + 1))
