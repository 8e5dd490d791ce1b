"""Cargo.toml reading and writing utilities.

Uses tomlkit to preserve formatting and comments when rewriting the version,
so that a patch bump shows up as a one-line diff.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .errors import ErrorKind, ManifestError
from .models import OPTIONAL_FIELDS, PackageInfo

logger = logging.getLogger(__name__)

MANIFEST_NAME = "Cargo.toml"
REQUIRED_FIELDS = ("name", "version", "edition")


def load_manifest(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a Cargo.toml file.

    Returns a TOMLDocument that preserves formatting when modified and saved.

    Raises:
        ManifestError: If the file is missing or is not valid TOML.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ManifestError(
            f"No {path.name} found at {path}", kind=ErrorKind.NOT_FOUND
        ) from exc
    except UnicodeDecodeError as exc:
        raise ManifestError(f"{path.name} is not valid UTF-8: {exc}") from exc
    try:
        return tomlkit.parse(text)
    except TOMLKitError as exc:
        raise ManifestError(f"Failed to parse {path.name}: {exc}") from exc


def save_manifest(path: Path, doc: tomlkit.TOMLDocument) -> None:
    """Save a TOMLDocument back to disk, preserving original formatting."""
    path.write_text(tomlkit.dumps(doc), encoding="utf-8")


def get_package_table(doc: tomlkit.TOMLDocument) -> dict[str, Any]:
    """Return the [package] table.

    Raises:
        ManifestError: If there is no [package] section.
    """
    package = doc.get("package")
    if not isinstance(package, dict):
        raise ManifestError("Missing [package] section")
    return package


def _string_field(package: dict[str, Any], key: str) -> str | None:
    # `version.workspace = true` and friends are tables, not strings
    value = package.get(key)
    return str(value) if isinstance(value, str) else None


def package_info_from_doc(doc: tomlkit.TOMLDocument) -> PackageInfo:
    """Extract PackageInfo from a parsed Cargo.toml.

    name, version and edition are mandatory; license, repository and
    description are optional and recorded as None when absent.
    """
    package = get_package_table(doc)
    required = {key: _string_field(package, key) for key in REQUIRED_FIELDS}
    missing = [key for key, value in required.items() if value is None]
    if missing:
        raise ManifestError(
            "Publish cancelled: name, version, or edition do not exist in "
            f"{MANIFEST_NAME} (missing: {', '.join(missing)})"
        )
    optional = {key: _string_field(package, key) for key in OPTIONAL_FIELDS}
    return PackageInfo(**required, **optional)


def read_package_info(path: Path = Path(MANIFEST_NAME)) -> PackageInfo:
    """Read the package metadata from Cargo.toml (current directory by default)."""
    info = package_info_from_doc(load_manifest(path))
    logger.debug("Read %s %s from %s", info.name, info.version, path)
    return info


def write_version(path: Path, new_version: str) -> None:
    """Rewrite [package].version in place, leaving everything else untouched."""
    doc = load_manifest(path)
    package = get_package_table(doc)
    package["version"] = new_version
    save_manifest(path, doc)
    logger.debug("Wrote version %s to %s", new_version, path)
