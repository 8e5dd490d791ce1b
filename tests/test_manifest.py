"""Tests for cargo_validate.manifest."""

from __future__ import annotations

from pathlib import Path

import pytest
import tomlkit

from cargo_validate.errors import ErrorKind, ManifestError
from cargo_validate.manifest import (
    load_manifest,
    package_info_from_doc,
    read_package_info,
    write_version,
)

from conftest import CARGO_TOML


class TestReadPackageInfo:
    def test_reads_all_fields(self, tmp_manifest: Path) -> None:
        info = read_package_info(tmp_manifest)
        assert info.name == "foo"
        assert info.version == "1.2.3"
        assert info.edition == "2021"
        assert info.license == "MIT OR Apache-2.0"
        assert info.description == "Does foo things"
        assert info.repository == "https://github.com/example/foo"
        assert info.missing_fields() == []

    def test_defaults_to_current_directory(
        self, tmp_manifest: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_manifest.parent)
        assert read_package_info().name == "foo"

    def test_optional_fields_absent(self) -> None:
        doc = tomlkit.parse(
            '[package]\nname = "foo"\nversion = "0.1.0"\nedition = "2018"\n'
        )
        info = package_info_from_doc(doc)
        assert info.license is None
        assert info.description is None
        assert info.repository is None
        assert info.missing_fields() == ["license", "repository", "description"]

    def test_missing_package_section(self) -> None:
        doc = tomlkit.parse('[workspace]\nmembers = ["a"]\n')
        with pytest.raises(ManifestError, match=r"Missing \[package\] section"):
            package_info_from_doc(doc)

    def test_missing_required_fields(self) -> None:
        doc = tomlkit.parse('[package]\nname = "foo"\n')
        with pytest.raises(ManifestError) as excinfo:
            package_info_from_doc(doc)
        assert excinfo.value.kind is ErrorKind.INVALID_DATA
        assert "missing: version, edition" in str(excinfo.value)

    def test_workspace_inherited_version_is_not_a_string(self) -> None:
        doc = tomlkit.parse(
            '[package]\nname = "foo"\nversion.workspace = true\nedition = "2021"\n'
        )
        with pytest.raises(ManifestError, match="missing: version"):
            package_info_from_doc(doc)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestError) as excinfo:
            read_package_info(tmp_path / "Cargo.toml")
        assert excinfo.value.kind is ErrorKind.NOT_FOUND

    def test_invalid_toml(self, tmp_path: Path) -> None:
        manifest = tmp_path / "Cargo.toml"
        manifest.write_text("[package\nname = ")
        with pytest.raises(ManifestError, match="Failed to parse"):
            load_manifest(manifest)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        manifest = tmp_path / "Cargo.toml"
        manifest.write_bytes(
            b'[package]\nname = "foo"\nversion = "0.1.0"\nedition = "2021"\n'
            b'description = "caf\xe9"\n'
        )
        with pytest.raises(ManifestError, match="not valid UTF-8") as excinfo:
            read_package_info(manifest)
        assert excinfo.value.kind is ErrorKind.INVALID_DATA


class TestWriteVersion:
    def test_rewrites_only_the_version(self, tmp_manifest: Path) -> None:
        write_version(tmp_manifest, "1.2.4")

        expected = CARGO_TOML.replace('version = "1.2.3"', 'version = "1.2.4"')
        assert tmp_manifest.read_text() == expected

    def test_round_trip(self, tmp_manifest: Path) -> None:
        write_version(tmp_manifest, "1.2.4")

        info = read_package_info(tmp_manifest)
        assert info.version == "1.2.4"
        assert info.name == "foo"
        doc = load_manifest(tmp_manifest)
        assert doc["dependencies"]["serde"]["version"] == "1.0"

    def test_missing_package_section(self, tmp_path: Path) -> None:
        manifest = tmp_path / "Cargo.toml"
        manifest.write_text("[workspace]\n")
        with pytest.raises(ManifestError):
            write_version(manifest, "1.0.0")

    def test_keeps_non_ascii_text_as_utf8(self, tmp_path: Path) -> None:
        manifest = tmp_path / "Cargo.toml"
        original = (
            '[package]\nname = "foo"\nversion = "0.1.0"\nedition = "2021"\n'
            'description = "Café ☕ helpers"\n'
        )
        manifest.write_bytes(original.encode("utf-8"))

        write_version(manifest, "0.1.1")

        expected = original.replace('"0.1.0"', '"0.1.1"')
        assert manifest.read_bytes() == expected.encode("utf-8")
        assert read_package_info(manifest).description == "Café ☕ helpers"
