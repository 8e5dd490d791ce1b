"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from cargo_validate.config import Settings
from cargo_validate.models import PackageInfo

CARGO_TOML = """\
# Example crate
[package]
name = "foo"
version = "1.2.3"
edition = "2021"
license = "MIT OR Apache-2.0"
description = "Does foo things"
repository = "https://github.com/example/foo"

[dependencies]
serde = { version = "1.0", features = ["derive"] }

[dev-dependencies]
# pinned for reproducible snapshots
insta = "=1.34.0"
"""


@pytest.fixture
def tmp_manifest(tmp_path: Path) -> Path:
    """Create a temporary Cargo.toml file."""
    manifest = tmp_path / "Cargo.toml"
    manifest.write_text(CARGO_TOML)
    return manifest


@pytest.fixture
def package() -> PackageInfo:
    return PackageInfo(
        name="foo",
        version="0.1.0",
        edition="2021",
        license="MIT",
        description="Does foo things",
        repository="https://github.com/example/foo",
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        registry_url="https://registry.test",
        username_file=str(tmp_path / "home" / ".cargo" / "username"),
    )


def make_response(status_code: int, body: object = None) -> MagicMock:
    """Fake requests.Response with a status code and JSON body."""
    response = MagicMock()
    response.status_code = status_code
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


def make_session(*responses: MagicMock) -> MagicMock:
    """Fake requests.Session returning `responses` in order from get()."""
    session = MagicMock()
    session.headers = {}
    session.get.side_effect = list(responses)
    return session
