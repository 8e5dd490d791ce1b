"""Settings for cargo-validate.

Values can be overridden through CARGO_VALIDATE_* environment variables,
e.g. CARGO_VALIDATE_REGISTRY_URL=http://localhost:8888 to point the registry
lookups at a local mirror.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings."""

    model_config = SettingsConfigDict(env_prefix="CARGO_VALIDATE_", extra="ignore")

    registry_url: str = "https://crates.io"
    user_agent: str = "cargo-validate"
    request_timeout: float = 10.0

    # Editions other than this one get a "did you mean" warning in the report
    expected_edition: str = "2021"

    # Relative to the user's home directory
    username_file: str = ".cargo/username"

    cargo_bin: str = "cargo"
    git_bin: str = "git"
    allow_dirty_flag: str = "--allow-dirty"


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
