"""crates.io registry client.

Single-shot lookups used once per validation run: crate metadata (to learn
whether the name and version are taken) and the crate's owner list. There
are no retries and no backoff; every failure goes straight back to the
caller.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from .config import Settings, get_settings
from .errors import (
    RegistryDataError,
    RegistryError,
    RegistryPermissionDenied,
    RegistryRateLimited,
    RegistryUnexpectedStatus,
)
from .models import RegistryLookupResult

logger = logging.getLogger(__name__)


class RegistryClient:
    """Minimal client for the crates.io HTTP API."""

    def __init__(
        self,
        base_url: str = "https://crates.io",
        user_agent: str = "cargo-validate",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> RegistryClient:
        settings = settings or get_settings()
        return cls(
            base_url=settings.registry_url,
            user_agent=settings.user_agent,
            timeout=settings.request_timeout,
        )

    def __enter__(self) -> RegistryClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def crate_url(self, name: str) -> str:
        return f"{self.base_url}/api/v1/crates/{name}"

    def owners_url(self, name: str) -> str:
        return f"{self.crate_url(name)}/owner_user"

    def _get(self, url: str) -> requests.Response:
        logger.debug("GET %s", url)
        try:
            return self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RegistryError(
                f"Failed to send request to crates.io API: {exc}"
            ) from exc

    def check_crate_exists(self, name: str, version: str) -> RegistryLookupResult:
        """Look up a crate name and version on the registry.

        Returns:
            RegistryLookupResult. For an unknown crate this is
            (crate_exists=False, version_exists=False, owners={}) and the
            owners endpoint is not queried.

        Raises:
            RegistryPermissionDenied: On HTTP 403.
            RegistryRateLimited: On HTTP 429.
            RegistryUnexpectedStatus: On any other non-200/404 status.
            RegistryError: If the owners lookup fails or the request cannot
                be sent.
            RegistryDataError: If a response body is not the expected JSON.
        """
        response = self._get(self.crate_url(name))
        status = response.status_code

        if status == 404:
            logger.debug("Crate %s not found on registry", name)
            return RegistryLookupResult()
        if status == 403:
            raise RegistryPermissionDenied(
                "Access forbidden. This could be due to IP-based rate limiting "
                "or other restrictions by crates.io."
            )
        if status == 429:
            raise RegistryRateLimited(
                "Rate limit exceeded for crates.io API. Please try again later."
            )
        if status != 200:
            raise RegistryUnexpectedStatus(
                f"Unexpected response from crates.io API. Status code: {status}",
                status_code=status,
            )

        versions = _published_versions(_json_body(response))
        owners = self.fetch_owners(name)
        return RegistryLookupResult(
            crate_exists=True,
            version_exists=version in versions,
            owners=frozenset(owners),
            versions=tuple(versions),
        )

    def fetch_owners(self, name: str) -> list[str]:
        """Return the logins of the users owning `name`."""
        response = self._get(self.owners_url(name))
        if not 200 <= response.status_code < 300:
            raise RegistryError(
                f"Failed to get crate owners. Status: {response.status_code}"
            )
        users = _json_body(response).get("users")
        if not isinstance(users, list):
            raise RegistryDataError(
                "Invalid API response: 'users' field is missing or not an array"
            )
        return [
            user["login"]
            for user in users
            if isinstance(user, dict) and isinstance(user.get("login"), str)
        ]


def _json_body(response: requests.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError as exc:
        raise RegistryDataError(f"Failed to parse API response: {exc}") from exc
    if not isinstance(body, dict):
        raise RegistryDataError("Failed to parse API response: expected a JSON object")
    return body


def _published_versions(body: dict[str, Any]) -> list[str]:
    versions = body.get("versions")
    if not isinstance(versions, list):
        raise RegistryDataError(
            "Invalid API response: 'versions' field is missing or not an array"
        )
    return [
        v["num"]
        for v in versions
        if isinstance(v, dict) and isinstance(v.get("num"), str)
    ]


def check_crate_exists(
    name: str, version: str, settings: Settings | None = None
) -> RegistryLookupResult:
    """Convenience wrapper: one lookup with a short-lived client."""
    with RegistryClient.from_settings(settings) as client:
        return client.check_crate_exists(name, version)
