"""Error types for cargo-validate.

Every failure in the pipeline is terminal for the current run. Errors carry
an ErrorKind so callers (and tests) can tell apart a registry rate limit from
a declined confirmation without matching on message text, plus the process
exit code the CLI should use.
"""

from __future__ import annotations

from enum import Enum
from typing import IO, Any

import click


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_DATA = "invalid_data"
    PERMISSION_DENIED = "permission_denied"
    RATE_LIMITED = "rate_limited"
    UNEXPECTED_STATUS = "unexpected_status"
    INTERRUPTED = "interrupted"
    ALREADY_EXISTS = "already_exists"
    EXECUTION_FAILED = "execution_failed"


class ValidateError(click.ClickException):
    """Base class for all errors raised by cargo-validate.

    Raised out of a click command, click prints it with show() and exits
    with exit_code.
    """

    kind: ErrorKind = ErrorKind.EXECUTION_FAILED
    exit_code: int = 1

    def __init__(self, message: str, *, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind

    def show(self, file: IO[Any] | None = None) -> None:
        click.echo(click.style(self.format_message(), fg="red", bold=True), file=file, err=True)


class ManifestError(ValidateError):
    kind = ErrorKind.INVALID_DATA


class IdentityError(ValidateError):
    kind = ErrorKind.NOT_FOUND


class RegistryError(ValidateError):
    """Registry request failed at the transport or HTTP level."""

    kind = ErrorKind.EXECUTION_FAILED


class RegistryPermissionDenied(RegistryError):
    kind = ErrorKind.PERMISSION_DENIED


class RegistryRateLimited(RegistryError):
    kind = ErrorKind.RATE_LIMITED


class RegistryUnexpectedStatus(RegistryError):
    kind = ErrorKind.UNEXPECTED_STATUS

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class RegistryDataError(RegistryError):
    """Registry answered, but the JSON body did not have the expected shape."""

    kind = ErrorKind.INVALID_DATA


class StatusParseError(ValidateError):
    kind = ErrorKind.INVALID_DATA


class NameConflictError(ValidateError):
    kind = ErrorKind.ALREADY_EXISTS


class VersionConflictError(ValidateError):
    kind = ErrorKind.ALREADY_EXISTS


class PublishCancelled(ValidateError):
    kind = ErrorKind.INTERRUPTED


class ExecutionError(ValidateError):
    kind = ErrorKind.EXECUTION_FAILED


class PublishFailedError(ExecutionError):
    """`cargo publish` ran and exited non-zero."""

    def __init__(self, returncode: int) -> None:
        super().__init__(f"Cargo publish failed (exit code {returncode})")
        self.returncode = returncode
        self.exit_code = returncode or 1
