"""Exception hierarchy and HTTP error mapping for drivesh."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class DriveShError(Exception):
    """
    Base exception for drivesh.

    Attributes:
        details: Optional structured information (e.g., drive name, HTTP status).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


# ----------------------------
# Registry / session
# ----------------------------
class InvalidNameError(DriveShError):
    """Raised when a drive name is empty or contains ':' or whitespace."""


class DuplicateDriveError(DriveShError):
    """Raised when creating a drive whose name is already taken."""


class UnknownDriveError(DriveShError):
    """Raised when a drive name does not exist in the registry."""


class NoValidDriveError(DriveShError):
    """
    Raised by repair() when no drive has a usable provider.

    This is the only fatal error: persisted drive state must be discarded and
    first-time setup must run again.
    """


class InvalidStateError(DriveShError):
    """Raised when the session is used in an invalid state (e.g., not opened)."""


# ----------------------------
# Commands / paths / clips
# ----------------------------
class UnknownCommandError(DriveShError):
    """Raised when the first token of a line is not a known command."""


class InvalidArgumentError(DriveShError):
    """Raised when command arguments are missing or malformed."""


class InvalidPathError(DriveShError):
    """Raised when a path cannot be resolved (e.g., it embeds a drive token)."""


class UnknownClipError(DriveShError):
    """Raised when pasting a clip name that was never captured."""


class EmptyClipError(DriveShError):
    """Raised when pasting a clip that holds no files."""


# ----------------------------
# Provider (adapter-level)
# ----------------------------
class ProviderError(DriveShError):
    """Base for errors raised by a provider adapter."""


class NotFoundError(ProviderError):
    """Raised when a path/file does not exist on the provider (HTTP 404)."""


class IsAFolderError(ProviderError):
    """Raised when fetching a folder (folders are not fetchable)."""


class AuthError(ProviderError):
    """Raised when provider authentication/refresh fails (HTTP 401)."""


class AccessDeniedError(ProviderError):
    """Raised when access is denied (HTTP 403)."""


class ConflictError(ProviderError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class ApiError(ProviderError):
    """Raised for unclassified API errors (unknown 4xx, malformed responses)."""


class TransportError(ProviderError):
    """Raised when network/timeout/server-side issues prevent the request."""


class RateLimitError(TransportError):
    """Raised when rate-limited (HTTP 429)."""


def is_retryable(exc: BaseException) -> bool:
    """Return True if re-issuing the same command may succeed."""
    return isinstance(exc, TransportError)


def map_os_error(exc: OSError, path: str) -> ProviderError:
    """Map a local filesystem failure on path into the provider taxonomy."""
    if isinstance(exc, FileNotFoundError):
        return NotFoundError(f"No such file or folder: {path}", details={"path": path}, cause=exc)
    if isinstance(exc, PermissionError):
        return AccessDeniedError(f"Permission denied: {path}", details={"path": path}, cause=exc)
    return TransportError(f"I/O error on {path}: {exc}", details={"path": path}, cause=exc)


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to drivesh exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> DriveShError:
    """
    Map an HTTP error to a drivesh exception.

    Policy:
        - 401 -> AuthError
        - 403 -> AccessDeniedError
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - 5xx -> TransportError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        return AccessDeniedError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)
    if 500 <= info.status_code <= 599:
        return TransportError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
