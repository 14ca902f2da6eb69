"""Public error exports for drivesh."""

from __future__ import annotations

from .exceptions import (
    AccessDeniedError,
    ApiError,
    AuthError,
    ConflictError,
    DriveShError,
    DuplicateDriveError,
    EmptyClipError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidNameError,
    InvalidPathError,
    InvalidStateError,
    IsAFolderError,
    NotFoundError,
    NoValidDriveError,
    ProviderError,
    RateLimitError,
    TransportError,
    UnknownClipError,
    UnknownCommandError,
    UnknownDriveError,
    is_retryable,
    map_http_error,
    map_os_error,
)

__all__ = [
    "DriveShError",
    "InvalidNameError",
    "DuplicateDriveError",
    "UnknownDriveError",
    "NoValidDriveError",
    "InvalidStateError",
    "UnknownCommandError",
    "InvalidArgumentError",
    "InvalidPathError",
    "UnknownClipError",
    "EmptyClipError",
    "ProviderError",
    "NotFoundError",
    "IsAFolderError",
    "AuthError",
    "AccessDeniedError",
    "ConflictError",
    "ApiError",
    "TransportError",
    "RateLimitError",
    "HttpErrorInfo",
    "map_http_error",
    "map_os_error",
    "is_retryable",
]
