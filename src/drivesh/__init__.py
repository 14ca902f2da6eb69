"""drivesh public API."""

from __future__ import annotations

from drivesh.config import Settings
from drivesh.errors import (
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
    RateLimitError,
    TransportError,
    UnknownClipError,
    UnknownCommandError,
    UnknownDriveError,
    is_retryable,
    map_http_error,
)
from drivesh.models import Clip, Drive, FileEntry, PasteResult, TransferResult
from drivesh.providers import PROVIDERS, ProviderAdapter, create_adapter
from drivesh.session import Session
from drivesh.shell import CommandDispatcher, CommandResult, ShellApp
from drivesh.state import ClipStore, DriveRegistry, StateStore
from drivesh.transfer import copy_file, paste
from drivesh.traversal import search, traverse
from drivesh.util.paths import resolve

__version__ = "0.1.0"

__all__ = [
    # High-level
    "Session",
    "Settings",
    "ShellApp",
    "CommandDispatcher",
    "CommandResult",
    # State
    "DriveRegistry",
    "ClipStore",
    "StateStore",
    # Providers
    "ProviderAdapter",
    "PROVIDERS",
    "create_adapter",
    # Operations
    "resolve",
    "traverse",
    "search",
    "copy_file",
    "paste",
    # Models
    "FileEntry",
    "Drive",
    "Clip",
    "TransferResult",
    "PasteResult",
    # Errors
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
    "is_retryable",
]
