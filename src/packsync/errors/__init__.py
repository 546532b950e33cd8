"""Public error exports for packsync."""

from __future__ import annotations

from .exceptions import (
    BackupError,
    CleanError,
    CommandTimeoutError,
    DependencyError,
    EmptyError,
    ExecutableNotFoundError,
    FetchError,
    GitCommandError,
    InitError,
    InstallationError,
    InvalidProfileError,
    LfsInitError,
    LfsPullError,
    NotFoundError,
    PackageManagerUnavailableError,
    PackSyncError,
    ProfileError,
    RemoteConfigError,
    ResetError,
    command_error,
)

__all__ = [
    "PackSyncError",
    "ProfileError",
    "NotFoundError",
    "EmptyError",
    "InvalidProfileError",
    "DependencyError",
    "PackageManagerUnavailableError",
    "InstallationError",
    "ExecutableNotFoundError",
    "GitCommandError",
    "InitError",
    "RemoteConfigError",
    "LfsInitError",
    "FetchError",
    "ResetError",
    "CleanError",
    "LfsPullError",
    "BackupError",
    "CommandTimeoutError",
    "command_error",
]
