"""packsync public API."""

from __future__ import annotations

__version__ = "0.1.0"

from packsync.backup import BackupExporter
from packsync.controller import CommandRunner, GitController
from packsync.deps import DependencyEnsurer
from packsync.errors import (
    BackupError,
    CleanError,
    CommandTimeoutError,
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
    RemoteConfigError,
    ResetError,
)
from packsync.local import ProfileLocator
from packsync.manager import PackSyncManager
from packsync.models import (
    CommandResult,
    Profile,
    SyncConfig,
    SyncMode,
    SyncResult,
    UntrackedFilesPolicy,
)
from packsync.plan import ChangeEntry, ChangeKind, ChangeSet
from packsync.util import ConfirmationPrompt, is_affirmative

__all__ = [
    "__version__",
    # High-level
    "PackSyncManager",
    "ProfileLocator",
    "DependencyEnsurer",
    "BackupExporter",
    "GitController",
    "CommandRunner",
    "ConfirmationPrompt",
    "is_affirmative",
    # Models
    "Profile",
    "SyncConfig",
    "SyncMode",
    "UntrackedFilesPolicy",
    "CommandResult",
    "SyncResult",
    "ChangeKind",
    "ChangeEntry",
    "ChangeSet",
    # Errors
    "PackSyncError",
    "NotFoundError",
    "EmptyError",
    "InvalidProfileError",
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
]
