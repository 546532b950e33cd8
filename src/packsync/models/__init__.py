"""Public model exports for packsync."""

from __future__ import annotations

from .config import SyncConfig, SyncMode, UntrackedFilesPolicy, default_profiles_root
from .profile import Profile
from .results import CommandResult, SyncResult, SyncStatus

__all__ = [
    "Profile",
    "SyncConfig",
    "SyncMode",
    "UntrackedFilesPolicy",
    "default_profiles_root",
    "CommandResult",
    "SyncResult",
    "SyncStatus",
]
