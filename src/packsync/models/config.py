"""Immutable run configuration for packsync."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

DEFAULT_REMOTE_URL = "https://github.com/modpack-distribution/modpack.git"
DEFAULT_BRANCH = "main"
DEFAULT_REMOTE_NAME = "origin"
DEFAULT_MARKER_DIR = "mods"
DEFAULT_BACKUPS_DIR_NAME = "_backups"
DEFAULT_PACKAGE_MANAGER = "winget"

# executable name -> package manager id
DEFAULT_DEPENDENCIES: tuple[tuple[str, str], ...] = (
    ("git", "Git.Git"),
    ("git-lfs", "GitHub.GitLFS"),
)


class UntrackedFilesPolicy(str, Enum):
    """What happens to files the repository does not track."""

    PRESERVE = "preserve"
    PURGE = "purge"


class SyncMode(str, Enum):
    """Named operating modes (presets over SyncConfig)."""

    PRESERVE = "preserve"
    PURGE = "purge"


def default_profiles_root(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    Return the launcher's per-user profiles directory.

    Uses %APPDATA% when present, otherwise the home directory.
    """
    env = os.environ if env is None else env
    override = env.get("PACKSYNC_PROFILES_ROOT", "").strip()
    if override:
        return Path(override)
    appdata = env.get("APPDATA", "").strip()
    base = Path(appdata) if appdata else Path.home()
    return base / "ModrinthApp" / "profiles"


@dataclass(slots=True, frozen=True)
class SyncConfig:
    """
    Configuration value built once at startup and passed into every stage.

    The sync target (remote_url, branch) is fixed for a run.
    """

    remote_url: str
    profiles_root: Path
    branch: str = DEFAULT_BRANCH
    remote_name: str = DEFAULT_REMOTE_NAME
    marker_dir: str = DEFAULT_MARKER_DIR
    backups_dir_name: str = DEFAULT_BACKUPS_DIR_NAME

    untracked_policy: UntrackedFilesPolicy = UntrackedFilesPolicy.PURGE
    backup_enabled: bool = False
    require_confirmation: bool = True
    use_dialog: bool = True

    # None means "wait forever" for every external command.
    command_timeout: Optional[float] = None

    dependencies: tuple[tuple[str, str], ...] = DEFAULT_DEPENDENCIES
    package_manager: str = DEFAULT_PACKAGE_MANAGER

    def __post_init__(self) -> None:
        if not self.remote_url.strip():
            raise ValueError("remote_url must be a non-empty string")
        if not self.branch.strip():
            raise ValueError("branch must be a non-empty string")
        if self.command_timeout is not None and self.command_timeout <= 0:
            raise ValueError("command_timeout must be positive when set")

    @property
    def remote_ref(self) -> str:
        """Remote-tracking ref of the sync target, e.g. origin/main."""
        return f"{self.remote_name}/{self.branch}"

    @classmethod
    def for_mode(
        cls,
        mode: SyncMode,
        *,
        env: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> SyncConfig:
        """
        Build the preset for a named mode.

        PRESERVE keeps untracked files, offers a backup and applies without
        a confirmation prompt. PURGE removes untracked files after the
        previewed change set has been confirmed.
        """
        env = os.environ if env is None else env
        base = cls(
            remote_url=env.get("PACKSYNC_REMOTE_URL", "").strip() or DEFAULT_REMOTE_URL,
            branch=env.get("PACKSYNC_BRANCH", "").strip() or DEFAULT_BRANCH,
            profiles_root=default_profiles_root(env),
        )
        if mode is SyncMode.PRESERVE:
            base = replace(
                base,
                untracked_policy=UntrackedFilesPolicy.PRESERVE,
                backup_enabled=True,
                require_confirmation=False,
            )
        else:
            base = replace(
                base,
                untracked_policy=UntrackedFilesPolicy.PURGE,
                backup_enabled=False,
                require_confirmation=True,
            )
        clean = {k: v for k, v in overrides.items() if v is not None}
        return replace(base, **clean) if clean else base
