"""Version-control controller: one method per git invocation packsync makes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol, Sequence

from packsync.errors import (
    CleanError,
    FetchError,
    InitError,
    LfsInitError,
    LfsPullError,
    RemoteConfigError,
    ResetError,
    command_error,
)
from packsync.models import CommandResult

from .runner import CommandRunner

logger = logging.getLogger(__name__)

# Object id of the empty tree; diffing against it lists every file as added.
EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


class Runner(Protocol):
    def run(self, args: Sequence[str], *, cwd: Optional[Path] = None) -> CommandResult:
        ...


class GitController:
    """
    Thin wrapper over the git command line for a single working tree.

    Every mutating or querying call raises its stage-specific error on a
    non-zero exit code, carrying the exit code and captured output.
    """

    def __init__(self, repo_path: Path, runner: Optional[Runner] = None) -> None:
        self.repo_path = Path(repo_path)
        self._runner: Runner = runner or CommandRunner("git")

    # ----------------------------
    # Repository metadata
    # ----------------------------
    def has_repository(self) -> bool:
        return (self.repo_path / ".git").exists()

    def init(self, branch: str) -> None:
        result = self._run(["init", "-b", branch])
        if not result.ok:
            raise command_error(InitError, "Failed to initialize repository", result)

    def has_head(self) -> bool:
        """False for an unborn branch (freshly initialized repository)."""
        result = self._run(["rev-parse", "--verify", "--quiet", "HEAD"])
        return result.ok

    def list_remotes(self) -> list[str]:
        result = self._run(["remote"])
        if not result.ok:
            raise command_error(RemoteConfigError, "Failed to list remotes", result)
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def add_remote(self, name: str, url: str) -> None:
        result = self._run(["remote", "add", name, url])
        if not result.ok:
            raise command_error(RemoteConfigError, f"Failed to add remote '{name}'", result)

    def set_remote_url(self, name: str, url: str) -> None:
        result = self._run(["remote", "set-url", name, url])
        if not result.ok:
            raise command_error(
                RemoteConfigError, f"Failed to update remote '{name}'", result
            )

    def lfs_install(self) -> None:
        result = self._run(["lfs", "install"])
        if not result.ok:
            raise command_error(LfsInitError, "Failed to set up Git LFS", result)

    # ----------------------------
    # Preview
    # ----------------------------
    def fetch(self, remote: str, branch: str) -> None:
        result = self._run(["fetch", "--prune", remote, branch])
        if not result.ok:
            raise command_error(
                FetchError, f"Failed to fetch '{branch}' from '{remote}'", result
            )

    def diff_name_status(self, base: str, target: str) -> str:
        result = self._run(["diff", "--name-status", base, target])
        if not result.ok:
            raise command_error(
                FetchError, f"Failed to compare {base} with {target}", result
            )
        return result.stdout

    def clean_dry_run(self) -> str:
        result = self._run(["clean", "-fd", "--dry-run"])
        if not result.ok:
            raise command_error(
                FetchError, "Failed to list untracked files", result
            )
        return result.stdout

    # ----------------------------
    # Apply
    # ----------------------------
    def reset_hard(self, ref: str) -> None:
        result = self._run(["reset", "--hard", ref])
        if not result.ok:
            raise command_error(ResetError, f"Failed to reset to {ref}", result)

    def clean(self) -> None:
        result = self._run(["clean", "-fd"])
        if not result.ok:
            raise command_error(CleanError, "Failed to remove untracked files", result)

    def lfs_pull(self) -> None:
        result = self._run(["lfs", "pull"])
        if not result.ok:
            raise command_error(LfsPullError, "Failed to download LFS content", result)

    def _run(self, args: list[str]) -> CommandResult:
        return self._runner.run(args, cwd=self.repo_path)
