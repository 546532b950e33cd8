"""Exception hierarchy and command-failure mapping for packsync."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from packsync.models import CommandResult


class PackSyncError(Exception):
    """
    Base exception for packsync.

    Attributes:
        details: Optional structured information (e.g., command, exit code).
        cause: Optional original exception that triggered this error.
        exit_code: Process exit code used by the CLI for this error kind.
    """

    exit_code: int = 1

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
# Profile selection
# ----------------------------
class ProfileError(PackSyncError):
    """Base for profile discovery/selection failures."""

    exit_code = 10


class NotFoundError(ProfileError):
    """Raised when the profiles root directory does not exist."""


class EmptyError(ProfileError):
    """Raised when the profiles root contains no profile directories."""


class InvalidProfileError(ProfileError):
    """Raised when a selected directory lacks the marker subdirectory."""


# ----------------------------
# Dependencies
# ----------------------------
class DependencyError(PackSyncError):
    """Base for missing external tools."""

    exit_code = 20


class PackageManagerUnavailableError(DependencyError):
    """Raised when the platform package manager is not on the search path."""


class InstallationError(DependencyError):
    """Raised when an executable is still missing after installation."""


class ExecutableNotFoundError(DependencyError):
    """Raised when a command's executable cannot be resolved."""


# ----------------------------
# Version control
# ----------------------------
class GitCommandError(PackSyncError):
    """
    Base for failed version-control invocations.

    `details` always carries `command`, `returncode`, `stdout` and `stderr`.
    """

    exit_code = 30

    @property
    def returncode(self) -> Optional[int]:
        return self.details.get("returncode")

    @property
    def output(self) -> str:
        parts = [self.details.get("stdout") or "", self.details.get("stderr") or ""]
        return "\n".join(p.strip() for p in parts if p.strip())


class InitError(GitCommandError):
    """Raised when repository initialization fails."""


class RemoteConfigError(GitCommandError):
    """Raised when listing, adding or updating the remote fails."""


class LfsInitError(GitCommandError):
    """Raised when the large-file extension cannot be activated."""


class FetchError(GitCommandError):
    """Raised when fetching or diffing against the remote tip fails."""


class ResetError(GitCommandError):
    """Raised when the hard reset to the remote tip fails."""


class CleanError(GitCommandError):
    """Raised when removing untracked files fails."""


class LfsPullError(GitCommandError):
    """Raised when pulling large-file content fails."""


# ----------------------------
# Backup / runtime
# ----------------------------
class BackupError(PackSyncError):
    """Raised when the profile backup archive cannot be created."""

    exit_code = 50


class CommandTimeoutError(PackSyncError):
    """Raised when an external command exceeds the configured timeout."""

    exit_code = 60


def command_error(
    error_cls: type[GitCommandError],
    message: str,
    result: "CommandResult",
    *,
    cause: Optional[BaseException] = None,
) -> GitCommandError:
    """
    Build a GitCommandError subclass from a failed CommandResult.

    The captured output is kept in details so the top-level handler can show
    exactly what the tool printed.
    """
    details: dict[str, Any] = {
        "command": " ".join(result.args),
        "returncode": result.returncode,
        "stdout": result.stdout,
        "stderr": result.stderr,
    }
    return error_cls(message, details=details, cause=cause)
