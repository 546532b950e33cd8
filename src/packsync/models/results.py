"""Result models for command invocations and sync runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Optional

if TYPE_CHECKING:
    from packsync.plan import ChangeSet


SyncStatus = Literal["up_to_date", "declined", "applied"]


@dataclass(slots=True, frozen=True)
class CommandResult:
    """Exit code and captured output of one external command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(slots=True)
class SyncResult:
    """Outcome of one preview/confirm/apply sequence."""

    status: SyncStatus
    change_set: Optional["ChangeSet"] = None
    summary: dict[str, int] = field(default_factory=dict)
    untracked_purged: bool = False
