"""ChangeSet model: the per-run preview of a sync."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from .actions import ChangeKind


@dataclass(slots=True, frozen=True)
class ChangeEntry:
    """A single path and how the sync affects it."""

    kind: ChangeKind
    path: str


@dataclass(slots=True)
class ChangeSet:
    """
    Files the sync would add, modify, delete, and untracked paths it would
    remove.

    The four lists are disjoint and each is kept in first-seen order.
    """

    added: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    untracked: list[str] = field(default_factory=list)

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[ChangeEntry],
        *,
        expand_directory: Optional[Callable[[str], Iterable[str]]] = None,
    ) -> ChangeSet:
        """
        Partition entries by kind.

        Rules:
            - The first tracked kind seen for a path wins; later duplicates
              are dropped.
            - An untracked path that is also a tracked change is dropped
              from the untracked list (the reset takes care of it).
            - An untracked directory ("dir/") containing a tracked change is
              replaced by the files expand_directory lists under it, minus
              the tracked ones. Without expand_directory it is dropped.
        """
        buckets: dict[ChangeKind, list[str]] = {kind: [] for kind in ChangeKind}
        tracked_seen: set[str] = set()
        untracked: list[ChangeEntry] = []

        for entry in entries:
            if entry.kind is ChangeKind.UNTRACKED:
                untracked.append(entry)
                continue
            if entry.path in tracked_seen:
                continue
            tracked_seen.add(entry.path)
            buckets[entry.kind].append(entry.path)

        untracked_seen: set[str] = set()
        for entry in untracked:
            paths: Iterable[str] = (entry.path,)
            if entry.path.endswith("/") and any(
                path.startswith(entry.path) for path in tracked_seen
            ):
                paths = expand_directory(entry.path) if expand_directory is not None else ()

            for path in paths:
                if path in tracked_seen or path in untracked_seen:
                    continue
                untracked_seen.add(path)
                buckets[ChangeKind.UNTRACKED].append(path)

        return cls(
            added=buckets[ChangeKind.ADD],
            modified=buckets[ChangeKind.MODIFY],
            deleted=buckets[ChangeKind.DELETE],
            untracked=buckets[ChangeKind.UNTRACKED],
        )

    @property
    def has_tracked_changes(self) -> bool:
        return bool(self.added or self.modified or self.deleted)

    @property
    def is_empty(self) -> bool:
        return not self.has_tracked_changes and not self.untracked

    def paths(self, kind: ChangeKind) -> list[str]:
        if kind is ChangeKind.ADD:
            return self.added
        if kind is ChangeKind.MODIFY:
            return self.modified
        if kind is ChangeKind.DELETE:
            return self.deleted
        return self.untracked

    def entries(self) -> list[ChangeEntry]:
        return [
            ChangeEntry(kind=kind, path=path)
            for kind in ChangeKind
            for path in self.paths(kind)
        ]

    def counts(self) -> dict[str, int]:
        """Per-category counts keyed by ChangeKind value."""
        return {kind.value: len(self.paths(kind)) for kind in ChangeKind}

    def total(self) -> int:
        return sum(self.counts().values())
