"""Public plan exports for packsync."""

from __future__ import annotations

from .actions import ChangeKind
from .change_set import ChangeEntry, ChangeSet
from .parsing import parse_clean_dry_run, parse_name_status, unquote_path

__all__ = [
    "ChangeKind",
    "ChangeEntry",
    "ChangeSet",
    "parse_name_status",
    "parse_clean_dry_run",
    "unquote_path",
]
