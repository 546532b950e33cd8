"""Dependency checks and installation for packsync."""

from __future__ import annotations

from .ensurer import DependencyEnsurer
from .environment import current_search_path, merge_search_path, read_persisted_path

__all__ = [
    "DependencyEnsurer",
    "current_search_path",
    "merge_search_path",
    "read_persisted_path",
]
