"""Controller exports for packsync."""

from __future__ import annotations

from .git_controller import EMPTY_TREE, GitController
from .runner import CommandRunner

__all__ = ["CommandRunner", "GitController", "EMPTY_TREE"]
