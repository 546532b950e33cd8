"""Change kinds for packsync previews."""

from __future__ import annotations

from enum import Enum


class ChangeKind(str, Enum):
    """How a path is affected by applying the remote tip."""

    ADD = "ADD"
    MODIFY = "MODIFY"
    DELETE = "DELETE"
    UNTRACKED = "UNTRACKED"
