"""Data model for launcher profiles."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, frozen=True)
class Profile:
    """
    A modpack instance directory managed by the launcher.

    Notes:
        - `name` is the directory name.
        - `valid` records whether the marker subdirectory existed when the
          profile was discovered.
    """

    path: Path
    name: str
    valid: bool = False

    @classmethod
    def from_path(cls, path: Path, marker_dir: str) -> Profile:
        return cls(path=path, name=path.name, valid=(path / marker_dir).is_dir())
