"""ProfileLocator: discover, validate and select launcher profiles."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Protocol

from packsync.errors import EmptyError, InvalidProfileError, NotFoundError
from packsync.models import Profile

logger = logging.getLogger(__name__)


class ProfilePicker(Protocol):
    def pick(self, initial_dir: Path) -> Optional[Path]:
        ...


class ProfileMenu(Protocol):
    def choose(self, profiles: list[Profile]) -> Profile:
        ...


class ProfileLocator:
    """
    Enumerates profile directories under a root and resolves the user's
    choice to a valid Profile.

    Validation differs by selection path:
        - graphical picker: an invalid directory raises InvalidProfileError
        - console menu: an invalid entry is rejected and the menu reprompts
    """

    def __init__(
        self,
        root: Path,
        marker_dir: str,
        *,
        excluded_names: Iterable[str] = (),
    ) -> None:
        self.root = Path(root)
        self.marker_dir = marker_dir
        self._excluded = set(excluded_names)

    def list_profiles(self) -> list[Profile]:
        """
        Return immediate subdirectories of root as Profiles, sorted by name.

        Raises:
            NotFoundError: if root does not exist.
            EmptyError: if root has no subdirectories.
        """
        if not self.root.is_dir():
            raise NotFoundError(
                f"Profiles folder not found: {self.root}",
                details={"root": str(self.root)},
            )

        dirs = [
            p
            for p in self.root.iterdir()
            if p.is_dir() and p.name not in self._excluded
        ]
        if not dirs:
            raise EmptyError(
                f"No profiles found in {self.root}",
                details={"root": str(self.root)},
            )

        dirs.sort(key=lambda p: p.name)
        return [Profile.from_path(p, self.marker_dir) for p in dirs]

    def validate(self, path: Path) -> Profile:
        """Return the Profile for path. Raises InvalidProfileError."""
        profile = Profile.from_path(Path(path), self.marker_dir)
        if not profile.valid:
            raise InvalidProfileError(
                f"'{profile.name}' is not a valid profile "
                f"(missing '{self.marker_dir}' folder)",
                details={"path": str(profile.path), "marker_dir": self.marker_dir},
            )
        return profile

    def select(
        self,
        menu: ProfileMenu,
        *,
        picker: Optional[ProfilePicker] = None,
    ) -> Profile:
        """
        Let the user choose a profile.

        The graphical picker is tried first; if it is absent, fails or is
        cancelled, the console menu is used instead.
        """
        profiles = self.list_profiles()

        if picker is not None:
            chosen: Optional[Path] = None
            try:
                chosen = picker.pick(self.root)
            except Exception as exc:
                logger.warning("Folder dialog unavailable (%s); using console menu", exc)
            if chosen is not None:
                return self.validate(chosen)
            logger.info("No folder chosen in dialog; using console menu")

        return menu.choose(profiles)
