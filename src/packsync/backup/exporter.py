"""BackupExporter: zip a profile into the sibling _backups folder."""

from __future__ import annotations

import logging
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional
from zipfile import ZIP_DEFLATED, ZipFile

from packsync.errors import BackupError
from packsync.models import Profile
from packsync.util.time import backup_timestamp, now_local

logger = logging.getLogger(__name__)


class BackupExporter:
    """
    Create `<profiles-root>/_backups/<profile>-<YYYYMMDD-HHmmss>.zip`.

    The profile is copied into a temporary staging directory first, any
    nested backups folder is removed from the copy, and the copy is zipped.
    The staging directory is always removed, including on failure.
    """

    def __init__(
        self,
        backups_dir_name: str = "_backups",
        *,
        clock: Callable[[], datetime] = now_local,
        temp_dir: Optional[Path] = None,
    ) -> None:
        self.backups_dir_name = backups_dir_name
        self._clock = clock
        self._temp_dir = temp_dir

    def backups_dir(self, profile: Profile) -> Path:
        return profile.path.parent / self.backups_dir_name

    def archive_path(self, profile: Profile) -> Path:
        """Next free archive path for profile (suffixes -1, -2, ... on collision)."""
        stem = f"{profile.name}-{backup_timestamp(self._clock())}"
        target_dir = self.backups_dir(profile)
        candidate = target_dir / f"{stem}.zip"
        n = 1
        while candidate.exists():
            candidate = target_dir / f"{stem}-{n}.zip"
            n += 1
        return candidate

    def export(self, profile: Profile) -> Path:
        """
        Write the backup archive and return its path.

        Raises:
            BackupError: on any filesystem or archive failure.
        """
        if not profile.path.is_dir():
            raise BackupError(
                f"Profile folder not found: {profile.path}",
                details={"profile": str(profile.path)},
            )

        try:
            self.backups_dir(profile).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise BackupError(
                "Failed to create backups folder",
                details={"path": str(self.backups_dir(profile))},
                cause=exc,
            ) from exc

        archive = self.archive_path(profile)
        logger.info("Backing up %s to %s", profile.path, archive)

        temp_dir = str(self._temp_dir) if self._temp_dir is not None else None
        with tempfile.TemporaryDirectory(prefix="packsync-", dir=temp_dir) as tmp:
            staging = Path(tmp) / profile.name
            try:
                shutil.copytree(profile.path, staging)
                nested = staging / self.backups_dir_name
                if nested.exists():
                    shutil.rmtree(nested)
                self._write_archive(staging, archive)
            except (OSError, shutil.Error) as exc:
                archive.unlink(missing_ok=True)
                raise BackupError(
                    "Failed to create backup archive",
                    details={"profile": str(profile.path), "archive": str(archive)},
                    cause=exc,
                ) from exc

        return archive

    def _write_archive(self, staging: Path, archive: Path) -> None:
        with ZipFile(archive, "x", ZIP_DEFLATED) as zipf:
            for file_path in sorted(staging.rglob("*")):
                arcname = file_path.relative_to(staging).as_posix()
                if file_path.is_dir():
                    # keep empty folders (e.g. an empty config dir)
                    if not any(file_path.iterdir()):
                        zipf.writestr(arcname + "/", "")
                    continue
                zipf.write(file_path, arcname)
