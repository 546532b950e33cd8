import tempfile
import unittest
import zipfile
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

from packsync.backup import BackupExporter
from packsync.errors import BackupError
from packsync.models import Profile

FIXED = datetime(2025, 1, 2, 3, 4, 5)


class TestBackupExporter(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        base = Path(self._tmp.name)
        self.root = base / "profiles"
        self.staging_parent = base / "tmp"
        self.staging_parent.mkdir()

        path = self.root / "Pack"
        (path / "mods").mkdir(parents=True)
        (path / "mods" / "a.jar").write_bytes(b"jar-bytes")
        (path / "config").mkdir()
        (path / "config" / "x.toml").write_text("k = 1\n", encoding="utf-8")
        (path / "empty").mkdir()
        (path / "_backups").mkdir()
        (path / "_backups" / "old.zip").write_bytes(b"old")
        self.profile = Profile(path=path, name="Pack", valid=True)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _exporter(self) -> BackupExporter:
        return BackupExporter("_backups", clock=lambda: FIXED, temp_dir=self.staging_parent)

    def test_archive_path_and_contents(self) -> None:
        archive = self._exporter().export(self.profile)

        self.assertEqual(archive, self.root / "_backups" / "Pack-20250102-030405.zip")
        self.assertTrue(archive.is_file())
        with zipfile.ZipFile(archive) as z:
            names = set(z.namelist())
            self.assertEqual(z.read("mods/a.jar"), b"jar-bytes")
        self.assertIn("config/x.toml", names)
        self.assertIn("empty/", names)
        self.assertFalse(any(n.startswith("_backups") for n in names))

    def test_staging_removed_after_success(self) -> None:
        self._exporter().export(self.profile)
        self.assertEqual(list(self.staging_parent.iterdir()), [])

    def test_profile_left_untouched(self) -> None:
        self._exporter().export(self.profile)
        self.assertTrue((self.profile.path / "_backups" / "old.zip").exists())

    def test_collision_gets_suffix(self) -> None:
        first = self._exporter().export(self.profile)
        second = self._exporter().export(self.profile)
        self.assertEqual(first.name, "Pack-20250102-030405.zip")
        self.assertEqual(second.name, "Pack-20250102-030405-1.zip")

    def test_failure_cleans_staging_and_partial_archive(self) -> None:
        exporter = self._exporter()
        with patch.object(BackupExporter, "_write_archive", side_effect=OSError("disk full")):
            with self.assertRaises(BackupError) as cm:
                exporter.export(self.profile)

        self.assertIsInstance(cm.exception.cause, OSError)
        self.assertEqual(list(self.staging_parent.iterdir()), [])
        self.assertEqual(list((self.root / "_backups").iterdir()), [])

    def test_missing_profile_folder(self) -> None:
        ghost = Profile(path=self.root / "Ghost", name="Ghost")
        with self.assertRaises(BackupError):
            self._exporter().export(ghost)


if __name__ == "__main__":
    unittest.main()
