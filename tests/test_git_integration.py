import os
import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path

from packsync.controller import CommandRunner, GitController
from packsync.manager import PackSyncManager
from packsync.models import Profile, SyncConfig, UntrackedFilesPolicy

HAVE_GIT = shutil.which("git") is not None and shutil.which("git-lfs") is not None


def _git(cwd: Path, *args: str, env=None) -> str:
    proc = subprocess.run(
        ["git", "-c", "user.name=packsync", "-c", "user.email=packsync@example.invalid", *args],
        cwd=cwd,
        env=env,
        check=True,
        capture_output=True,
        text=True,
    )
    return proc.stdout


@unittest.skipUnless(HAVE_GIT, "git and git-lfs are required")
class TestGitIntegration(unittest.TestCase):
    """
    Runs the manager against real git with a local bare repository as the
    remote. HOME is redirected so `git lfs install` does not touch the
    user's global config.
    """

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        base = Path(self._tmp.name)
        self.home = base / "home"
        self.home.mkdir()
        self.env = dict(os.environ, HOME=str(self.home), GIT_CONFIG_NOSYSTEM="1")

        self.remote = base / "remote.git"
        self.remote.mkdir()
        _git(self.remote, "init", "--bare", "-b", "main", env=self.env)

        self.seed = base / "seed"
        self.seed.mkdir()
        _git(self.seed, "init", "-b", "main", env=self.env)
        self._write(self.seed, {
            "mods/a.jar": "a-v1",
            "config/b.toml": "b-v1",
            "config/c.toml": "c-v1",
        })
        _git(self.seed, "add", "-A", env=self.env)
        _git(self.seed, "commit", "-m", "v1", env=self.env)
        _git(self.seed, "remote", "add", "origin", str(self.remote), env=self.env)
        _git(self.seed, "push", "origin", "main", env=self.env)

        self.profile_dir = base / "profiles" / "Pack"
        self._write(self.profile_dir, {"mods/a.jar": "local-edit", "mods/local.jar": "mine"})
        self.profile = Profile.from_path(self.profile_dir, "mods")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    @staticmethod
    def _write(root: Path, files: dict) -> None:
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

    def _manager(self, policy: UntrackedFilesPolicy, *, confirm: bool = True) -> PackSyncManager:
        config = SyncConfig(
            remote_url=str(self.remote),
            profiles_root=self.profile_dir.parent,
            untracked_policy=policy,
            require_confirmation=confirm,
        )
        runner = CommandRunner("git", extra_env={"HOME": str(self.home), "GIT_CONFIG_NOSYSTEM": "1"})
        return PackSyncManager.from_controller(
            config, self.profile, GitController(self.profile_dir, runner)
        )

    def _read(self, rel: str) -> str:
        return (self.profile_dir / rel).read_text(encoding="utf-8")

    def test_first_sync_then_up_to_date_then_update(self) -> None:
        mgr = self._manager(UntrackedFilesPolicy.PURGE)

        mgr.bootstrap()
        mgr.bootstrap()
        remotes = _git(self.profile_dir, "remote", "-v", env=self.env)
        self.assertEqual(remotes.count("(fetch)"), 1)

        result = mgr.sync(confirm=lambda cs: True)
        self.assertEqual(result.status, "applied")
        self.assertEqual(
            sorted(result.change_set.added),
            ["config/b.toml", "config/c.toml", "mods/a.jar"],
        )
        self.assertEqual(result.change_set.untracked, ["mods/local.jar"])
        self.assertEqual(self._read("mods/a.jar"), "a-v1")
        self.assertFalse((self.profile_dir / "mods" / "local.jar").exists())

        again = mgr.sync(confirm=lambda cs: True)
        self.assertEqual(again.status, "up_to_date")

        self._write(self.seed, {
            "mods/a.jar": "a-v2",
            "config/b.toml": "b-v2",
            "config/c.toml": "c-v2",
        })
        _git(self.seed, "commit", "-am", "v2", env=self.env)
        _git(self.seed, "push", "origin", "main", env=self.env)

        declined = mgr.sync(confirm=lambda cs: False)
        self.assertEqual(declined.status, "declined")
        self.assertEqual(self._read("mods/a.jar"), "a-v1")

        update = mgr.sync(confirm=lambda cs: True)
        self.assertEqual(update.status, "applied")
        self.assertEqual(len(update.change_set.modified), 3)
        self.assertEqual(self._read("mods/a.jar"), "a-v2")
        self.assertEqual(self._read("config/b.toml"), "b-v2")
        self.assertEqual(self._read("config/c.toml"), "c-v2")

    def test_preserve_policy_keeps_untracked_files(self) -> None:
        mgr = self._manager(UntrackedFilesPolicy.PRESERVE)
        mgr.bootstrap()
        result = mgr.sync(confirm=lambda cs: True)

        self.assertEqual(result.status, "applied")
        self.assertEqual(result.change_set.untracked, [])
        self.assertEqual(self._read("mods/local.jar"), "mine")
        self.assertEqual(self._read("mods/a.jar"), "a-v1")

    def test_unconfirmed_preserve_restores_edited_tracked_file(self) -> None:
        mgr = self._manager(UntrackedFilesPolicy.PRESERVE, confirm=False)
        mgr.bootstrap()
        self.assertEqual(mgr.sync().status, "applied")

        self._write(self.profile_dir, {"config/b.toml": "LOCAL EDIT"})
        result = mgr.sync()

        self.assertEqual(result.status, "applied")
        self.assertTrue(result.change_set.is_empty)
        self.assertEqual(self._read("config/b.toml"), "b-v1")
        self.assertEqual(self._read("mods/local.jar"), "mine")


if __name__ == "__main__":
    unittest.main()
