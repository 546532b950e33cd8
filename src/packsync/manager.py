"""PackSyncManager: orchestrates Bootstrap -> Preview -> Confirm -> Apply."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from packsync.controller import EMPTY_TREE, CommandRunner, GitController
from packsync.models import Profile, SyncConfig, SyncResult, UntrackedFilesPolicy
from packsync.plan import ChangeSet, parse_clean_dry_run, parse_name_status

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[ChangeSet], bool]


class PackSyncManager:
    """
    Keep one profile directory in step with the configured remote branch.

    Policy:
        - Remote always wins: tracked files are hard-reset to the remote tip.
        - Untracked files are removed only under UntrackedFilesPolicy.PURGE.
        - Every step raises on first failure; there is no rollback.
    """

    def __init__(
        self,
        config: SyncConfig,
        profile: Profile,
        *,
        search_path: Optional[str] = None,
    ) -> None:
        runner = CommandRunner(
            "git",
            search_path=search_path,
            timeout=config.command_timeout,
        )
        self._config = config
        self._profile = profile
        self._controller = GitController(profile.path, runner)

    @classmethod
    def from_controller(
        cls,
        config: SyncConfig,
        profile: Profile,
        controller: GitController,
    ) -> PackSyncManager:
        """Create manager with an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._config = config
        obj._profile = profile
        obj._controller = controller
        return obj

    @property
    def config(self) -> SyncConfig:
        return self._config

    @property
    def profile(self) -> Profile:
        return self._profile

    # ----------------------------
    # Bootstrap
    # ----------------------------
    def bootstrap(self) -> None:
        """
        Make the profile directory a repository pointing at the sync target.

        Safe to call on every run:
            - init only when repository metadata is missing
            - add the remote if absent, otherwise overwrite its URL
            - (re)activate the large-file extension
        """
        cfg = self._config
        ctl = self._controller

        if not ctl.has_repository():
            logger.info("Initializing repository in %s", self._profile.path)
            ctl.init(cfg.branch)

        if cfg.remote_name in ctl.list_remotes():
            logger.info("Updating remote %s", cfg.remote_name)
            ctl.set_remote_url(cfg.remote_name, cfg.remote_url)
        else:
            logger.info("Adding remote %s", cfg.remote_name)
            ctl.add_remote(cfg.remote_name, cfg.remote_url)

        ctl.lfs_install()

    # ----------------------------
    # Preview
    # ----------------------------
    def preview(self) -> ChangeSet:
        """
        Fetch the remote branch and compute what applying it would change.

        The working tree is not touched. Untracked candidates are only
        collected when the policy purges them. An untracked directory that
        also receives tracked files is listed file by file.
        """
        cfg = self._config
        ctl = self._controller

        ctl.fetch(cfg.remote_name, cfg.branch)

        base = "HEAD" if ctl.has_head() else EMPTY_TREE
        entries = parse_name_status(ctl.diff_name_status(base, cfg.remote_ref))

        if cfg.untracked_policy is UntrackedFilesPolicy.PURGE:
            entries.extend(parse_clean_dry_run(ctl.clean_dry_run()))

        change_set = ChangeSet.from_entries(entries, expand_directory=self._files_under)
        logger.info("Preview: %s", change_set.counts())
        return change_set

    def _files_under(self, directory: str) -> list[str]:
        root = self._profile.path
        base = root / directory
        if not base.is_dir():
            return []
        return sorted(
            path.relative_to(root).as_posix()
            for path in base.rglob("*")
            if path.is_file()
        )

    # ----------------------------
    # Apply
    # ----------------------------
    def apply(self) -> bool:
        """
        Reset to the remote tip, purge untracked files if configured, then
        pull large-file content.

        Returns:
            True if untracked files were purged.
        """
        cfg = self._config
        ctl = self._controller

        ctl.reset_hard(cfg.remote_ref)

        purged = cfg.untracked_policy is UntrackedFilesPolicy.PURGE
        if purged:
            ctl.clean()

        ctl.lfs_pull()
        return purged

    def sync(
        self,
        confirm: Optional[ConfirmCallback] = None,
        *,
        on_preview: Optional[Callable[[ChangeSet], None]] = None,
    ) -> SyncResult:
        """
        Preview, confirm and apply.

        - Empty change set with require_confirmation: returns "up_to_date"
          without applying.
        - on_preview is called with a non-empty change set before confirm.
        - require_confirmation and confirm returns False: "declined".
        - Otherwise applies and returns "applied". Without confirmation the
          apply always runs, so local edits to tracked files are reverted and
          large-file content is pulled even when the commits already match.
        """
        change_set = self.preview()
        summary = change_set.counts()
        confirming = self._config.require_confirmation

        if change_set.is_empty and confirming:
            logger.info("Already up to date")
            return SyncResult(status="up_to_date", change_set=change_set, summary=summary)

        if on_preview is not None and not change_set.is_empty:
            on_preview(change_set)

        if confirming:
            if confirm is None or not confirm(change_set):
                logger.info("Sync declined")
                return SyncResult(status="declined", change_set=change_set, summary=summary)

        purged = self.apply()
        return SyncResult(
            status="applied",
            change_set=change_set,
            summary=summary,
            untracked_purged=purged,
        )
