"""DependencyEnsurer: make sure git and git-lfs are available."""

from __future__ import annotations

import logging
import shutil
from typing import Callable, Optional, Sequence

from packsync.controller import CommandRunner
from packsync.errors import InstallationError, PackageManagerUnavailableError
from packsync.models import CommandResult

from .environment import current_search_path, merge_search_path, read_persisted_path

logger = logging.getLogger(__name__)

WhichFunc = Callable[..., Optional[str]]
RunnerFactory = Callable[..., CommandRunner]


class DependencyEnsurer:
    """
    Check each required executable and install missing ones through the
    platform package manager.

    The refreshed search path is returned, not written to os.environ; pass it
    on to whatever runs the installed tools.
    """

    def __init__(
        self,
        dependencies: Sequence[tuple[str, str]],
        *,
        package_manager: str = "winget",
        search_path: Optional[str] = None,
        persisted_path_reader: Callable[[], str] = read_persisted_path,
        which: WhichFunc = shutil.which,
        runner_factory: RunnerFactory = CommandRunner,
    ) -> None:
        self._dependencies = list(dependencies)
        self._package_manager = package_manager
        self._search_path = search_path if search_path is not None else current_search_path()
        self._read_persisted = persisted_path_reader
        self._which = which
        self._runner_factory = runner_factory

    @property
    def search_path(self) -> str:
        return self._search_path

    def is_available(self, executable: str) -> bool:
        return self._which(executable, path=self._search_path) is not None

    def ensure(self) -> str:
        """
        Ensure every dependency resolves, installing as needed.

        Returns:
            The search path to use for subsequent commands.

        Raises:
            PackageManagerUnavailableError: if something is missing and the
                package manager itself is not available.
            InstallationError: if an executable is still missing after install.
        """
        for executable, package_id in self._dependencies:
            if self.is_available(executable):
                logger.debug("%s found", executable)
                continue

            logger.info("%s not found; installing %s", executable, package_id)
            result = self.install(package_id)
            self.refresh_search_path()

            if not self.is_available(executable):
                raise InstallationError(
                    f"'{executable}' is still not available after installing "
                    f"{package_id}. Close this window, open a new terminal and "
                    "run the tool again.",
                    details={
                        "executable": executable,
                        "package_id": package_id,
                        "command": list(result.args),
                        "returncode": result.returncode,
                        "stdout": result.stdout.strip(),
                        "stderr": result.stderr.strip(),
                    },
                )
            logger.info("%s installed", executable)

        return self._search_path

    def install(self, package_id: str) -> CommandResult:
        """Run a silent, non-interactive install of package_id and return its result."""
        if not self.is_available(self._package_manager):
            raise PackageManagerUnavailableError(
                f"Package manager '{self._package_manager}' is not available; "
                f"install {package_id} manually.",
                details={
                    "package_manager": self._package_manager,
                    "package_id": package_id,
                },
            )

        runner = self._runner_factory(self._package_manager, search_path=self._search_path)
        result = runner.run(
            [
                "install",
                "--id",
                package_id,
                "--exact",
                "--silent",
                "--accept-source-agreements",
                "--accept-package-agreements",
            ]
        )
        if not result.ok:
            # winget exits non-zero for "already installed" as well; the
            # availability re-check after install decides.
            logger.warning(
                "%s install %s exited with %s: %s",
                self._package_manager,
                package_id,
                result.returncode,
                (result.stderr or result.stdout).strip(),
            )
        return result

    def refresh_search_path(self) -> str:
        """Merge the persisted PATH into the search path and return it."""
        self._search_path = merge_search_path(self._search_path, self._read_persisted())
        return self._search_path
