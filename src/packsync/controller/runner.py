"""Blocking subprocess runner (the only place packsync starts processes)."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence

from packsync.errors import CommandTimeoutError, ExecutableNotFoundError
from packsync.models import CommandResult

logger = logging.getLogger(__name__)


class CommandRunner:
    """
    Run one executable with arguments and capture its output.

    Notes:
        - `search_path` replaces PATH for both executable resolution and the
          child environment. The parent process environment is not modified.
        - `timeout=None` blocks until the child exits.
    """

    def __init__(
        self,
        executable: str,
        *,
        search_path: Optional[str] = None,
        timeout: Optional[float] = None,
        extra_env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.executable = executable
        self.search_path = search_path
        self.timeout = timeout
        self._extra_env = dict(extra_env or {})

    def with_search_path(self, search_path: Optional[str]) -> CommandRunner:
        """Return a runner for the same executable using another search path."""
        return CommandRunner(
            self.executable,
            search_path=search_path,
            timeout=self.timeout,
            extra_env=self._extra_env,
        )

    def resolve(self) -> str:
        """Return the absolute executable path. Raises ExecutableNotFoundError."""
        found = shutil.which(self.executable, path=self.search_path)
        if not found:
            raise ExecutableNotFoundError(
                f"'{self.executable}' was not found on the search path",
                details={"executable": self.executable},
            )
        return found

    def run(self, args: Sequence[str], *, cwd: Optional[Path] = None) -> CommandResult:
        """
        Run the executable and return its CommandResult (never raises on a
        non-zero exit code).

        Raises:
            ExecutableNotFoundError: if the executable cannot be resolved.
            CommandTimeoutError: if the configured timeout expires.
        """
        exe = self.resolve()
        argv = [exe, *args]
        shown = (self.executable, *args)
        logger.debug("run: %s (cwd=%s)", " ".join(shown), cwd)

        try:
            proc = subprocess.run(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                env=self._child_env(),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise CommandTimeoutError(
                f"'{' '.join(shown)}' did not finish within {self.timeout} seconds",
                details={"command": " ".join(shown), "timeout": self.timeout},
                cause=exc,
            ) from exc
        except OSError as exc:
            raise ExecutableNotFoundError(
                f"Failed to start '{self.executable}'",
                details={"executable": exe},
                cause=exc,
            ) from exc

        logger.debug("exit %s: %s", proc.returncode, " ".join(shown))
        return CommandResult(
            args=shown,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )

    def _child_env(self) -> Optional[dict[str, str]]:
        if self.search_path is None and not self._extra_env:
            return None
        env = dict(os.environ)
        if self.search_path is not None:
            env["PATH"] = self.search_path
        env.update(self._extra_env)
        return env
