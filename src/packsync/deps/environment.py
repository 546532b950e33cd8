"""Search-path helpers: read the persisted PATH and merge it into a new value."""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

logger = logging.getLogger(__name__)

_MACHINE_ENV_KEY = r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment"
_USER_ENV_KEY = "Environment"


def current_search_path() -> str:
    return os.environ.get("PATH", "")


def _read_registry_path(hive: int, key: str) -> Optional[str]:
    import winreg

    try:
        with winreg.OpenKey(hive, key) as handle:
            value, _ = winreg.QueryValueEx(handle, "Path")
    except OSError:
        return None
    return os.path.expandvars(str(value))


def read_persisted_path() -> str:
    """
    Return machine + user PATH as persisted by installers.

    Only Windows persists PATH outside the process; elsewhere this returns
    an empty string and the current PATH is used as is.
    """
    if sys.platform != "win32":
        return ""

    import winreg

    parts = [
        _read_registry_path(winreg.HKEY_LOCAL_MACHINE, _MACHINE_ENV_KEY),
        _read_registry_path(winreg.HKEY_CURRENT_USER, _USER_ENV_KEY),
    ]
    return os.pathsep.join(p for p in parts if p)


def merge_search_path(current: str, *additional: str) -> str:
    """
    Append entries from `additional` that `current` does not already contain.

    Order is preserved and comparison uses os.path.normcase, so entries that
    differ only by case are merged on Windows.
    """
    merged: list[str] = []
    seen: set[str] = set()
    for value in (current, *additional):
        for entry in value.split(os.pathsep):
            entry = entry.strip()
            if not entry:
                continue
            key = os.path.normcase(os.path.normpath(entry))
            if key in seen:
                continue
            seen.add(key)
            merged.append(entry)
    return os.pathsep.join(merged)
