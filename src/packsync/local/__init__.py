"""Profile discovery and selection for packsync."""

from __future__ import annotations

from .profiles import ProfileLocator, ProfileMenu, ProfilePicker
from .selectors import ConsoleProfileMenu, DialogProfilePicker

__all__ = [
    "ProfileLocator",
    "ProfileMenu",
    "ProfilePicker",
    "ConsoleProfileMenu",
    "DialogProfilePicker",
]
