"""Interactive profile selection front-ends (folder dialog, numbered menu)."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape

from packsync.models import Profile


class DialogProfilePicker:
    """Native folder dialog via tkinter. Raises if no display is available."""

    def __init__(self, title: str = "Select your modpack profile") -> None:
        self.title = title

    def pick(self, initial_dir: Path) -> Optional[Path]:
        import tkinter as tk
        from tkinter import filedialog

        root = tk.Tk()
        try:
            root.withdraw()
            root.attributes("-topmost", True)
            selected = filedialog.askdirectory(
                initialdir=str(initial_dir),
                title=self.title,
                mustexist=True,
            )
        finally:
            root.destroy()

        # askdirectory returns "" (or an empty tuple on some platforms) on cancel.
        if not selected:
            return None
        return Path(selected)


class ConsoleProfileMenu:
    """
    Numbered profile list on the console.

    Reprompts until the user picks an existing number whose profile has the
    marker folder. EOFError/KeyboardInterrupt from input propagate.
    """

    def __init__(
        self,
        console: Console,
        *,
        input_func: Optional[Callable[[str], str]] = None,
        marker_dir: str = "mods",
    ) -> None:
        self._console = console
        self._input = input_func or console.input
        self._marker_dir = marker_dir

    def choose(self, profiles: list[Profile]) -> Profile:
        self._console.print("[bold cyan]Available profiles:[/bold cyan]")
        for idx, profile in enumerate(profiles, start=1):
            self._console.print(f"  [green]{idx}[/green]. {escape(profile.name)}")

        while True:
            raw = self._input("Enter the profile number: ").strip()
            if not raw.isdigit():
                self._console.print("[red]Please enter a number.[/red]")
                continue

            idx = int(raw)
            if not 1 <= idx <= len(profiles):
                self._console.print(
                    f"[red]Choose a number between 1 and {len(profiles)}.[/red]"
                )
                continue

            profile = profiles[idx - 1]
            if not profile.valid:
                self._console.print(
                    f"[red]'{escape(profile.name)}' has no '{self._marker_dir}' folder; "
                    "choose another profile.[/red]"
                )
                continue
            return profile
