"""Rich rendering of change-set previews."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from packsync.plan import ChangeKind, ChangeSet

# kind -> (heading, style, marker)
_SECTIONS: dict[ChangeKind, tuple[str, str, str]] = {
    ChangeKind.ADD: ("Files to add", "green", "+"),
    ChangeKind.MODIFY: ("Files to update", "yellow", "~"),
    ChangeKind.DELETE: ("Files to delete", "red", "-"),
    ChangeKind.UNTRACKED: ("Untracked files to remove", "magenta", "x"),
}


def render_change_set(console: Console, change_set: ChangeSet, *, limit: int = 0) -> None:
    """
    Print each non-empty category with its count, then a totals table.

    limit > 0 truncates each category listing to that many paths.
    """
    for kind, (heading, style, marker) in _SECTIONS.items():
        paths = change_set.paths(kind)
        if not paths:
            continue
        console.print(f"\n[bold {style}]{heading} ({len(paths)}):[/bold {style}]")
        shown = paths[:limit] if limit > 0 else paths
        for path in shown:
            console.print(f"  [{style}]{marker}[/{style}] {escape(path)}", highlight=False)
        if len(shown) < len(paths):
            console.print(f"  [dim]... and {len(paths) - len(shown)} more[/dim]")

    table = Table(title="Summary", show_header=True, header_style="bold cyan")
    table.add_column("Change")
    table.add_column("Count", justify="right")
    for kind, (heading, style, _) in _SECTIONS.items():
        table.add_row(f"[{style}]{heading}[/{style}]", str(len(change_set.paths(kind))))
    console.print()
    console.print(table)
