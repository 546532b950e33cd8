"""packsync command line: select a profile and bring it in line with the remote."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from packsync import __version__
from packsync.backup import BackupExporter
from packsync.deps import DependencyEnsurer
from packsync.errors import PackSyncError
from packsync.local import ConsoleProfileMenu, DialogProfilePicker, ProfileLocator
from packsync.manager import PackSyncManager
from packsync.models import Profile, SyncConfig, SyncMode, SyncResult
from packsync.ui import render_change_set
from packsync.util import ConfirmationPrompt

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_INTERRUPTED = 130

app = typer.Typer(add_completion=False)
console = Console()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"packsync [bold cyan]{__version__}[/bold cyan]")
        raise typer.Exit()


def select_profile(config: SyncConfig, profile_name: Optional[str] = None) -> Profile:
    locator = ProfileLocator(
        config.profiles_root,
        config.marker_dir,
        excluded_names=(config.backups_dir_name,),
    )
    if profile_name:
        return locator.validate(config.profiles_root / profile_name)

    picker = DialogProfilePicker() if config.use_dialog else None
    menu = ConsoleProfileMenu(console, marker_dir=config.marker_dir)
    return locator.select(menu, picker=picker)


def run(
    config: SyncConfig,
    prompt: ConfirmationPrompt,
    *,
    profile_name: Optional[str] = None,
    skip_deps: bool = False,
) -> SyncResult:
    """Run one full sync for the chosen profile. Raises PackSyncError."""
    profile = select_profile(config, profile_name)
    console.print(f"[cyan]Profile:[/cyan] {escape(profile.name)} [dim]({escape(str(profile.path))})[/dim]")

    search_path: Optional[str] = None
    if not skip_deps:
        console.print("[dim]Checking for git and git-lfs...[/dim]")
        search_path = DependencyEnsurer(
            config.dependencies,
            package_manager=config.package_manager,
        ).ensure()

    if config.backup_enabled and prompt.ask("Create a backup of this profile first?"):
        archive = BackupExporter(config.backups_dir_name).export(profile)
        console.print(f"[green]✓ Backup saved to {escape(str(archive))}[/green]")

    manager = PackSyncManager(config, profile, search_path=search_path)

    console.print("[dim]Preparing repository...[/dim]")
    manager.bootstrap()

    console.print(f"[dim]Checking {config.remote_ref} for updates...[/dim]")
    result = manager.sync(
        confirm=lambda _: prompt.ask("Apply these changes?"),
        on_preview=lambda change_set: render_change_set(console, change_set),
    )

    if result.status == "up_to_date":
        console.print("[green]✓ Already up to date.[/green]")
    elif result.status == "declined":
        console.print("[yellow]No changes applied.[/yellow]")
    else:
        console.print("[green bold]✓ Profile synchronized.[/green bold]")
    return result


def _render_error(exc: BaseException) -> None:
    console.print(
        Panel.fit(
            f"[bold red]{escape(str(exc))}[/bold red]",
            title=type(exc).__name__,
            border_style="red",
        )
    )
    details = getattr(exc, "details", None) or {}
    for key, value in details.items():
        if value in (None, ""):
            continue
        console.print(f"[dim]{key}:[/dim] {escape(str(value).strip())}", highlight=False)
    console.print_exception()


def _wait_for_key() -> None:
    try:
        console.input("\n[dim]Press Enter to exit...[/dim]")
    except (EOFError, KeyboardInterrupt):
        pass


@app.command()
def main(
    mode: SyncMode = typer.Option(
        SyncMode.PURGE,
        "--mode",
        case_sensitive=False,
        help="preserve: keep untracked files and offer a backup. "
        "purge: preview, confirm, and remove untracked files.",
    ),
    backup: Optional[bool] = typer.Option(
        None, "--backup/--no-backup", help="Offer a backup before syncing (default: by mode)."
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to every prompt."),
    profile: Optional[str] = typer.Option(
        None, "--profile", help="Profile folder name (skips the selection prompt)."
    ),
    profiles_root: Optional[Path] = typer.Option(
        None, "--profiles-root", help="Folder containing the launcher profiles."
    ),
    no_dialog: bool = typer.Option(False, "--no-dialog", help="Use the console menu only."),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=1.0, help="Seconds before an external command is abandoned."
    ),
    skip_deps: bool = typer.Option(False, "--skip-deps", help="Do not check/install git."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
    no_pause: bool = typer.Option(False, "--no-pause", help="Exit without waiting for Enter."),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Synchronize a modpack profile with its distribution repository."""
    setup_logging(verbose)

    code = EXIT_OK
    try:
        config = SyncConfig.for_mode(
            mode,
            profiles_root=profiles_root,
            backup_enabled=backup,
            use_dialog=False if no_dialog else None,
            command_timeout=timeout,
        )
        prompt = ConfirmationPrompt(console.input, assume_yes=yes)
        run(config, prompt, profile_name=profile, skip_deps=skip_deps)
    except PackSyncError as exc:
        _render_error(exc)
        code = exc.exit_code
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Cancelled.[/yellow]")
        code = EXIT_INTERRUPTED
    except Exception as exc:
        logger.debug("Unexpected failure", exc_info=True)
        _render_error(exc)
        code = EXIT_UNEXPECTED

    if not no_pause:
        _wait_for_key()
    raise typer.Exit(code)


def main_entry() -> None:
    app()


if __name__ == "__main__":
    main_entry()
