"""CLI interface for depsize."""

import logging
from pathlib import Path
from typing import Optional

import typer

from depsize import __version__
from depsize.display import console, show_report, show_scanning_progress
from depsize.models import PackageRecord
from depsize.scanner import DEFAULT_ROOT, scan_packages

log = logging.getLogger(__name__)

app = typer.Typer(
    name="depsize",
    help="See which packages take up space in node_modules",
    add_completion=False,
)

STRICT_OPTION = typer.Option(
    False, "--strict", help="Fail instead of skipping unreadable files inside packages."
)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"depsize version {__version__}")
        raise typer.Exit()


def load_packages(root: Path, strict: bool = False) -> list[PackageRecord]:
    """Scan the root with a progress bar, exiting with status 1 on failure."""
    try:
        with show_scanning_progress() as progress:
            task = progress.add_task(f"Scanning {root}...", total=None)

            def update_progress(name: str, current: int, total: int):
                progress.update(
                    task, completed=current, total=total, description=f"Scanning {name}..."
                )

            packages = scan_packages(root, progress_callback=update_progress, strict=strict)
    except OSError as e:
        log.debug("Scan of %s failed", root, exc_info=True)
        reason = e.strerror or str(e)
        console.print(f"[red]Error: cannot scan {root}: {reason}[/red]")
        raise typer.Exit(1)

    return packages


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output to stderr."),
) -> None:
    """depsize - disk usage of installed packages."""
    _setup_logging(verbose)
    # If no command specified, launch the TUI on ./node_modules
    if ctx.invoked_subcommand is None:
        ctx.invoke(tui, path=Path(DEFAULT_ROOT), strict=False)


@app.command()
def tui(
    path: Path = typer.Argument(Path(DEFAULT_ROOT), help="Dependency directory to scan"),
    strict: bool = STRICT_OPTION,
) -> None:
    """Browse packages interactively (default)."""
    packages = load_packages(path, strict=strict)

    from depsize.tui import run_tui

    run_tui(packages)


@app.command()
def report(
    path: Path = typer.Argument(Path(DEFAULT_ROOT), help="Dependency directory to scan"),
    top: Optional[int] = typer.Option(None, "--top", "-n", min=1, help="Show only the N largest"),
    strict: bool = STRICT_OPTION,
) -> None:
    """Print package sizes without the interactive view."""
    packages = load_packages(path, strict=strict)
    show_report(packages, top=top)


if __name__ == "__main__":
    app()
