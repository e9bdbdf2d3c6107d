"""Rich rendering for depsize."""

from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.text import Text

from depsize.models import PackageRecord
from depsize.navigation import NavigationState, visible_rows

console = Console()

LIST_TITLE = "Node Modules Size"
LIST_HELP = "[grey70]↑/↓: Navigate | [yellow]Enter:[/yellow] View Details | [yellow]q:[/yellow] Quit[/grey70]"
DETAIL_HELP = "[yellow]ESC[/yellow] to return to list view | [yellow]q[/yellow] to quit"

# File types listed in the detail view before truncating
MAX_FILE_TYPES = 10


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (binary units)."""
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.2f} GB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.2f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.2f} KB"
    else:
        return f"{size_bytes} B"


def scroll_indicator(offset: int, shown: int, total: int, visible: int) -> str:
    """Position suffix for the list title, e.g. ' [11-30/120]'."""
    if total <= visible:
        return ""
    return f" [{offset + 1}-{min(offset + shown, total)}/{total}]"


def build_package_table(
    packages: list[PackageRecord],
    state: NavigationState,
    viewport_height: int,
) -> Panel:
    """Render the visible slice of the package list."""
    visible = visible_rows(viewport_height)
    offset = state.scroll_offset
    window = packages[offset : offset + visible]

    table = Table(
        show_header=True,
        header_style="yellow",
        box=None,
        expand=True,
        pad_edge=False,
    )
    table.add_column("Module", ratio=7, no_wrap=True, overflow="ellipsis")
    table.add_column("Size", ratio=3, no_wrap=True)

    for i, package in enumerate(window, offset):
        style = "on grey30" if i == state.selected_index else None
        table.add_row(Text(package.name), format_size(package.size_bytes), style=style)

    title = LIST_TITLE + scroll_indicator(offset, len(window), len(packages), visible)
    return Panel(
        table,
        title=title,
        title_align="left",
        subtitle=LIST_HELP,
        height=max(viewport_height, 0) or None,
    )


def _field_line(label: str, value: str) -> Text:
    line = Text()
    line.append(f"{label}: ", style="yellow")
    line.append(value)
    return line


def build_detail_panel(package: PackageRecord) -> Panel:
    """Render everything known about one package."""
    lines: list[Text] = [_field_line("Size", format_size(package.size_bytes))]

    optional_fields = [
        ("Name", package.declared_name),
        ("Version", package.version),
        ("License", package.license),
        (
            "Dependencies",
            str(package.dependency_count) if package.dependency_count is not None else None,
        ),
        ("Files", str(package.file_count)),
        ("Last Updated", package.last_updated),
        ("Description", package.description),
        ("Author", package.author),
        ("Homepage", package.homepage),
        ("Repository", package.repository),
        ("Path", package.path),
    ]
    for label, value in optional_fields:
        if value is not None:
            lines.append(_field_line(label, value))
    if not package.has_manifest:
        lines.append(Text("No usable package.json found", style="bright_black"))

    lines.append(Text())
    lines.append(Text("File Types:", style="bold yellow"))
    if package.file_types:
        for ext, count in package.file_types[:MAX_FILE_TYPES]:
            line = Text()
            line.append(f"{ext}: ", style="blue")
            line.append(f"{count} files")
            lines.append(line)
        if len(package.file_types) > MAX_FILE_TYPES:
            lines.append(Text("(and more...)", style="bright_black"))
    else:
        lines.append(Text("No file type information available", style="bright_black"))

    return Panel(
        Group(*lines),
        title=f"Module Details: {package.name}",
        title_align="left",
        subtitle=DETAIL_HELP,
    )


def render_frame(
    packages: list[PackageRecord],
    state: NavigationState,
    viewport_height: int,
) -> Panel:
    """Render the view that matches the current navigation state."""
    if state.in_detail and state.selected_index is not None:
        return build_detail_panel(packages[state.selected_index])
    return build_package_table(packages, state, viewport_height)


def show_scanning_progress() -> Progress:
    """Create a progress display for the package scan."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def show_report(packages: list[PackageRecord], top: Optional[int] = None) -> None:
    """Print the package table without entering interactive mode."""
    shown = packages[:top] if top else packages

    table = Table(title=LIST_TITLE, show_header=True, header_style="bold")
    table.add_column("Module", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("Version", style="dim")

    for package in shown:
        table.add_row(
            package.name,
            format_size(package.size_bytes),
            str(package.file_count),
            package.version or "",
        )

    console.print(table)

    total_size = sum(p.size_bytes for p in packages)
    console.print(
        f"\n[bold]{len(packages)}[/bold] packages, [bold]{format_size(total_size)}[/bold] total"
    )
    if top and len(packages) > top:
        console.print(f"[dim]...and {len(packages) - top} more[/dim]")
