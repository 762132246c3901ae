"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from polyprobe.domain import ContainmentStatus, PathTestPoint, Shape, SimplificationPreview

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

# Marker colors used by the editor overlay
STATUS_STYLES: dict[ContainmentStatus, str] = {
    ContainmentStatus.INSIDE: "green",
    ContainmentStatus.OUTSIDE: "red",
    ContainmentStatus.EDGE: "blue",
}


def create_progress() -> Progress:
    """Create a rich progress bar for zone processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Polyprobe[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_zone_info(zone_path: str, shapes: Sequence[Shape]) -> None:
    """Print zone document information.

    Args:
        zone_path: Path to the zone document
        shapes: Shapes loaded from it
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(zone_path)
    console.print(line)
    total_points = sum(len(s.points) for s in shapes)
    console.print(f"  {len(shapes)} zones {SYM_DOT} {total_points:,} points")


def print_path_table(points: Sequence[PathTestPoint], shapes: Sequence[Shape]) -> None:
    """Print a classified path as a table.

    Args:
        points: Classified path entries
        shapes: Shapes used to resolve containing zone names
    """
    names = {s.id: s.name or s.id for s in shapes}

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    table.add_column("Status")
    table.add_column("Zones")

    for p in points:
        if not p.valid_format:
            table.add_row(str(p.index + 1), "", "", "[dim]invalid[/dim]", "")
            continue
        style = STATUS_STYLES[p.status]
        zones = ", ".join(names.get(i, i) for i in p.containing_polygon_ids)
        table.add_row(
            str(p.index + 1),
            f"{p.x:g}",
            f"{p.y:g}",
            f"[{style}]{p.status.value}[/{style}]",
            zones,
        )

    console.print(table)


def print_classification_summary(points: Sequence[PathTestPoint]) -> None:
    """Print per-status counts of a classified path.

    Args:
        points: Classified path entries
    """
    counts = {status: 0 for status in ContainmentStatus}
    invalid = 0
    for p in points:
        if p.valid_format:
            counts[p.status] += 1
        else:
            invalid += 1

    parts = [
        f"[{STATUS_STYLES[status]}]{counts[status]} {status.value}[/{STATUS_STYLES[status]}]"
        for status in ContainmentStatus
    ]
    if invalid:
        parts.append(f"[dim]{invalid} invalid[/dim]")
    console.print(f"\n  {len(points)} points {SYM_DOT} " + f" {SYM_DOT} ".join(parts))


def print_simplification_table(
    before: Sequence[Shape],
    after: Sequence[Shape],
    previews: dict[str, SimplificationPreview] | None = None,
) -> None:
    """Print a before/after point count table.

    Args:
        before: Shapes before simplification
        after: Shapes after simplification, same order
        previews: Optional previews keyed by shape id; adds removed indices
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Zone")
    table.add_column("Before", justify="right")
    table.add_column("After", justify="right")
    if previews is not None:
        table.add_column("Removed")

    for old, new in zip(before, after):
        row = [old.name or old.id, str(len(old.points)), str(len(new.points))]
        if previews is not None:
            preview = previews.get(old.id)
            removed = preview.removed_indices if preview else []
            row.append(", ".join(str(i) for i in removed) or "-")
        table.add_row(*row)

    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    total_time_s: float,
    processed: int,
    points_removed: int,
    errors: int,
    output_path: str | None = None,
) -> None:
    """Print success message with summary.

    Args:
        total_time_s: Total processing time in seconds
        processed: Number of zones simplified
        points_removed: Total number of points removed
        errors: Number of errors encountered
        output_path: Path of the written document, if any
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    if output_path:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} zones {SYM_DOT} {points_removed} points removed {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
