"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

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

from curveforge.core import CurveResult

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for batch fitting.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]curveforge[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_input_info(path: str, curve_count: int, point_count: int) -> None:
    """Print point file information.

    Args:
        path: Path to the point file
        curve_count: Number of point sets in the file
        point_count: Total number of points across all sets
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    console.print(line)
    plural = "curve" if curve_count == 1 else "curves"
    console.print(f"  {curve_count} {plural} {SYM_DOT} {point_count:,} points")


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


def print_results_table(results: list[CurveResult], show_intersections: bool) -> None:
    """Print one row per fitted curve.

    Args:
        results: Batch results in input order
        show_intersections: Whether to include the self-intersection column
    """
    table = Table(show_edge=False, pad_edge=False, box=None, header_style="bold")
    table.add_column("  Curve")
    table.add_column("Segments", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Bounds")
    if show_intersections:
        table.add_column("Crossings", justify="right")

    for result in results:
        if result.contour is None:
            row = [f"  [red]{result.name}[/red]", "-", "-", f"[red]{result.error}[/red]"]
            if show_intersections:
                row.append("-")
            table.add_row(*row)
            continue

        min_x, min_y, max_x, max_y = result.contour.bounding_box()
        row = [
            f"  {result.name}",
            str(result.contour.segment_count),
            f"{result.length:,.2f}",
            f"({min_x:.1f}, {min_y:.1f}) {SYM_DOT} ({max_x:.1f}, {max_y:.1f})",
        ]
        if show_intersections:
            row.append(str(len(result.self_intersections)))
        table.add_row(*row)

    console.print(table)


def print_success(
    total_time_s: float,
    fitted: int,
    errors: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        total_time_s: Total processing time in seconds
        fitted: Number of curves fitted
        errors: Number of point sets that failed
        avg_time_ms: Average fitting time per curve in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {fitted} curves {SYM_DOT} [{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
