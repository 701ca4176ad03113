"""Rich console output for the trace command.

Headers, step markers, field and level listings, the per-level progress
bar and the end-of-run summary table.
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

from isoliner.io.converter import level_color
from isoliner.utils import ProcessingStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for level extraction.

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
    console.print(f"\n[bold]Isoliner[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_field_info(
    image_path: str,
    image_mode: str,
    width: int,
    height: int,
    min_value: float,
    max_value: float,
) -> None:
    """Print scalar field information.

    Args:
        image_path: Path to the image file
        image_mode: Pillow pixel mode of the image
        width: Field width in samples
        height: Field height in samples
        min_value: Smallest sample
        max_value: Largest sample
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(image_path)
    line1.append(f" ({image_mode})")
    console.print(line1)
    console.print(
        f"  {width:,}×{height:,} samples {SYM_DOT} range {min_value:g}–{max_value:g}"
    )


def print_levels(thresholds: list[float], verbose: bool) -> None:
    """Print the chosen contour levels.

    Args:
        thresholds: Contour levels
        verbose: Whether to list every level
    """
    console.print(f"  [green]{len(thresholds)}[/green] contour levels")
    if not verbose or not thresholds:
        return

    table = Table(box=None, padding=(0, 2))
    table.add_column("#", justify="right", style="dim")
    table.add_column("level", justify="right")
    table.add_column("stroke")
    for index, threshold in enumerate(sorted(thresholds)):
        color = level_color(index, len(thresholds))
        table.add_row(str(index), f"{threshold:g}", f"[{color}]■[/{color}] {color}")
    console.print(table)


def _format_duration(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m {rest:.1f}s"


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print the worker count used for extraction."""
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_success(output_path: str, file_size: str, stats: ProcessingStats) -> None:
    """Print the run summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        stats: Statistics of the finished run
    """
    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in "
        f"{_format_duration(stats.duration_seconds)}"
    )

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    table = Table(box=None, show_header=False, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column(justify="right")
    table.add_row("levels", str(stats.processed_count))
    if stats.skipped_count:
        table.add_row("skipped", str(stats.skipped_count))
    table.add_row("paths", f"{stats.path_count} ({stats.closed_count} closed)")
    error_style = "red" if stats.error_count else "green"
    table.add_row("errors", f"[{error_style}]{stats.error_count}[/{error_style}]")
    if stats.avg_threshold_time_ms is not None:
        table.add_row(
            "per level",
            f"{stats.avg_threshold_time_ms:.1f}ms avg "
            f"({stats.min_threshold_time_ms:.1f}–{stats.max_threshold_time_ms:.1f}ms)",
        )
    console.print(table)

    for threshold, message in stats.errors:
        error_line = Text("  ")
        error_line.append(SYM_ERR, style="red")
        error_line.append(f" level {threshold:g}: {message}")
        console.print(error_line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress levels")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of levels extracted before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} levels completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output file created")
