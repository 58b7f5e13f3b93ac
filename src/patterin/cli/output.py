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

from patterin.domain import Shape

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for shape processing.

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
    console.print(f"\n[bold]Patterin[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_document_info(path: str, shape_count: int) -> None:
    """Print shape document information.

    Args:
        path: Path to the document
        shape_count: Number of shapes read from it
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    line.append(f" {SYM_DOT} {shape_count} shapes")
    console.print(line, soft_wrap=True)


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


def _format_point(x: float, y: float) -> str:
    return f"({x:.2f}, {y:.2f})"


def print_shape_table(shapes: Sequence[Shape], title: str | None = None) -> None:
    """Print a summary table with one row per shape.

    Args:
        shapes: Shapes to describe
        title: Optional table title
    """
    table = Table(title=title, show_lines=False, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Winding")
    table.add_column("Vertices", justify="right")
    table.add_column("Area", justify="right")
    table.add_column("Centroid")
    table.add_column("Bounds")
    table.add_column("Issues", justify="right")

    for index, shape in enumerate(shapes):
        bbox = shape.bounding_box()
        centroid = shape.centroid()
        violations = shape.validate()
        issue_style = "red" if violations else "green"
        table.add_row(
            str(index),
            shape.winding.value,
            str(len(shape.vertices)),
            f"{shape.area():.4f}",
            _format_point(centroid.x, centroid.y),
            f"{_format_point(bbox.min.x, bbox.min.y)} {_format_point(bbox.max.x, bbox.max.y)}",
            f"[{issue_style}]{len(violations)}[/{issue_style}]",
        )

    console.print(table)


def print_violations(shapes: Sequence[Shape]) -> None:
    """Print each invariant violation found on the shapes."""
    for index, shape in enumerate(shapes):
        for violation in shape.validate():
            line = Text(f"  {SYM_ERR} shape {index} ", style="red")
            line.append(f"[{violation.kind.value}] {violation.message}", style="default")
            console.print(line, soft_wrap=True)


def print_path_data(shapes: Sequence[Shape]) -> None:
    """Print SVG path data for each shape, one per line."""
    for shape in shapes:
        console.print(Text(shape.to_path_data()), soft_wrap=True)


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_success(
    total_time_s: float,
    inputs: int,
    outputs: int,
    errors: int,
    output_path: str | None = None,
) -> None:
    """Print success message with summary.

    Args:
        total_time_s: Total processing time in seconds
        inputs: Number of input shapes processed
        outputs: Number of result shapes
        errors: Number of errors encountered
        output_path: Path of the written document, if any
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    if output_path is not None:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {inputs} inputs {SYM_DOT} {outputs} shapes {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    line = Text.assemble((f"\n{SYM_ERR} Error: ", "bold red"), message)
    console.print(line, soft_wrap=True)
    if details:
        console.print(Text(f"  {details}"), soft_wrap=True)


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of shapes successfully processed before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} shapes completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output file created")
