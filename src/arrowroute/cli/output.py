"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from arrowroute.core.renderer import RenderedArrow
from arrowroute.domain import Point

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for arrow routing.

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
    """Print application header."""
    console.print(f"\n[bold]Arrowroute[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_scene_info(scene_path: str, arrows: int, obstacles: int) -> None:
    """Print scene information.

    Args:
        scene_path: Path to the scene file
        arrows: Number of arrows in the scene
        obstacles: Number of obstacles in the scene
    """
    # Text keeps brackets in paths from being parsed as markup
    line = Text("  ")
    line.append(scene_path)
    console.print(line)
    console.print(f"  {arrows} arrows {SYM_DOT} {obstacles} obstacles")


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
    output_path: str,
    file_size: str,
    total_time_s: float,
    arrows: int,
    strategies: dict[str, int],
    fallbacks: int,
    labels: int,
    errors: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total rendering time in seconds
        arrows: Number of arrows routed
        strategies: Arrow count per routing strategy
        fallbacks: Number of searches that fell back to a straight line
        labels: Number of labels generated
        errors: Number of arrows that failed
        avg_time_ms: Average routing time per arrow in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {arrows} arrows {SYM_DOT} {labels} labels {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if strategies:
        breakdown = f" {SYM_DOT} ".join(
            f"{count} {name}" for name, count in sorted(strategies.items())
        )
        console.print(f"  {breakdown}")
    if fallbacks:
        console.print(f"  [yellow]{fallbacks} routes fell back to a straight line[/yellow]")

    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.2f}ms avg per arrow")


def _format_point(point: Point) -> str:
    return f"({point.x:g}, {point.y:g})"


def print_route_table(arrows: Sequence[RenderedArrow]) -> None:
    """Print routed point lists as a table.

    Args:
        arrows: Rendered arrows in scene order
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("Strategy")
    table.add_column("Length", justify="right")
    table.add_column("Points")

    for arrow in arrows:
        if arrow.geometry is None:
            table.add_row(
                str(arrow.index), f"[red]{SYM_ERR} error[/red]", "", escape(arrow.error or "")
            )
            continue

        geometry = arrow.geometry
        strategy = geometry.strategy.value
        if geometry.fell_back:
            strategy += " [yellow](fallback)[/yellow]"
        points = " → ".join(_format_point(p) for p in geometry.points)
        table.add_row(str(arrow.index), strategy, f"{geometry.length():.1f}", points)

    console.print()
    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
