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

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for glyph baking.

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
    console.print(f"\n[bold]Glyphfield[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, font_type: str, glyph_count: int, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        font_type: Font format type (e.g., "TrueType", "OpenType")
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def print_bake_info(size: int, padding: int, range_px: float, image_format: str) -> None:
    """Print bitmap parameters."""
    console.print(
        f"  {size}x{size} px {SYM_DOT} padding {padding} {SYM_DOT} "
        f"range {range_px:g} px {SYM_DOT} {image_format}"
    )


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_glyph_table(rows: list[tuple[int, str, int, int]]) -> None:
    """Print encoded glyphs with their outline structure.

    Args:
        rows: (codepoint, glyph name, contour count, edge count) per glyph
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Codepoint")
    table.add_column("Char")
    table.add_column("Glyph")
    table.add_column("Contours", justify="right")
    table.add_column("Edges", justify="right")

    for codepoint, name, contours, edges in rows:
        char = chr(codepoint) if chr(codepoint).isprintable() else ""
        table.add_row(
            f"U+{codepoint:04X}",
            Text(char),
            Text(name),
            str(contours),
            str(edges),
        )

    console.print(table)
    console.print(f"\n[bold]{len(rows)} encoded glyphs[/bold]")


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
    output_dir: str,
    total_time_s: float,
    baked: int,
    skipped: int,
    errors: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_dir: Directory holding the written bitmaps
        total_time_s: Total baking time in seconds
        baked: Number of glyphs baked
        skipped: Number of glyphs skipped
        errors: Number of errors encountered
        avg_time_ms: Average generation time per glyph in milliseconds
        min_time_ms: Minimum generation time per glyph in milliseconds
        max_time_ms: Maximum generation time per glyph in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_dir, style="bold")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {baked} baked {SYM_DOT} {skipped} skipped {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    # Per-glyph timing
    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}–{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_glyph_errors(errors: list[tuple[str, str]], limit: int = 10) -> None:
    """Print per-glyph failures.

    Args:
        errors: (glyph name, message) pairs
        limit: Maximum number of entries to show
    """
    for glyph_name, message in errors[:limit]:
        line = Text(f"  {SYM_ERR} ", style="red")
        line.append(glyph_name, style="bold")
        line.append(f": {message}")
        console.print(line)
    if len(errors) > limit:
        console.print(f"  ... +{len(errors) - limit} more (see log file)")


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
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress glyphs")


def print_cancellation_summary(baked: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        baked: Number of glyphs written before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {baked} glyphs written {SYM_DOT} {cancelled} tasks cancelled")
