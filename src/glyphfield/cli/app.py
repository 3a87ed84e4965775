"""CLI application entry point for glyphfield.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from glyphfield import __version__
from glyphfield.cli.output import (
    console,
    create_progress,
    print_bake_info,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_font_info,
    print_glyph_errors,
    print_glyph_table,
    print_header,
    print_processing_info,
    print_step,
    print_success,
)
from glyphfield.config import (
    GlyphConfig,
    GlyphfieldSettings,
    ImageFormat,
    LoggingConfig,
    OutputConfig,
    ProcessingConfig,
)
from glyphfield.core import GlyphBaker
from glyphfield.domain import Shape
from glyphfield.exceptions import FontLoadError, GlyphfieldError
from glyphfield.io import FontReader
from glyphfield.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="glyphfield",
    help="Bake multi-channel signed distance field bitmaps from font glyphs.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Glyphfield[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def bake(
    input_font: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF/OTF font file",
            show_default=False,
        ),
    ],
    chars: Annotated[
        str | None,
        typer.Option(
            "--chars",
            "-c",
            help="Characters to bake (default: every encoded glyph)",
        ),
    ] = None,
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory receiving one bitmap per glyph",
        ),
    ] = Path("msdf"),
    size: Annotated[
        int,
        typer.Option(
            "--size",
            "-s",
            help="Square bitmap size in pixels (8-1024)",
            min=8,
            max=1024,
        ),
    ] = 48,
    padding: Annotated[
        int,
        typer.Option(
            "--padding",
            "-p",
            help="Empty border around the glyph in pixels",
            min=0,
            max=256,
        ),
    ] = 4,
    range_px: Annotated[
        float,
        typer.Option(
            "--range",
            "-r",
            help="Distance range in pixels mapped across 0-255",
        ),
    ] = 4.0,
    angle_threshold: Annotated[
        float,
        typer.Option(
            "--angle-threshold",
            "-a",
            help="Corner detection threshold in radians (0-3.14)",
        ),
    ] = 3.0,
    image_format: Annotated[
        ImageFormat,
        typer.Option(
            "--format",
            "-f",
            help="Bitmap file format",
            case_sensitive=False,
        ),
    ] = ImageFormat.PNG,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto, 1: no subprocesses)",
            min=1,
        ),
    ] = None,
    no_flip_y: Annotated[
        bool,
        typer.Option(
            "--no-flip-y",
            help="Keep font y-up orientation (bitmaps come out upside down)",
        ),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail a glyph on unrecognized outline commands instead of skipping them",
        ),
    ] = False,
    list_glyphs: Annotated[
        bool,
        typer.Option(
            "--list-glyphs",
            help="List encoded glyphs with their contour and edge counts and exit",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Bake MSDF bitmaps for the glyphs of a font.

    Each glyph outline is fitted into a square bitmap and written as one
    image whose RGB channels hold the multi-channel signed distance field.

    Example:
        glyphfield Roboto-Regular.ttf --chars "Hello" --size 64

    This will write msdf/u0048_H.png, msdf/u0065_e.png, ... for the
    distinct characters of "Hello".
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_font.exists():
        print_error(
            f"Input file not found: {input_font}",
            details=f"The file '{input_font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_font.is_file():
        print_error(
            f"Input path is not a file: {input_font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    if 2 * padding >= size:
        print_error(
            f"Padding {padding} leaves no room in a {size}px bitmap",
            details="Padding must be less than half the bitmap size.",
        )
        raise typer.Exit(code=1)

    # Create settings from CLI arguments
    try:
        settings = GlyphfieldSettings(
            glyph=GlyphConfig(
                output_size=size,
                padding=padding,
                range=range_px,
                angle_threshold=angle_threshold,
                flip_y=not no_flip_y,
            ),
            processing=ProcessingConfig(
                max_workers=workers,
                strict_vertices=strict,
            ),
            output=OutputConfig(
                output_dir=output_dir,
                image_format=image_format,
            ),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "WARNING",
            ),
        )
    except ValidationError as e:
        print_error("Invalid option value", details=str(e))
        raise typer.Exit(code=1)

    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    try:
        if list_glyphs:
            _handle_list_glyphs(input_font, quiet)
            raise typer.Exit(code=0)

        if not quiet:
            print_step("Loading font")

        try:
            with FontReader(input_font) as reader:
                font_type = reader.format
                glyph_count = reader.glyph_count
                upm = reader.units_per_em
        except Exception as e:
            raise FontLoadError(str(input_font), str(e)) from e

        if not quiet:
            print_font_info(
                font_path=str(input_font),
                font_type=font_type,
                glyph_count=glyph_count,
                upm=upm,
            )
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Baking")
            print_bake_info(size, padding, range_px, image_format.value)
            print_processing_info(actual_workers, is_auto=(workers is None))

        baker = GlyphBaker(settings, logger=logger)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task("Baking glyphs", total=None)

                    def update_progress(completed: int, total: int, *_: object) -> None:
                        progress.update(task_id, completed=completed, total=total)

                    stats = baker.bake(
                        font_path=input_font,
                        chars=chars,
                        output_dir=output_dir,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                stats = baker.bake(
                    font_path=input_font,
                    chars=chars,
                    output_dir=output_dir,
                    max_workers=workers,
                )
        except KeyboardInterrupt:
            if not quiet:
                print_cancellation_notice()
                print_cancellation_summary(
                    baked=baker.stats.baked_count,
                    cancelled=baker.stats.cancelled_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            print_success(
                output_dir=str(output_dir),
                total_time_s=stats.duration_seconds,
                baked=stats.baked_count,
                skipped=stats.skipped_count,
                errors=stats.error_count,
                avg_time_ms=stats.avg_glyph_time_ms,
                min_time_ms=stats.min_glyph_time_ms,
                max_time_ms=stats.max_glyph_time_ms,
            )

        if stats.error_count > 0:
            if not quiet:
                print_glyph_errors(stats.errors, limit=len(stats.errors) if verbose else 10)
            raise typer.Exit(code=1)

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except GlyphfieldError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _handle_list_glyphs(font_path: Path, quiet: bool) -> None:
    """Handle --list-glyphs mode.

    Args:
        font_path: Path to font file
        quiet: Suppress output other than the table
    """
    if not quiet:
        print_step("Loading font")

    try:
        with FontReader(font_path) as reader:
            if not quiet:
                print_font_info(
                    font_path=str(font_path),
                    font_type=reader.format,
                    glyph_count=reader.glyph_count,
                    upm=reader.units_per_em,
                )
                print_step("Encoded glyphs")

            rows: list[tuple[int, str, int, int]] = []
            for codepoint, glyph_name in reader.iter_encoded_glyphs():
                shape = Shape.from_vertices(reader.get_vertices(glyph_name))
                rows.append((codepoint, glyph_name, len(shape.contours), shape.edge_count))

    except Exception as e:
        print_error(f"Could not read font: {e}")
        raise typer.Exit(code=1)

    print_glyph_table(rows)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
