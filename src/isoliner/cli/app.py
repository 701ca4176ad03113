"""CLI application entry point for isoliner.

This module provides the main CLI interface using Typer.
"""

import os
from contextlib import nullcontext
from pathlib import Path
from typing import Annotated

import typer

from isoliner import __version__
from isoliner.cli.output import (
    SYM_OK,
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_field_info,
    print_header,
    print_levels,
    print_processing_info,
    print_step,
    print_success,
)
from isoliner.config import (
    ContourConfig,
    IsolinerSettings,
    LoggingConfig,
    ProcessingConfig,
    RenderConfig,
    SampleMode,
)
from isoliner.core import ContourProcessor, select_thresholds
from isoliner.domain import ScalarField
from isoliner.exceptions import (
    ImageLoadError,
    IsolinerError,
    OutputWriteError,
    ProcessingCancelledError,
)
from isoliner.io import FieldReader, SvgWriter
from isoliner.utils import ProcessingStats

# Create the Typer app
app = typer.Typer(
    name="isoliner",
    help="Trace isocontours of a grayscale image into SVG paths.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Isoliner[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def trace(
    input_image: Annotated[
        Path,
        typer.Argument(
            help="Path to input image (grayscale heightmap, TIFF/PNG/...)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-contours.svg)",
        ),
    ] = None,
    levels: Annotated[
        int,
        typer.Option(
            "--levels",
            "-n",
            help="Number of evenly spaced contour levels",
            min=1,
            max=1000,
        ),
    ] = 15,
    thresholds: Annotated[
        list[float] | None,
        typer.Option(
            "--threshold",
            "-t",
            help="Explicit contour level (repeatable, overrides --levels)",
        ),
    ] = None,
    close: Annotated[
        bool,
        typer.Option(
            "--close/--no-close",
            help="Close paths that run from border to border into polygons",
        ),
    ] = True,
    min_points: Annotated[
        int,
        typer.Option(
            "--min-points",
            help="Minimum points for a path to be rendered",
            min=2,
        ),
    ] = 3,
    stroke_width: Annotated[
        float,
        typer.Option(
            "--stroke-width",
            "-w",
            help="Stroke width in sample units",
            min=0.01,
            max=100.0,
        ),
    ] = 1.0,
    raw: Annotated[
        bool,
        typer.Option(
            "--raw",
            help="Render cell-edge midpoints instead of interpolated crossings",
        ),
    ] = False,
    color: Annotated[
        bool,
        typer.Option(
            "--color",
            help="Color each level from a blue-to-red ramp",
        ),
    ] = False,
    sample_mode: Annotated[
        str,
        typer.Option(
            "--sample-mode",
            help="Pixel format used for sampling (luma16|luma8)",
        ),
    ] = "luma16",
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    info: Annotated[
        bool,
        typer.Option(
            "--info",
            help="Show field range and contour levels and exit",
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
    """Trace isocontours of a grayscale image into an SVG file.

    Samples every pixel's luminance, runs marching squares at each contour
    level, stitches the crossings into paths and closes paths that leave
    the image along its border.

    Example:
        isoliner heightmap.tif -n 20

    This will create heightmap-contours.svg with 20 contour levels.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_image.is_file():
        reason = "not found" if not input_image.exists() else "not a file"
        print_error(
            f"Input image {reason}: {input_image}",
            details="Provide a path to a raster image (PNG, TIFF, ...).",
        )
        raise typer.Exit(code=1)

    try:
        mode = SampleMode(sample_mode.lower())
    except ValueError:
        print_error(
            f"Invalid sample mode: {sample_mode}",
            details="Valid values: " + ", ".join(m.value for m in SampleMode),
        )
        raise typer.Exit(code=1)

    settings = IsolinerSettings(
        contour=ContourConfig(
            levels=levels,
            thresholds=thresholds or None,
            close_boundaries=close,
            min_points=min_points,
        ),
        render=RenderConfig(
            stroke_width=stroke_width,
            use_interpolated=not raw,
            colored=color,
        ),
        processing=ProcessingConfig(
            max_workers=workers,
            sample_mode=mode,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    if not quiet:
        print_header(__version__)

    try:
        field, image_mode = _load_field(input_image, mode, quiet)
        levels_to_trace = _levels_for(field, settings)

        if not quiet:
            print_field_info(
                image_path=str(input_image),
                image_mode=image_mode,
                width=field.width,
                height=field.height,
                min_value=field.min_value,
                max_value=field.max_value,
            )
            print_step("Levels")
            print_levels(levels_to_trace, verbose=verbose)

        if info:
            _finish_info(levels_to_trace, quiet)
            raise typer.Exit(code=0)

        if not levels_to_trace:
            if not quiet:
                console.print("\nField is flat. Nothing to trace.")
            raise typer.Exit(code=0)

        output_path = output if output is not None else SvgWriter.get_output_path(input_image)
        stats = _run_trace(input_image, output_path, settings, len(levels_to_trace), quiet)

        if not quiet:
            print_success(str(output_path), _format_file_size(output_path), stats)

    except ImageLoadError as e:
        print_error(f"Could not load image: {e.reason}")
        raise typer.Exit(code=1)
    except OutputWriteError as e:
        print_error(f"Could not write output: {e.reason}")
        raise typer.Exit(code=1)
    except IsolinerError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _run_trace(
    input_image: Path,
    output_path: Path,
    settings: IsolinerSettings,
    level_count: int,
    quiet: bool,
) -> ProcessingStats:
    """Run the processor, with a progress bar unless quiet.

    Args:
        input_image: Path to the input image
        output_path: Path of the SVG to write
        settings: Isoliner settings
        level_count: Number of levels to trace
        quiet: Suppress progress output

    Returns:
        ProcessingStats of the run

    Raises:
        typer.Exit: With code 130 if the user cancels
    """
    workers = settings.processing.max_workers
    processor = ContourProcessor(settings)

    if not quiet:
        print_step("Tracing")
        print_processing_info(workers or os.cpu_count() or 1, is_auto=workers is None)

    progress = create_progress() if not quiet else None
    callback = None
    if progress is not None:
        task_id = progress.add_task(f"Tracing {level_count} levels", total=level_count)

        def callback(completed: int, total: int, *_: object) -> None:
            progress.update(task_id, completed=completed, total=total)

    try:
        with progress if progress is not None else nullcontext():
            return processor.process(
                image_path=input_image,
                output_path=output_path,
                max_workers=workers,
                progress_callback=callback,
            )
    except ProcessingCancelledError as e:
        if not quiet:
            print_cancellation_notice()
            print_cancellation_summary(processed=e.processed_count, cancelled=e.pending_count)
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code


def _load_field(image_path: Path, mode: SampleMode, quiet: bool) -> tuple[ScalarField, str]:
    """Decode an image and sample it.

    Args:
        image_path: Path to image file
        mode: Pixel format used for sampling
        quiet: Suppress the step marker

    Returns:
        Tuple of (field, Pillow pixel mode of the image)
    """
    if not quiet:
        print_step("Loading image")
    with FieldReader(image_path, mode) as reader:
        return reader.read_field(), reader.mode


def _levels_for(field: ScalarField, settings: IsolinerSettings) -> list[float]:
    """Resolve explicit or evenly spaced contour levels."""
    if settings.contour.thresholds:
        # Repeated -t values would collide in the per-level results
        return list(dict.fromkeys(settings.contour.thresholds))
    return select_thresholds(field, settings.contour.levels)


def _finish_info(levels_to_trace: list[float], quiet: bool) -> None:
    """Finish --info mode; quiet mode prints one level per line for scripting."""
    if quiet:
        for level in levels_to_trace:
            console.print(f"{level:g}")
    else:
        console.print(f"\n[bold green]{SYM_OK} Info complete[/bold green] – no output written")


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"

    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
