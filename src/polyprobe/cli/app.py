"""CLI application entry point for polyprobe.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from polyprobe import __version__
from polyprobe.cli.output import (
    console,
    create_progress,
    print_classification_summary,
    print_error,
    print_header,
    print_path_table,
    print_simplification_table,
    print_step,
    print_success,
    print_zone_info,
)
from polyprobe.config import (
    ClassifierConfig,
    LoggingConfig,
    PathTestingConfig,
    PolyprobeSettings,
    ProcessingConfig,
    SimplifierConfig,
    SnapConfig,
)
from polyprobe.core import (
    ZoneProcessor,
    classify_entries,
    preview_simplification,
    place_point,
    straighten_line,
)
from polyprobe.domain import Point, Shape, ViewMode
from polyprobe.exceptions import InputFileError, PolyprobeError, ZoneSchemaError
from polyprobe.io import (
    ZoneReader,
    ZoneWriter,
    export_path_csv,
    export_path_json,
    format_path_text,
    read_path_file,
)
from polyprobe.io.zone_schema import ZoneTypeDefinition
from polyprobe.utils import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
OUTPUT_FORMATS = ("table", "text", "json", "csv")

# Create the Typer app
app = typer.Typer(
    name="polyprobe",
    help="Classify, simplify and snap annotation polygons.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Polyprobe[/bold blue] v{__version__}")
        raise typer.Exit()


def _is_quiet(ctx: typer.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("quiet"))


def _load_zones(zones: Path) -> tuple[list[Shape], list[ZoneTypeDefinition]]:
    """Load a zone document, turning failures into a clean CLI exit."""
    try:
        reader = ZoneReader(zones)
        reader.load()
        return reader.shapes, reader.zone_types
    except FileNotFoundError:
        print_error(
            f"Zone file not found: {zones}",
            details=f"The file '{zones}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)
    except ZoneSchemaError as e:
        print_error(f"Could not load zones: {e.reason}")
        raise typer.Exit(code=1)
    except InputFileError as e:
        print_error(f"Could not read zones: {e.reason}")
        raise typer.Exit(code=1)


@app.callback()
def main_callback(
    ctx: typer.Context,
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
    """Classify test points against annotation zones, simplify zone polygons
    and snap drawn points the way the annotation editor does.

    Example:
        polyprobe classify zones.json path.txt
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    level = log_level.upper()
    if level not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)
    if verbose and level == "WARNING":
        level = "INFO"

    logging_config = LoggingConfig(log_file=log_file, log_level=level)
    configure_logging(
        log_file=logging_config.log_file,
        console_level=logging_config.log_level,
        file_level=logging_config.file_log_level,
        quiet=quiet,
    )
    ctx.obj = {"quiet": quiet, "verbose": verbose}


@app.command()
def classify(
    ctx: typer.Context,
    zones: Annotated[
        Path,
        typer.Argument(help="Path to the zone JSON document", show_default=False),
    ],
    path_file: Annotated[
        Path,
        typer.Argument(help="Path to a test path text file (one 'x, y' per line)", show_default=False),
    ],
    edge_threshold: Annotated[
        float,
        typer.Option(
            "--edge-threshold",
            "-e",
            help="Distance (px) from an edge still classified as edge",
            min=0.0,
            max=100.0,
        ),
    ] = 3.0,
    max_points: Annotated[
        int,
        typer.Option(
            "--max-points",
            help="Maximum number of path points to classify",
            min=1,
            max=100_000,
        ),
    ] = 1000,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format (table|text|json|csv)",
        ),
    ] = "table",
) -> None:
    """Classify every point of a test path against the zones.

    Each point is reported as inside, outside or on the edge of the zones,
    together with the zones that contain it.
    """
    quiet = _is_quiet(ctx)

    fmt = output_format.lower()
    if fmt not in OUTPUT_FORMATS:
        print_error(
            f"Invalid format: {output_format}",
            details=f"Valid values: {', '.join(OUTPUT_FORMATS)}",
        )
        raise typer.Exit(code=1)

    settings = PolyprobeSettings(
        classifier=ClassifierConfig(edge_threshold=edge_threshold),
        path_testing=PathTestingConfig(max_points=max_points),
    )

    shapes, _ = _load_zones(zones)

    try:
        entries = read_path_file(path_file)
    except FileNotFoundError:
        print_error(f"Path file not found: {path_file}")
        raise typer.Exit(code=1)
    except PolyprobeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    classified = classify_entries(
        entries,
        shapes,
        settings.classifier.edge_threshold,
        settings.path_testing.max_points,
    )
    valid = [p for p in classified if p.valid_format]

    # Machine-readable formats bypass rich markup entirely
    if fmt == "json":
        typer.echo(export_path_json(valid, shapes))
        return
    if fmt == "csv":
        typer.echo(export_path_csv(valid, shapes))
        return
    if fmt == "text":
        typer.echo(format_path_text(valid, include_status=True))
        return

    if not quiet:
        print_header(__version__)
        print_step("Loading zones")
        print_zone_info(str(zones), shapes)
        print_step("Classifying path")
    print_path_table(classified, shapes)
    print_classification_summary(classified)


@app.command()
def simplify(
    ctx: typer.Context,
    zones: Annotated[
        Path,
        typer.Argument(help="Path to the zone JSON document", show_default=False),
    ],
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            "-t",
            help="Simplification tolerance in pixels (0 keeps every point)",
            min=0.0,
            max=100.0,
        ),
    ] = 5.0,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the simplified zones to this path",
        ),
    ] = None,
    write: Annotated[
        bool,
        typer.Option(
            "--write",
            "-w",
            help="Write the simplified zones to {name}-simplified.json",
        ),
    ] = False,
    preview: Annotated[
        bool,
        typer.Option(
            "--preview",
            help="Show which vertices would be removed without writing anything",
        ),
    ] = False,
    workers: Annotated[
        int,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers",
            min=1,
        ),
    ] = 1,
) -> None:
    """Simplify every zone polygon with Ramer-Douglas-Peucker.

    Prints the point count of each zone before and after simplification.
    """
    quiet = _is_quiet(ctx)

    if preview and (write or output is not None):
        print_error("Cannot use --preview together with --write or --output")
        raise typer.Exit(code=1)

    settings = PolyprobeSettings(
        simplifier=SimplifierConfig(tolerance=tolerance),
        processing=ProcessingConfig(max_workers=workers),
    )

    if not quiet:
        print_header(__version__)
        print_step("Loading zones")

    shapes, zone_types = _load_zones(zones)

    if not quiet:
        print_zone_info(str(zones), shapes)

    if preview:
        previews = {
            s.id: preview_simplification(s.points, settings.simplifier.tolerance)
            for s in shapes
            if s.is_closed_area
        }
        after = [
            s.with_points(previews[s.id].kept) if s.id in previews else s for s in shapes
        ]
        if not quiet:
            print_step("Preview")
        print_simplification_table(shapes, after, previews)
        return

    processor = ZoneProcessor(settings)

    if not quiet:
        print_step("Simplifying")
        with create_progress() as progress:
            task_id = progress.add_task("Simplifying zones", total=len(shapes))

            def update_progress(completed: int, *_: object) -> None:
                progress.update(task_id, completed=completed)

            simplified, stats = processor.simplify_all(shapes, progress_callback=update_progress)
    else:
        simplified, stats = processor.simplify_all(shapes)

    print_simplification_table(shapes, simplified)

    output_path = output
    if output_path is None and write:
        output_path = ZoneWriter.get_simplified_path(zones)

    if output_path is not None:
        try:
            ZoneWriter(simplified, output_path, zone_types).save()
        except OSError as e:
            print_error(f"Could not save zones: {e}")
            raise typer.Exit(code=1)

    if not quiet:
        print_success(
            total_time_s=stats.duration_seconds,
            processed=stats.processed_count,
            points_removed=stats.points_removed,
            errors=stats.error_count,
            output_path=str(output_path) if output_path else None,
        )

    if stats.error_count:
        raise typer.Exit(code=1)


@app.command()
def snap(
    x: Annotated[float, typer.Argument(help="Point x in image pixels", show_default=False)],
    y: Annotated[float, typer.Argument(help="Point y in image pixels", show_default=False)],
    width: Annotated[
        float,
        typer.Option("--width", help="Image width in pixels", min=0.0),
    ],
    height: Annotated[
        float,
        typer.Option("--height", help="Image height in pixels", min=0.0),
    ],
    threshold: Annotated[
        float,
        typer.Option(
            "--threshold",
            help="Snap distance in screen pixels",
            min=0.0,
            max=100.0,
        ),
    ] = 20.0,
    zoom: Annotated[
        float,
        typer.Option(
            "--zoom",
            "-z",
            help="Zoom factor (screen pixels per image pixel)",
            min=0.01,
        ),
    ] = 1.0,
    split: Annotated[
        bool,
        typer.Option(
            "--split",
            help="Treat the image as two stacked halves meeting at the midline",
        ),
    ] = False,
    snap_edge: Annotated[
        bool,
        typer.Option(
            "--snap-edge/--no-snap-edge",
            help="Snap to the image edges (off prints the point unchanged)",
        ),
    ] = True,
) -> None:
    """Snap a point onto the image edges and print the result as 'x, y'."""
    settings = PolyprobeSettings(
        snap=SnapConfig(
            snap_to_edge=snap_edge,
            snap_threshold_px=threshold,
            view_mode=ViewMode.SPLIT if split else ViewMode.SINGLE,
        )
    )
    snapped = place_point(Point(x, y), width, height, settings.snap, zoom)
    typer.echo(f"{snapped.x:g}, {snapped.y:g}")


@app.command()
def straighten(
    x0: Annotated[float, typer.Argument(help="Start x", show_default=False)],
    y0: Annotated[float, typer.Argument(help="Start y", show_default=False)],
    x1: Annotated[float, typer.Argument(help="End x", show_default=False)],
    y1: Annotated[float, typer.Argument(help="End y", show_default=False)],
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            "-t",
            help="Maximum angular distance (degrees) for snapping",
            min=0.0,
            max=180.0,
        ),
    ] = 22.5,
) -> None:
    """Snap a segment to the nearest multiple of 45 degrees and print the new end point."""
    config = SnapConfig(angle_tolerance=tolerance)
    end = straighten_line(
        Point(x0, y0),
        Point(x1, y1),
        config.snap_angles,
        config.angle_tolerance,
    )
    typer.echo(f"{end.x:.2f}, {end.y:.2f}")


def cli() -> None:
    """Entry point for the CLI."""
    app()


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
