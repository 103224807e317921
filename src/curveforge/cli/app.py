"""CLI application entry point for curveforge.

This module provides the main CLI interface using Typer.
"""

import json
from pathlib import Path
from typing import Annotated, Any, get_args

import typer

from curveforge import __version__
from curveforge.cli.output import (
    console,
    create_progress,
    print_error,
    print_header,
    print_input_info,
    print_results_table,
    print_step,
    print_success,
)
from curveforge.config import CurveForgeSettings, FittingConfig, LoggingConfig, LogLevel
from curveforge.core import CurveProcessor, CurveResult, build_ribbon, signed_area
from curveforge.core.derived import contour_polygon
from curveforge.exceptions import CurveForgeError, PointFileError
from curveforge.io import PointReader

# Create the Typer app
app = typer.Typer(
    name="curveforge",
    help="Fit smooth Hobby curves through point lists and inspect the result.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]curveforge[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def fit(
    points_file: Annotated[
        Path,
        typer.Argument(
            help="Path to a JSON or CSV point file",
            show_default=False,
        ),
    ],
    closed: Annotated[
        bool,
        typer.Option(
            "--closed",
            "-c",
            help="Close curves that do not say otherwise",
        ),
    ] = False,
    tension: Annotated[
        float,
        typer.Option(
            "--tension",
            "-t",
            help="Default tension (clamped to 0.5-2.0)",
        ),
    ] = 1.0,
    curl: Annotated[
        float,
        typer.Option(
            "--curl",
            help="Endpoint curl for open curves (clamped to 0-4)",
        ),
    ] = 1.0,
    samples: Annotated[
        int,
        typer.Option(
            "--samples",
            "-n",
            help="Number of sampled positions in JSON output",
            min=2,
        ),
    ] = 50,
    ribbon_width: Annotated[
        float | None,
        typer.Option(
            "--ribbon-width",
            "-w",
            help="Also build a ribbon of this width (JSON output)",
        ),
    ] = None,
    intersections: Annotated[
        bool,
        typer.Option(
            "--intersections",
            "-x",
            help="Report self-intersections",
        ),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print results as JSON instead of a table",
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
    """Fit a Hobby curve through every point set in a file.

    Point files are JSON (a list of [x, y] pairs, or {"curves": [...]}) or
    plain text with one "x,y" pair per line and blank lines between curves.

    Example:
        curveforge points.json --closed --intersections
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if log_level.upper() not in get_args(LogLevel):
        print_error(f"Unknown log level: {log_level}")
        raise typer.Exit(code=1)

    if not points_file.is_file():
        print_error(
            f"Input file not found: {points_file}",
            details=f"The file '{points_file}' does not exist or is not a file.",
        )
        raise typer.Exit(code=1)

    # JSON output owns stdout
    show_progress = not quiet and not as_json

    if show_progress:
        print_header(__version__)

    try:
        settings = CurveForgeSettings(
            fitting=FittingConfig().model_copy(update={"tension": tension, "curl": curl}),
            logging=LoggingConfig(
                log_file=log_file,
                log_level="DEBUG" if verbose else log_level,
            ),
        )

        if show_progress:
            print_step("Reading points")

        point_sets = PointReader(points_file, closed=closed).read()

        if show_progress:
            print_input_info(
                path=str(points_file),
                curve_count=len(point_sets),
                point_count=sum(len(s.points) for s in point_sets),
            )
            print_step("Fitting")

        processor = CurveProcessor(settings, quiet=quiet or as_json)

        if show_progress:
            with create_progress() as progress:
                task_id = progress.add_task("Fitting", total=len(point_sets))

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                results, stats = processor.process(
                    point_sets,
                    find_intersections=intersections,
                    progress_callback=update_progress,
                )
        else:
            results, stats = processor.process(point_sets, find_intersections=intersections)

        if as_json:
            payload = [_result_payload(r, samples, ribbon_width) for r in results]
            typer.echo(json.dumps(payload, indent=2))
        elif not quiet:
            print_results_table(results, show_intersections=intersections)
            print_success(
                total_time_s=stats.duration_seconds,
                fitted=stats.fitted_count,
                errors=stats.error_count,
                avg_time_ms=stats.avg_fit_time_ms,
            )

    except PointFileError as e:
        print_error(f"Could not read points: {e.reason}")
        raise typer.Exit(code=1)
    except CurveForgeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if stats.error_count:
        raise typer.Exit(code=1)


def _result_payload(
    result: CurveResult, samples: int, ribbon_width: float | None
) -> dict[str, Any]:
    """Build the JSON document for one curve.

    Args:
        result: Batch result for the curve
        samples: Number of uniformly spaced positions to include
        ribbon_width: Ribbon width, or None to skip the ribbon

    Returns:
        JSON-serializable dictionary
    """
    if result.contour is None:
        return {"name": result.name, "error": result.error}

    contour = result.contour
    payload: dict[str, Any] = {
        "name": result.name,
        "closed": contour.closed,
        "segments": contour.segment_count,
        "length": result.length,
        "bounding_box": list(contour.bounding_box()),
        "contour": contour.to_dict(),
        "samples": [
            list(contour.position(i / (samples - 1)).to_tuple()) for i in range(samples)
        ],
    }
    if contour.closed:
        # Positive for counter-clockwise curves, whose normals point inwards
        payload["area"] = signed_area(contour_polygon(contour))
    if result.self_intersections:
        payload["self_intersections"] = [
            {"t_a": c.t_a, "t_b": c.t_b, "point": list(c.point.to_tuple())}
            for c in result.self_intersections
        ]
    if ribbon_width is not None:
        ribbon = build_ribbon(contour, ribbon_width, samples)
        payload["ribbon"] = {
            "left": [list(p.to_tuple()) for p in ribbon.left],
            "right": [list(p.to_tuple()) for p in ribbon.right],
        }
    return payload


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
