"""CLI application entry point for patterin.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from patterin import __version__
from patterin.cli.output import (
    console,
    create_progress,
    print_cancellation_summary,
    print_document_info,
    print_error,
    print_header,
    print_path_data,
    print_processing_info,
    print_shape_table,
    print_step,
    print_success,
    print_violations,
)
from patterin.config import (
    LoggingConfig,
    OffsetConfig,
    PatterinSettings,
    ProcessingConfig,
)
from patterin.core import Operation, ShapeProcessor
from patterin.exceptions import (
    DocumentFormatError,
    DocumentLoadError,
    DocumentSaveError,
    PatterinError,
    ProcessingCancelledError,
)
from patterin.io import ShapeReader

# Create the Typer app
app = typer.Typer(
    name="patterin",
    help="Combine, offset and inspect 2D polygon shapes stored as JSON documents.",
    add_completion=False,
    no_args_is_help=True,
)

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write results to a JSON document instead of printing path data",
    ),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]
QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Minimal console output",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Patterin[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """Combine, offset and inspect 2D polygon shapes."""


@app.command()
def union(
    input_doc: Annotated[
        Path,
        typer.Argument(help="Shape document to merge", show_default=False),
    ],
    output: OutputOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Merge every shape in a document into the outlines of their combined area.

    Example:
        patterin union tiles.json -o merged.json
    """
    _run(
        Operation.UNION,
        input_doc,
        output=output,
        settings=_build_settings(log_file, log_level, quiet),
        quiet=quiet,
    )


@app.command()
def difference(
    subjects: Annotated[
        Path,
        typer.Argument(help="Shape document to cut from", show_default=False),
    ],
    clips: Annotated[
        Path,
        typer.Argument(help="Shape document with the shapes to remove", show_default=False),
    ],
    output: OutputOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Subtract the shapes in CLIPS from the shapes in SUBJECTS.

    Clips strictly inside a subject come back as clockwise hole shapes.

    Example:
        patterin difference plate.json holes.json -o cut.json
    """
    _run(
        Operation.DIFFERENCE,
        subjects,
        output=output,
        clip_path=clips,
        settings=_build_settings(log_file, log_level, quiet),
        quiet=quiet,
    )


@app.command()
def offset(
    input_doc: Annotated[
        Path,
        typer.Argument(help="Shape document to offset", show_default=False),
    ],
    distance: Annotated[
        float,
        typer.Option(
            "--distance",
            "-d",
            help="Offset distance (positive grows, negative shrinks)",
        ),
    ],
    miter_limit: Annotated[
        float,
        typer.Option(
            "--miter-limit",
            "-m",
            help="Corners whose miter exceeds distance x limit are bevelled",
            min=1.0,
        ),
    ] = 4.0,
    count: Annotated[
        int,
        typer.Option(
            "--count",
            "-n",
            help="Number of successive offset copies per shape (0 = single outline)",
            min=0,
        ),
    ] = 0,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    output: OutputOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Offset the outline of every shape in a document.

    Example:
        patterin offset outline.json --distance 2.5 --count 3
    """
    settings = _build_settings(log_file, log_level, quiet)
    settings.offset = OffsetConfig(miter_limit=miter_limit)
    settings.processing = ProcessingConfig(max_workers=workers)

    _run(
        Operation.OFFSET,
        input_doc,
        output=output,
        settings=settings,
        quiet=quiet,
        distance=distance,
        count=count,
        workers=workers,
    )


@app.command()
def info(
    input_doc: Annotated[
        Path,
        typer.Argument(help="Shape document to inspect", show_default=False),
    ],
) -> None:
    """Show winding, area, centroid, bounds and invariant violations per shape."""
    _check_input(input_doc)

    try:
        with ShapeReader(input_doc) as reader:
            shapes = reader.read_all()
    except DocumentFormatError as e:
        print_error(f"Invalid shape document: {e.details}")
        raise typer.Exit(code=1)
    except DocumentLoadError as e:
        print_error(f"Could not load shapes: {e.reason}")
        raise typer.Exit(code=1)

    print_document_info(str(input_doc), len(shapes))
    if shapes:
        print_shape_table(shapes)
        print_violations(shapes)


def _build_settings(log_file: Path | None, log_level: str, quiet: bool) -> PatterinSettings:
    return PatterinSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )


def _check_input(path: Path) -> None:
    """Exit with an error unless path is an existing file."""
    if not path.exists():
        print_error(
            f"Input file not found: {path}",
            details=f"The file '{path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not path.is_file():
        print_error(
            f"Input path is not a file: {path}",
            details="Please provide a path to a JSON shape document.",
        )
        raise typer.Exit(code=1)


def _run(
    operation: Operation,
    input_doc: Path,
    output: Path | None,
    settings: PatterinSettings,
    quiet: bool,
    clip_path: Path | None = None,
    distance: float = 0.0,
    count: int = 0,
    workers: int | None = None,
) -> None:
    """Run a document operation and report the outcome."""
    _check_input(input_doc)
    if clip_path is not None:
        _check_input(clip_path)

    if not quiet:
        print_header(__version__)
        print_step(f"Running {operation.value}")

    processor = ShapeProcessor(settings, quiet=quiet)

    try:
        try:
            if operation is Operation.OFFSET and not quiet:
                actual_workers = workers if workers else os.cpu_count() or 1
                print_processing_info(actual_workers, is_auto=(workers is None))

                with create_progress() as progress:
                    task_id = progress.add_task("Offsetting", total=None)

                    def update_progress(completed: int, total: int) -> None:
                        progress.update(task_id, completed=completed, total=total)

                    shapes, stats = processor.process(
                        operation,
                        input_path=input_doc,
                        output_path=output,
                        distance=distance,
                        count=count,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                shapes, stats = processor.process(
                    operation,
                    input_path=input_doc,
                    output_path=output,
                    clip_path=clip_path,
                    distance=distance,
                    count=count,
                    max_workers=workers,
                )
        except (KeyboardInterrupt, ProcessingCancelledError):
            if not quiet:
                print_cancellation_summary(
                    processed=processor.stats.processed_count,
                    cancelled=processor.stats.cancelled_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if output is None:
            print_path_data(shapes)
        elif not quiet:
            print_success(
                total_time_s=stats.duration_seconds,
                inputs=stats.processed_count,
                outputs=len(shapes),
                errors=stats.error_count,
                output_path=str(output),
            )

        if stats.error_count:
            raise typer.Exit(code=1)

    except DocumentFormatError as e:
        print_error(f"Invalid shape document: {e.details}")
        raise typer.Exit(code=1)
    except DocumentLoadError as e:
        print_error(f"Could not load shapes: {e.reason}")
        raise typer.Exit(code=1)
    except DocumentSaveError as e:
        print_error(f"Could not save shapes: {e.reason}")
        raise typer.Exit(code=1)
    except PatterinError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
