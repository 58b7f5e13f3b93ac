"""Batch processing orchestration for shape documents.

This module runs kernel operations over whole shape documents. Offsetting
treats every shape independently, so it can fan out over a
ProcessPoolExecutor; boolean operations act on the whole set at once.

Key components:
- Operation: The supported document operations
- process_offset: Top-level picklable function for parallel execution
- ShapeProcessor: Main orchestrator class for document processing
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from enum import Enum
from pathlib import Path
from typing import Any

from patterin.config import OffsetConfig, PatterinSettings
from patterin.core.boolean import BooleanOps
from patterin.core.offset import offset_outline
from patterin.domain import Shape
from patterin.exceptions import ProcessingCancelledError
from patterin.io import ShapeReader, ShapeWriter
from patterin.utils import ProcessingLogger, ProcessingStats, configure_logging


class Operation(str, Enum):
    """Document operations."""

    UNION = "union"
    DIFFERENCE = "difference"
    OFFSET = "offset"


def process_offset(
    shape_dict: dict[str, Any],
    distance: float,
    count: int,
    config_dict: dict[str, Any],
) -> dict[str, Any]:
    """Offset a single shape.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        shape_dict: Serialized shape (from Shape.to_dict())
        distance: Offset distance (positive = outward)
        count: 0 for a single offset outline, otherwise the number of
            successive offset copies
        config_dict: Serialized offset configuration

    Returns:
        Dictionary containing either:
        - Success: {"shapes": [shape_dict, ...], "duration_ms": float}
        - Error: {"error": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        shape = Shape.from_dict(shape_dict)
        config = OffsetConfig(**config_dict)

        results: list[Shape] = []
        current = shape
        for _ in range(max(count, 1)):
            current = offset_outline(current, distance, config=config)
            results.append(current)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "shapes": [s.to_dict() for s in results],
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class ShapeProcessor:
    """Orchestrates kernel operations over shape documents.

    Example:
        processor = ShapeProcessor(PatterinSettings())
        stats = processor.process(
            Operation.DIFFERENCE,
            input_path=Path("subjects.json"),
            clip_path=Path("clips.json"),
        )
    """

    def __init__(self, config: PatterinSettings, quiet: bool = False) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Patterin settings
            quiet: Suppress console log output
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.processing_logger = ProcessingLogger(self.logger)
        self.boolean = BooleanOps(config.geometry)

    @property
    def stats(self) -> ProcessingStats:
        return self.processing_logger.stats

    def union(self, shapes: Sequence[Shape]) -> list[Shape]:
        """Union all shapes and record the result."""
        start = time.time()
        result = self.boolean.union(shapes)
        self.processing_logger.log_boolean_result(
            Operation.UNION.value, len(shapes), len(result), (time.time() - start) * 1000
        )
        return result

    def difference(
        self, subjects: Sequence[Shape], clips: Sequence[Shape]
    ) -> list[Shape]:
        """Subtract clips from subjects and record the result."""
        start = time.time()
        result = self.boolean.difference(subjects, clips)
        self.processing_logger.log_boolean_result(
            Operation.DIFFERENCE.value,
            len(subjects) + len(clips),
            len(result),
            (time.time() - start) * 1000,
        )
        return result

    def offset(
        self,
        shapes: Sequence[Shape],
        distance: float,
        count: int = 0,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> list[Shape]:
        """Offset every shape independently.

        Args:
            shapes: Shapes to offset (not modified)
            distance: Offset distance (positive = outward)
            count: 0 for one outline per shape, otherwise successive copies
            max_workers: Worker processes (None = config; 1 runs inline)
            progress_callback: Optional callback(completed, total)

        Returns:
            Offset shapes, grouped by input order

        Raises:
            ProcessingCancelledError: If interrupted while worker processes run
        """
        if max_workers is None:
            max_workers = self.config.processing.max_workers

        config_dict = self.config.offset.model_dump()
        tasks = [s.to_dict() for s in shapes]
        results: dict[int, list[Shape]] = {}
        total = len(tasks)

        self.logger.info(
            "Starting offset",
            shape_count=total,
            distance=distance,
            count=count,
            max_workers=max_workers,
        )

        if max_workers == 1 or total <= 1:
            for index, task in enumerate(tasks):
                self._collect(index, process_offset(task, distance, count, config_dict), results)
                if progress_callback is not None:
                    progress_callback(index + 1, total)
        else:
            completed = 0
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                pending = {
                    executor.submit(process_offset, task, distance, count, config_dict): index
                    for index, task in enumerate(tasks)
                }
                try:
                    for future in as_completed(pending):
                        index = pending[future]
                        try:
                            self._collect(index, future.result(), results)
                        except Exception as e:
                            self.processing_logger.log_shape_error(
                                f"shape[{index}]", e, traceback.format_exc()
                            )
                        completed += 1
                        if progress_callback is not None:
                            progress_callback(completed, total)
                except KeyboardInterrupt:
                    self.logger.info("Cancellation requested by user")
                    not_done = [f for f in pending if not f.done()]
                    self.stats.was_cancelled = True
                    self.stats.cancelled_count = len(not_done)
                    executor.shutdown(wait=True, cancel_futures=True)
                    raise ProcessingCancelledError(completed, len(not_done)) from None

        return [shape for index in sorted(results) for shape in results[index]]

    def _collect(
        self, index: int, result: dict[str, Any], results: dict[int, list[Shape]]
    ) -> None:
        label = f"shape[{index}]"
        if "error" in result:
            self.processing_logger.log_shape_error(
                label, Exception(result["error"]), result.get("traceback")
            )
            return

        shapes = [Shape.from_dict(d) for d in result["shapes"]]
        results[index] = shapes
        self.processing_logger.log_shape_complete(
            label, len(shapes), result.get("duration_ms", 0.0)
        )

    def load(self, path: Path) -> list[Shape]:
        """Read a document, skipping ephemeral shapes unless configured."""
        with ShapeReader(path) as reader:
            shapes: list[Shape] = []
            for index, shape in enumerate(reader.iter_shapes()):
                if shape.ephemeral and not self.config.processing.include_ephemeral:
                    self.processing_logger.log_shape_skipped(f"shape[{index}]", "ephemeral")
                    continue
                violations = shape.validate(self.config.geometry.vector_epsilon)
                self.processing_logger.log_validation(
                    f"shape[{index}]", [v.message for v in violations]
                )
                shapes.append(shape)
        return shapes

    def process(
        self,
        operation: Operation,
        input_path: Path,
        output_path: Path | None = None,
        clip_path: Path | None = None,
        distance: float = 0.0,
        count: int = 0,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> tuple[list[Shape], ProcessingStats]:
        """Run an operation on a document and optionally save the result.

        Args:
            operation: Operation to run
            input_path: Document with the input (or subject) shapes
            output_path: Where to write results (not written if None)
            clip_path: Document with clip shapes (difference only)
            distance: Offset distance (offset only)
            count: Number of successive offset copies (offset only)
            max_workers: Worker processes for offsetting
            progress_callback: Optional callback(completed, total) for offsetting

        Returns:
            Result shapes and the run statistics

        Raises:
            FileNotFoundError: If an input document does not exist
            DocumentError: If a document cannot be read or written
            ValueError: If difference is requested without a clip document
        """
        stats = self.stats
        stats.start_time = time.time()

        self.logger.info(
            "Starting processing",
            operation=operation.value,
            input=str(input_path),
            output=str(output_path) if output_path else None,
        )

        shapes = self.load(input_path)

        if operation is Operation.UNION:
            result = self.union(shapes)
        elif operation is Operation.DIFFERENCE:
            if clip_path is None:
                raise ValueError("Difference requires a clip document")
            result = self.difference(shapes, self.load(clip_path))
        else:
            result = self.offset(
                shapes,
                distance,
                count=count,
                max_workers=max_workers,
                progress_callback=progress_callback,
            )

        if output_path is not None:
            written = ShapeWriter(output_path).save(result)
            self.logger.info("Shapes saved", output=str(output_path), shapes=written)

        stats.end_time = time.time()
        self.logger.info(
            "Processing complete",
            operation=operation.value,
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            outputs=len(result),
            duration_seconds=round(stats.duration_seconds, 2),
            avg_shape_ms=round(stats.avg_shape_time_ms, 2) if stats.avg_shape_time_ms else None,
        )

        return result, stats
