"""Batch simplification of zone documents.

This module applies polygon simplification to every zone of a document,
optionally spreading the work over worker processes with
ProcessPoolExecutor.

Key components:
- simplify_shape: Top-level picklable function for parallel execution
- ZoneProcessor: Orchestrator collecting results and statistics
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

import structlog

from polyprobe.config import PolyprobeSettings
from polyprobe.core.simplifier import simplify_polygon
from polyprobe.domain import Shape
from polyprobe.utils import ProcessingLogger, ProcessingStats


def simplify_shape(shape_dict: dict[str, Any], tolerance: float) -> dict[str, Any]:
    """Simplify a single serialized shape.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        shape_dict: Serialized shape (from Shape.to_dict())
        tolerance: Simplification tolerance in pixels

    Returns:
        Dictionary containing either:
        - Success: {"shape": shape_dict, "before": int, "after": int, "duration_ms": float}
        - Error: {"error": str, "shape_id": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        shape = Shape.from_dict(shape_dict)
        result = simplify_polygon(shape.points, tolerance)
        duration_ms = (time.time() - start_time) * 1000
        return {
            "shape": shape.with_points(result.points).to_dict(),
            "before": result.original_count,
            "after": result.simplified_count,
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "shape_id": shape_dict.get("id", "unknown"),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class ZoneProcessor:
    """Simplifies every closed polygon of a zone document.

    Shapes that are not closed polygons are passed through unchanged and
    counted as skipped. Output order always matches input order.

    Example:
        processor = ZoneProcessor(PolyprobeSettings())
        shapes, stats = processor.simplify_all(shapes, tolerance=2.0)
    """

    def __init__(self, config: PolyprobeSettings) -> None:
        """Initialize the processor.

        Args:
            config: Settings providing the default tolerance and worker count
        """
        self.config = config
        self.logger = structlog.get_logger(__name__)
        self.processing_logger = ProcessingLogger(self.logger)

    def _record(self, shape_id: str, outcome: dict[str, Any]) -> Shape | None:
        if "error" in outcome:
            self.processing_logger.log_shape_error(
                shape_id, RuntimeError(outcome["error"]), outcome.get("traceback")
            )
            return None

        self.processing_logger.log_shape_complete(
            shape_id,
            points_before=outcome["before"],
            points_after=outcome["after"],
            duration_ms=outcome["duration_ms"],
        )
        return Shape.from_dict(outcome["shape"])

    def simplify_all(
        self,
        shapes: Sequence[Shape],
        tolerance: float | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> tuple[list[Shape], ProcessingStats]:
        """Simplify all eligible shapes.

        Args:
            shapes: Shapes to simplify
            tolerance: Tolerance in pixels (defaults to the configured one)
            max_workers: Worker processes (defaults to the configured count;
                1 runs in-process)
            progress_callback: Optional callback(completed, total)

        Returns:
            Tuple of (shapes in input order, statistics). Shapes that failed
            to simplify are returned unchanged.
        """
        if tolerance is None:
            tolerance = self.config.simplifier.tolerance
        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.processing_logger = ProcessingLogger(self.logger)
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        output: list[Shape] = list(shapes)
        pending: dict[int, Shape] = {}
        for index, shape in enumerate(shapes):
            if shape.is_closed_area:
                pending[index] = shape
            else:
                self.processing_logger.log_shape_skipped(shape.id, "not a closed polygon")

        self.logger.info(
            "Starting zone simplification",
            shapes=len(shapes),
            to_process=len(pending),
            tolerance=tolerance,
            max_workers=max_workers,
        )

        total = len(pending)
        completed = 0

        if max_workers == 1:
            for index, shape in pending.items():
                self.processing_logger.log_shape_start(shape.id)
                simplified = self._record(shape.id, simplify_shape(shape.to_dict(), tolerance))
                if simplified is not None:
                    output[index] = simplified
                completed += 1
                if progress_callback:
                    progress_callback(completed, total)
        elif pending:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                futures = {
                    executor.submit(simplify_shape, shape.to_dict(), tolerance): index
                    for index, shape in pending.items()
                }
                for future in as_completed(futures):
                    index = futures[future]
                    simplified = self._record(pending[index].id, future.result())
                    if simplified is not None:
                        output[index] = simplified
                    completed += 1
                    if progress_callback:
                        progress_callback(completed, total)

        stats.end_time = time.time()
        self.logger.info(
            "Zone simplification complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            points_removed=stats.points_removed,
        )
        return output, stats
