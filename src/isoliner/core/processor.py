"""Parallel processing orchestration for the contour pipeline.

This module coordinates the full image-to-SVG workflow, extracting each
contour level in its own worker via ProcessPoolExecutor. Levels share no
state, so a failure at one threshold never affects another.

Key components:
- process_threshold: Top-level picklable function for parallel execution
- ContourProcessor: Main orchestrator class for image processing
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from isoliner.config import IsolinerSettings
from isoliner.core.pipeline import extract_paths, renderable_paths, select_thresholds
from isoliner.domain import Path as ContourPath
from isoliner.domain import ScalarField
from isoliner.exceptions import ProcessingCancelledError, TopologyContradictionError
from isoliner.io import FieldReader, SvgWriter
from isoliner.io.converter import level_color
from isoliner.utils import ProcessingLogger, ProcessingStats, configure_logging


def process_threshold(
    field_dict: dict[str, Any],
    threshold: float,
    close_boundaries: bool = True,
) -> dict[str, Any]:
    """Extract the contour paths of one threshold.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the field, runs the pipeline, and returns the result.

    Args:
        field_dict: Serialized field (from ScalarField.to_dict())
        threshold: Contour level
        close_boundaries: Close paths that run from border to border

    Returns:
        Dictionary containing either:
        - Success: {"threshold": float, "paths": list, "duration_ms": float}
        - Error: {"threshold": float, "error": str, "error_type": str,
          "diagnostic": dict | None, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        field = ScalarField.from_dict(field_dict)
        paths = extract_paths(field, threshold, close_boundaries=close_boundaries)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "threshold": threshold,
            "paths": [p.to_dict() for p in paths],
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        diagnostic = e.diagnostic() if isinstance(e, TopologyContradictionError) else None
        return {
            "threshold": threshold,
            "error": str(e),
            "error_type": type(e).__name__,
            "diagnostic": diagnostic,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class ContourProcessor:
    """Orchestrates parallel contour extraction for an image.

    Manages the complete workflow:
    1. Load the image and sample it into a scalar field
    2. Choose contour levels (explicit or evenly spaced)
    3. Extract each level in parallel using worker processes
    4. Collect results and update statistics
    5. Render the levels to an SVG file

    Example:
        settings = IsolinerSettings()
        processor = ContourProcessor(settings)
        stats = processor.process(
            image_path=Path("heightmap.tif"),
            output_path=Path("heightmap-contours.svg"),
            max_workers=4
        )
    """

    def __init__(self, config: IsolinerSettings) -> None:
        """Initialize contour processor with configuration.

        Args:
            config: Isoliner settings containing contour, render and processing config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def load_field(self, image_path: Path) -> ScalarField:
        """Decode an image into a scalar field.

        Args:
            image_path: Path to input image

        Returns:
            Sampled ScalarField

        Raises:
            FileNotFoundError: If the image does not exist
            ImageLoadError: If the image cannot be decoded
        """
        with FieldReader(image_path, self.config.processing.sample_mode) as reader:
            field = reader.read_field()

        self.processing_logger.log_field_summary(
            width=field.width,
            height=field.height,
            cells=field.cell_count,
            min_value=field.min_value,
            max_value=field.max_value,
        )
        return field

    def thresholds_for(self, field: ScalarField) -> list[float]:
        """Determine the contour levels to extract.

        Args:
            field: Scalar field

        Returns:
            Explicit thresholds from config in first-seen order without
            repeats, or evenly spaced levels
        """
        explicit = self.config.contour.thresholds
        if explicit:
            return list(dict.fromkeys(explicit))
        return select_thresholds(field, self.config.contour.levels)

    def process(
        self,
        image_path: Path,
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, float, bool], None] | None = None,
    ) -> ProcessingStats:
        """Process an image into an SVG of contour paths.

        Args:
            image_path: Path to input image
            output_path: Path for output SVG (auto-generated if None)
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, threshold, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            FileNotFoundError: If the image does not exist
            ImageLoadError: If the image cannot be decoded
            OutputWriteError: If the SVG cannot be written
            ProcessingCancelledError: If processing is cancelled by user
        """
        self.processing_logger = ProcessingLogger(self.logger)
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        if output_path is None:
            output_path = SvgWriter.get_output_path(image_path)

        self.logger.info(
            "Starting contour processing",
            input=str(image_path),
            output=str(output_path),
            max_workers=max_workers,
        )

        field = self.load_field(image_path)
        thresholds = self.thresholds_for(field)

        if not thresholds:
            self.logger.warning("No contour levels to extract", min=field.min_value)

        # Levels outside [min, max) cannot cross any cell
        active: list[float] = []
        for threshold in thresholds:
            if field.min_value <= threshold < field.max_value:
                active.append(threshold)
            else:
                self.processing_logger.log_threshold_skipped(threshold, "outside field range")

        results = self.extract_levels(
            field=field,
            thresholds=active,
            max_workers=max_workers,
            progress_callback=progress_callback,
        )

        self._save_svg(field, thresholds, results, output_path)

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            paths=stats.path_count,
            closed=stats.closed_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def extract_levels(
        self,
        field: ScalarField,
        thresholds: list[float],
        max_workers: int | None,
        progress_callback: Callable[[int, int, float, bool], None] | None = None,
    ) -> dict[float, list[ContourPath]]:
        """Extract every threshold in parallel using ProcessPoolExecutor.

        Args:
            field: Scalar field
            thresholds: Contour levels
            max_workers: Maximum worker processes
            progress_callback: Optional callback(completed, total, threshold, success)
                for progress updates

        Returns:
            Dictionary mapping each successful threshold to its paths

        Raises:
            ProcessingCancelledError: If processing is cancelled by user
        """
        extracted: dict[float, list[ContourPath]] = {}
        if not thresholds:
            return extracted

        field_dict = field.to_dict()
        close_boundaries = self.config.contour.close_boundaries
        stats = self.processing_logger.stats

        self.logger.info(
            "Starting parallel extraction",
            threshold_count=len(thresholds),
            max_workers=max_workers,
        )

        total = len(thresholds)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for threshold in thresholds:
                self.processing_logger.log_threshold_start(threshold)
                future = executor.submit(
                    process_threshold,
                    field_dict,
                    threshold,
                    close_boundaries,
                )
                pending_futures[future] = threshold

            try:
                for future in as_completed(pending_futures):
                    threshold = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()

                        if "error" in result:
                            self.processing_logger.log_threshold_error(
                                threshold=threshold,
                                error=result["error"],
                                error_type=result["error_type"],
                                traceback=result.get("traceback"),
                                diagnostic=result.get("diagnostic"),
                            )
                        else:
                            success = True
                            paths = [ContourPath.from_dict(p) for p in result["paths"]]
                            extracted[threshold] = paths
                            self.processing_logger.log_threshold_complete(
                                threshold=threshold,
                                path_count=len(paths),
                                closed_count=sum(1 for p in paths if p.closed),
                                duration_ms=result.get("duration_ms", 0.0),
                            )

                    except Exception as e:
                        # Executor-level error
                        self.processing_logger.log_threshold_error(
                            threshold=threshold,
                            error=str(e),
                            error_type=type(e).__name__,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, threshold, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise ProcessingCancelledError(
                    processed_count=stats.processed_count,
                    pending_count=stats.cancelled_count,
                ) from None

        return extracted

    def _save_svg(
        self,
        field: ScalarField,
        thresholds: list[float],
        extracted: dict[float, list[ContourPath]],
        output_path: Path,
    ) -> None:
        """Render the extracted levels to an SVG file, lowest level first.

        Args:
            field: Scalar field the levels were extracted from
            thresholds: All requested contour levels
            extracted: Paths of each successful level
            output_path: Path to save the SVG
        """
        render = self.config.render
        min_points = self.config.contour.min_points
        writer = SvgWriter(field.width, field.height, render)

        ordered = sorted(extracted)
        for index, threshold in enumerate(ordered):
            paths = renderable_paths(extracted[threshold], min_points=min_points)
            dropped = len(extracted[threshold]) - len(paths)
            if dropped:
                self.logger.debug(
                    "Dropped short paths",
                    threshold=threshold,
                    dropped=dropped,
                    min_points=min_points,
                )
            stroke = level_color(index, len(ordered)) if render.colored else "black"
            writer.add_level(threshold, paths, stroke=stroke)

        writer.save(output_path)

        self.logger.info(
            "SVG saved",
            output=str(output_path),
            levels=len(ordered),
            requested_levels=len(thresholds),
            path_elements=writer.path_count,
        )
