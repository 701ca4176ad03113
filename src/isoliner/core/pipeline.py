"""Single-threshold contour pipeline and level selection.

This module ties the extraction stages together:
- extract_paths: field -> segments -> stitched paths -> closed paths
- select_thresholds: evenly spaced contour levels for a field
- renderable_paths: drop paths too short to draw
"""

from isoliner.core.closer import BoundaryCloser
from isoliner.core.extractor import SegmentExtractor
from isoliner.core.stitcher import PathStitcher
from isoliner.domain import Path, ScalarField


def extract_paths(
    field: ScalarField,
    threshold: float,
    close_boundaries: bool = True,
) -> list[Path]:
    """Extract the contour paths of a field at one threshold.

    The result is a pure, deterministic function of the field and the
    threshold.

    Args:
        field: Scalar field
        threshold: Contour level; samples strictly greater are inside
        close_boundaries: Close paths that run from border to border

    Returns:
        Paths in order of discovery

    Raises:
        TopologyContradictionError: If stitching finds ambiguous matches
    """
    segments = SegmentExtractor().extract(field, threshold)
    paths = PathStitcher(threshold=threshold).stitch(segments)
    if close_boundaries:
        BoundaryCloser(field).close(paths)
    return paths


def select_thresholds(field: ScalarField, count: int) -> list[float]:
    """Choose evenly spaced contour levels for a field.

    Levels start at the smallest sample and step by (max - min) / count,
    so the largest sample is never a level.

    Args:
        field: Scalar field
        count: Number of levels

    Returns:
        Ascending list of levels (empty for a flat field or count < 1)

    Examples:
        A field spanning 0..100 with count=4 yields [0.0, 25.0, 50.0, 75.0].
    """
    if count < 1:
        return []

    low = field.min_value
    high = field.max_value
    if high <= low:
        return []

    step = (high - low) / count
    return [low + step * i for i in range(count)]


def renderable_paths(paths: list[Path], min_points: int = 3) -> list[Path]:
    """Filter out paths with too few points to draw.

    Args:
        paths: Extracted paths
        min_points: Minimum number of points a path must have

    Returns:
        Paths with at least min_points points, in original order
    """
    return [path for path in paths if len(path) >= min_points]
