"""Core processing algorithms for isoliner.

This module contains the core algorithms for:

- Edge crossing geometry (linear interpolation, raw anchors)
- Cell classification (case ids, saddle resolution, segment emission)
- Segment extraction over a whole field
- Path stitching by raw anchor identity
- Boundary closing of border-to-border paths

All services are designed to be:
- Stateless or single-run (safe for use in worker processes)
- Pure (output depends only on field and threshold)
- Deterministic (identical input yields identical path order)

Key functions:
- classify: 4-bit case id of a cell
- segments_for: Crossing segments of a classified cell
- extract_paths: Full single-threshold pipeline
- select_thresholds: Evenly spaced contour levels

Key classes:
- SegmentExtractor: Walks every cell of a field
- PathStitcher: Merges segments into open and closed paths
- BoundaryCloser: Closes paths against the field border
- ContourProcessor: Parallel image-to-SVG orchestration
"""

from isoliner.core.classifier import classify, classify_cell, resolve_case, segments_for
from isoliner.core.closer import BoundaryCloser
from isoliner.core.extractor import SegmentExtractor, extract_segments
from isoliner.core.geometry import crossing_point, crossing_t, edge_point
from isoliner.core.pipeline import extract_paths, renderable_paths, select_thresholds
from isoliner.core.processor import ContourProcessor, process_threshold
from isoliner.core.stitcher import PathStitcher, stitch_segments

__all__ = [
    # Pipeline classes
    "BoundaryCloser",
    "ContourProcessor",
    "PathStitcher",
    "SegmentExtractor",
    # Classification functions
    "classify",
    "classify_cell",
    # Geometry functions
    "crossing_point",
    "crossing_t",
    "edge_point",
    # Pipeline functions
    "extract_paths",
    "extract_segments",
    "process_threshold",
    "renderable_paths",
    "resolve_case",
    "segments_for",
    "select_thresholds",
    "stitch_segments",
]
