"""Domain models for isoliner.

This module contains the core domain models representing scalar fields,
classified cells, crossing segments and stitched paths. All models are
designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of image decoding and rendering details

Key classes:
- Point: A 2D point compared by exact equality
- PathPoint: Raw anchor plus interpolated position of one endpoint
- Segment: A directed crossing segment from one cell
- Path: An open or closed stitched contour
- Cell: A classified 2x2 cell
- ScalarField: The sampled grid
"""

from isoliner.domain.cell import Cell, CellCase, Edge
from isoliner.domain.field import ScalarField
from isoliner.domain.path import Path, PathPoint, Point, Segment

__all__: list[str] = [
    # Enums
    "CellCase",
    "Edge",
    # Core types
    "Point",
    "PathPoint",
    "Segment",
    "Path",
    "Cell",
    "ScalarField",
]
