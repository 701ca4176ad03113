"""Geometric operations for cell edge crossings.

This module provides the mathematical utilities used by cell
classification:
- Crossing parameter along an edge (linear interpolation)
- Edge endpoints and edge points for a cell
- Raw anchor / interpolated endpoint construction
- Field corner positions for boundary closing

All functions are pure, stateless, and designed for use in parallel processing.
"""

from isoliner.domain import Edge, PathPoint, Point

MIDPOINT = 0.5


def crossing_t(threshold: float, v0: float, v1: float) -> float:
    """Calculate where the threshold crosses an edge between two samples.

    Args:
        threshold: Contour level
        v0: Sample at the edge's origin corner
        v1: Sample at the edge's far corner

    Returns:
        Fraction of the edge length from the origin corner, in [0, 1]
        whenever the threshold separates the two samples

    Examples:
        >>> crossing_t(5.0, 3.0, 7.0)
        0.5
        >>> crossing_t(5.0, 7.0, 3.0)
        0.5
        >>> crossing_t(4.0, 0.0, 8.0)
        0.5
    """
    return (threshold - v0) / (v1 - v0)


def edge_point(x: int, y: int, edge: Edge, t: float) -> Point:
    """Get the point at fraction t along one edge of a cell.

    Top and bottom edges are measured from their left corner, left and
    right edges from their top corner.

    Args:
        x: Column of the cell's top-left sample
        y: Row of the cell's top-left sample
        edge: Cell edge
        t: Fraction along the edge

    Returns:
        Point on the edge

    Examples:
        >>> edge_point(0, 0, Edge.BOTTOM, 0.25)
        Point(x=0.25, y=1.0)
        >>> edge_point(2, 3, Edge.RIGHT, 0.5)
        Point(x=3.0, y=3.5)
    """
    if edge is Edge.TOP:
        return Point(x + t, float(y))
    if edge is Edge.BOTTOM:
        return Point(x + t, y + 1.0)
    if edge is Edge.LEFT:
        return Point(float(x), y + t)
    return Point(x + 1.0, y + t)


def edge_samples(
    edge: Edge, corners: tuple[float, float, float, float]
) -> tuple[float, float]:
    """Get the two samples bounding an edge, in measuring order.

    Args:
        edge: Cell edge
        corners: (top_left, top_right, bottom_left, bottom_right)

    Returns:
        Tuple of (origin sample, far sample)
    """
    top_left, top_right, bottom_left, bottom_right = corners
    if edge is Edge.TOP:
        return (top_left, top_right)
    if edge is Edge.BOTTOM:
        return (bottom_left, bottom_right)
    if edge is Edge.LEFT:
        return (top_left, bottom_left)
    return (top_right, bottom_right)


def crossing_point(
    threshold: float,
    x: int,
    y: int,
    edge: Edge,
    corners: tuple[float, float, float, float],
) -> PathPoint:
    """Build the endpoint where the contour crosses a cell edge.

    The raw anchor is the edge midpoint; the interpolated position is the
    linear threshold crossing between the edge's two samples.

    Args:
        threshold: Contour level
        x: Column of the cell's top-left sample
        y: Row of the cell's top-left sample
        edge: Crossed cell edge
        corners: (top_left, top_right, bottom_left, bottom_right)

    Returns:
        PathPoint for the crossing
    """
    v0, v1 = edge_samples(edge, corners)
    t = crossing_t(threshold, v0, v1)
    return PathPoint(
        raw=edge_point(x, y, edge, MIDPOINT),
        interpolated=edge_point(x, y, edge, t),
    )


def field_corners(width: int, height: int) -> dict[Edge, Point]:
    """Get the field corner reached at the clockwise end of each border edge.

    Walking clockwise with y pointing down, the top edge ends at the
    top-right corner, the right edge at the bottom-right corner, and so on.

    Args:
        width: Field width in samples
        height: Field height in samples

    Returns:
        Mapping from border edge to the corner that ends it
    """
    right = float(width - 1)
    bottom = float(height - 1)
    return {
        Edge.TOP: Point(right, 0.0),
        Edge.RIGHT: Point(right, bottom),
        Edge.BOTTOM: Point(0.0, bottom),
        Edge.LEFT: Point(0.0, 0.0),
    }
