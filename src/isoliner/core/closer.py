"""Boundary closing for open contour paths.

An open path whose two ends both lie on the field's outer rectangle is
turned into a fillable polygon by walking the rectangle clockwise (y
pointing down) from the path's end back to its start, adding every field
corner passed on the way.

Border membership uses fixed limits derived from the edge-midpoint anchor
convention: left x <= 0.5, top y <= 0.5, right x >= width - 1, bottom
y >= height - 1. An anchor near a field corner can pass two tests; it is
assigned to the border line it is closest to.
"""

from isoliner.core.geometry import field_corners
from isoliner.domain import Edge, Path, PathPoint, Point, ScalarField

BORDER_LIMIT = 0.5


class BoundaryCloser:
    """Closes open paths that start and end on the field border.

    Paths with only one end (or neither) on the border are left open.

    Example:
        closer = BoundaryCloser(field)
        paths = closer.close(paths)
    """

    def __init__(self, field: ScalarField) -> None:
        """Initialize the closer for a field's outer rectangle.

        Args:
            field: Field whose border the paths are closed against
        """
        self.width = field.width
        self.height = field.height
        self._corners = field_corners(field.width, field.height)

    def border_edge(self, point: Point) -> Edge | None:
        """Determine which border of the field a raw anchor lies on.

        Args:
            point: Raw anchor

        Returns:
            Border edge, or None if the point is interior
        """
        right = self.width - 1
        bottom = self.height - 1

        candidates: list[tuple[float, Edge]] = []
        if point.x <= BORDER_LIMIT:
            candidates.append((point.x, Edge.LEFT))
        if point.y <= BORDER_LIMIT:
            candidates.append((point.y, Edge.TOP))
        if point.x >= right:
            candidates.append((point.x - right, Edge.RIGHT))
        if point.y >= bottom:
            candidates.append((point.y - bottom, Edge.BOTTOM))

        if not candidates:
            return None
        return min(candidates, key=lambda c: abs(c[0]))[1]

    def corners_between(self, begin: Edge, end: Edge) -> list[Point]:
        """Get the field corners passed walking clockwise from end to begin.

        Args:
            begin: Border edge holding the path's first point
            end: Border edge holding the path's last point

        Returns:
            Corners in walking order (empty when both ends share an edge)

        Examples:
            Left to top on a 4x4 field adds top-right, bottom-right and
            bottom-left; left to right adds bottom-right and bottom-left.
        """
        corners: list[Point] = []
        edge = end
        while edge is not begin:
            corners.append(self._corners[edge])
            edge = edge.next_clockwise()
        return corners

    def close_path(self, path: Path) -> bool:
        """Close a single open path against the border, if possible.

        The path is closed by appending the corners walked and then its
        first point again.

        Args:
            path: Path to close (modified in place)

        Returns:
            True if the path was closed by this call
        """
        if path.closed or len(path) < 2:
            return False

        begin = self.border_edge(path.head.raw)
        end = self.border_edge(path.tail.raw)
        if begin is None or end is None:
            return False

        for corner in self.corners_between(begin, end):
            path.append(PathPoint.fixed(corner))
        path.append(path.head)
        path.closed = True
        return True

    def close(self, paths: list[Path]) -> list[Path]:
        """Close every eligible open path.

        Args:
            paths: Stitched paths (modified in place)

        Returns:
            The same list of paths
        """
        for path in paths:
            self.close_path(path)
        return paths
