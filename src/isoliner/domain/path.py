"""Core geometric types for contour paths.

This module defines the geometric types produced by contour extraction:
- Point: A 2D point compared by exact equality
- PathPoint: An endpoint carrying a raw anchor and an interpolated position
- Segment: A directed crossing segment emitted by one cell
- Path: An ordered, open or closed run of stitched segment endpoints
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D field space.

    Immutable and hashable so raw anchors can key lookup tables.
    Coordinates grow right (x) and down (y), one unit per sample.

    Attributes:
        x: X coordinate in sample units
        y: Y coordinate in sample units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class PathPoint:
    """One contour endpoint in two representations.

    The raw anchor sits at the midpoint of the cell edge being crossed. It
    does not depend on sample values, so two cells sharing an edge produce
    bit-identical anchors. Stitching compares raw anchors only; rendering
    uses the interpolated position.

    Attributes:
        raw: Cell-edge midpoint used for topological matching
        interpolated: Threshold crossing position used for geometry
    """

    raw: Point
    interpolated: Point

    @classmethod
    def fixed(cls, point: Point) -> "PathPoint":
        """Create an endpoint whose raw and interpolated positions coincide.

        Used for field corners added while closing boundary paths.

        Args:
            point: Position for both representations

        Returns:
            PathPoint instance
        """
        return cls(raw=point, interpolated=point)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with raw and interpolated points
        """
        return {"raw": self.raw.to_dict(), "interp": self.interpolated.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PathPoint":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with raw and interpolated points

        Returns:
            PathPoint instance
        """
        return cls(
            raw=Point.from_dict(data["raw"]),
            interpolated=Point.from_dict(data["interp"]),
        )


@dataclass(frozen=True, slots=True)
class Segment:
    """A directed segment produced by one cell.

    The region above the threshold always lies on the right-hand side of
    the segment when walking from start to end (y pointing down).

    Attributes:
        start: Segment start endpoint
        end: Segment end endpoint
    """

    start: PathPoint
    end: PathPoint


@dataclass
class Path:
    """A stitched contour path.

    A path is an ordered sequence of endpoints. A closed path repeats its
    first raw anchor as its last point; an open path does not.

    Attributes:
        points: Ordered endpoints forming the path
        closed: Whether the path forms a loop
    """

    points: list[PathPoint] = field(default_factory=list)
    closed: bool = False

    @property
    def head(self) -> PathPoint:
        """First endpoint of the path."""
        return self.points[0]

    @property
    def tail(self) -> PathPoint:
        """Last endpoint of the path."""
        return self.points[-1]

    def __len__(self) -> int:
        return len(self.points)

    def append(self, point: PathPoint) -> None:
        """Add an endpoint after the tail."""
        self.points.append(point)

    def prepend(self, point: PathPoint) -> None:
        """Add an endpoint before the head."""
        self.points.insert(0, point)

    def extend(self, other: "Path") -> None:
        """Append all endpoints of another path, in order."""
        self.points.extend(other.points)

    def raw_points(self) -> list[Point]:
        """Get the raw anchor of every endpoint.

        Returns:
            List of raw anchor points
        """
        return [p.raw for p in self.points]

    def interpolated_points(self) -> list[Point]:
        """Get the interpolated position of every endpoint.

        Returns:
            List of interpolated points
        """
        return [p.interpolated for p in self.points]

    def signed_area(self, use_interpolated: bool = True) -> float:
        """Calculate signed area using the shoelace formula.

        With y pointing down, a positive area means the path runs clockwise
        on screen, which is the orientation of a loop around a region above
        the threshold.

        Args:
            use_interpolated: Measure interpolated points instead of raw anchors

        Returns:
            Signed area of the polygon formed by the path
        """
        pts = self.interpolated_points() if use_interpolated else self.raw_points()
        n = len(pts)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += pts[i].x * pts[j].y
            area -= pts[j].x * pts[i].y

        return area / 2.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the path
        """
        return {
            "points": [p.to_dict() for p in self.points],
            "closed": self.closed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Path":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a path

        Returns:
            Path instance
        """
        return cls(
            points=[PathPoint.from_dict(p) for p in data["points"]],
            closed=data["closed"],
        )
