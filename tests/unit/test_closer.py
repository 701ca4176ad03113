"""Unit tests for boundary closing."""

import pytest

from isoliner.core.closer import BoundaryCloser
from isoliner.core.pipeline import extract_paths
from isoliner.domain import Edge, Path, PathPoint, Point, ScalarField


def open_path(*coords: tuple[float, float]) -> Path:
    """Open path through the given raw anchors."""
    return Path(points=[PathPoint.fixed(Point(x, y)) for x, y in coords])


@pytest.fixture
def field() -> ScalarField:
    """4x4 field with only the top-left sample below the threshold of 5."""
    return ScalarField.from_rows(
        [
            [0, 9, 9, 9],
            [9, 9, 9, 9],
            [9, 9, 9, 9],
            [9, 9, 9, 9],
        ]
    )


@pytest.fixture
def closer(field: ScalarField) -> BoundaryCloser:
    """Closer for the 4x4 field."""
    return BoundaryCloser(field)


class TestBorderEdge:
    """Tests for border membership of raw anchors."""

    @pytest.mark.parametrize(
        "point,expected",
        [
            (Point(0.0, 1.5), Edge.LEFT),
            (Point(1.5, 0.0), Edge.TOP),
            (Point(3.0, 1.5), Edge.RIGHT),
            (Point(1.5, 3.0), Edge.BOTTOM),
            (Point(1.5, 1.5), None),
            (Point(1.0, 0.5), Edge.TOP),
            (Point(0.5, 2.0), Edge.LEFT),
        ],
    )
    def test_border_edge(self, closer, point, expected):
        """Anchors are assigned to the border they lie on."""
        assert closer.border_edge(point) is expected

    @pytest.mark.parametrize(
        "point,expected",
        [
            (Point(0.5, 0.0), Edge.TOP),
            (Point(0.0, 0.5), Edge.LEFT),
            (Point(2.5, 0.0), Edge.TOP),
            (Point(3.0, 0.5), Edge.RIGHT),
            (Point(3.0, 2.5), Edge.RIGHT),
            (Point(2.5, 3.0), Edge.BOTTOM),
            (Point(0.5, 3.0), Edge.BOTTOM),
            (Point(0.0, 2.5), Edge.LEFT),
        ],
    )
    def test_corner_anchors_use_nearest_border(self, closer, point, expected):
        """Anchors next to a field corner belong to the border they sit on."""
        assert closer.border_edge(point) is expected


class TestCornersBetween:
    """Tests for walking the border clockwise."""

    def test_same_edge(self, closer):
        """Both ends on one border need no corners."""
        assert closer.corners_between(Edge.TOP, Edge.TOP) == []

    def test_left_to_top(self, closer):
        """Left-to-top walks around three corners."""
        assert closer.corners_between(Edge.LEFT, Edge.TOP) == [
            Point(3.0, 0.0),
            Point(3.0, 3.0),
            Point(0.0, 3.0),
        ]

    def test_left_to_right(self, closer):
        """Opposite borders pass two corners."""
        assert closer.corners_between(Edge.LEFT, Edge.RIGHT) == [
            Point(3.0, 3.0),
            Point(0.0, 3.0),
        ]

    def test_top_to_left(self, closer):
        """Top-to-left only passes the top-left corner."""
        assert closer.corners_between(Edge.TOP, Edge.LEFT) == [Point(0.0, 0.0)]

    @pytest.mark.parametrize("begin", list(Edge))
    @pytest.mark.parametrize("end", list(Edge))
    def test_corner_count(self, closer, begin, end):
        """Walking clockwise from end to begin passes (begin - end) mod 4 corners."""
        expected = (begin.value - end.value) % 4
        assert len(closer.corners_between(begin, end)) == expected


class TestClosePath:
    """Tests for closing individual paths."""

    def test_border_to_border(self, closer):
        """Paths with both ends on the border become closed polygons."""
        path = open_path((0.0, 0.5), (0.5, 0.0))
        assert closer.close_path(path)
        assert path.closed
        assert path.raw_points() == [
            Point(0.0, 0.5),
            Point(0.5, 0.0),
            Point(3.0, 0.0),
            Point(3.0, 3.0),
            Point(0.0, 3.0),
            Point(0.0, 0.5),
        ]

    def test_same_border(self, closer):
        """Both ends on one border close straight back to the start."""
        path = open_path((1.5, 0.0), (2.0, 0.5), (2.5, 0.0))
        assert closer.close_path(path)
        assert path.raw_points()[-1] == Point(1.5, 0.0)
        assert len(path) == 4

    def test_one_end_interior(self, closer):
        """Paths with an interior end stay open."""
        path = open_path((0.0, 1.5), (1.5, 1.5))
        assert not closer.close_path(path)
        assert not path.closed
        assert len(path) == 2

    def test_already_closed(self, closer):
        """Closed paths are left untouched."""
        path = open_path((1.0, 0.5), (1.5, 1.0), (1.0, 1.5), (1.0, 0.5))
        path.closed = True
        assert not closer.close_path(path)
        assert len(path) == 4

    def test_too_short(self, closer):
        """Single-point paths cannot be closed."""
        assert not closer.close_path(open_path((0.0, 0.5)))

    def test_close_all(self, closer):
        """close() processes every path and returns the same list."""
        paths = [open_path((0.0, 0.5), (0.5, 0.0)), open_path((0.0, 1.5), (1.5, 1.5))]
        assert closer.close(paths) is paths
        assert [p.closed for p in paths] == [True, False]


class TestClosingThroughPipeline:
    """Boundary closing applied to an extracted field."""

    def test_corner_notch_polygon(self, field):
        """The region above the threshold closes into a clockwise polygon."""
        (path,) = extract_paths(field, 5.0)
        assert path.closed
        assert path.raw_points() == [
            Point(0.0, 0.5),
            Point(0.5, 0.0),
            Point(3.0, 0.0),
            Point(3.0, 3.0),
            Point(0.0, 3.0),
            Point(0.0, 0.5),
        ]
        assert path.signed_area(use_interpolated=False) == pytest.approx(8.875)

    def test_without_closing(self, field):
        """Disabling closing leaves the border-to-border path open."""
        (path,) = extract_paths(field, 5.0, close_boundaries=False)
        assert not path.closed
        assert len(path) == 2
