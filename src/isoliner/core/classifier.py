"""Cell classification for marching squares.

This module classifies one 2x2 cell against a threshold and produces the
crossing segment(s) for it:
- A 4-bit id records which corners lie above the threshold
- The id resolves to a CellCase (empty, full, single, or one of two saddles)
- Each crossing is emitted as a directed Segment with the region above the
  threshold on its right-hand side

Corner order is top-left, top-right, bottom-left, bottom-right, with the
top-left corner in the most significant bit.
"""

from isoliner.core.geometry import crossing_point
from isoliner.domain import Cell, CellCase, Edge, ScalarField, Segment
from isoliner.exceptions import InvalidClassificationError

Corners = tuple[float, float, float, float]

# Edge pairs for the six ids below 0b1000 that cross once. The complement
# (15 - id) crosses the same edges in the opposite direction.
SINGLE_CROSSINGS: dict[int, tuple[Edge, Edge]] = {
    0b0001: (Edge.BOTTOM, Edge.RIGHT),
    0b0010: (Edge.LEFT, Edge.BOTTOM),
    0b0011: (Edge.LEFT, Edge.RIGHT),
    0b0100: (Edge.RIGHT, Edge.TOP),
    0b0101: (Edge.BOTTOM, Edge.TOP),
    0b0111: (Edge.LEFT, Edge.TOP),
}

# Saddle pairings, keyed by id and by whether the center joins the two
# corners that lie above the threshold.
SADDLE_CROSSINGS: dict[tuple[int, CellCase], tuple[tuple[Edge, Edge], tuple[Edge, Edge]]] = {
    (0b0110, CellCase.SADDLE_JOINED): ((Edge.LEFT, Edge.TOP), (Edge.RIGHT, Edge.BOTTOM)),
    (0b0110, CellCase.SADDLE_SPLIT): ((Edge.RIGHT, Edge.TOP), (Edge.LEFT, Edge.BOTTOM)),
    (0b1001, CellCase.SADDLE_JOINED): ((Edge.BOTTOM, Edge.LEFT), (Edge.TOP, Edge.RIGHT)),
    (0b1001, CellCase.SADDLE_SPLIT): ((Edge.BOTTOM, Edge.RIGHT), (Edge.TOP, Edge.LEFT)),
}

SADDLE_IDS = (0b0110, 0b1001)


def classify(threshold: float, corners: Corners) -> int:
    """Compute the 4-bit classification id of a cell.

    Args:
        threshold: Contour level; a corner is inside when strictly greater
        corners: (top_left, top_right, bottom_left, bottom_right)

    Returns:
        Classification id in [0, 15]

    Examples:
        >>> classify(5.0, (1.0, 1.0, 2.0, 3.0))
        0
        >>> classify(5.0, (1.0, 6.0, 6.0, 6.0))
        7
        >>> classify(5.0, (1.0, 6.0, 2.0, 6.0))
        5
    """
    case_id = 0
    for value in corners:
        case_id = (case_id << 1) | (1 if value > threshold else 0)
    return case_id


def resolve_case(case_id: int, corners: Corners, threshold: float) -> CellCase:
    """Resolve a classification id to its cell topology.

    Saddle ids are disambiguated by the mean of the four corners: above
    the threshold, the two inside corners are joined through the center.

    Args:
        case_id: Classification id
        corners: (top_left, top_right, bottom_left, bottom_right)
        threshold: Contour level

    Returns:
        Resolved CellCase

    Raises:
        InvalidClassificationError: If case_id is outside [0, 15]
    """
    if case_id < 0 or case_id > 0b1111:
        raise InvalidClassificationError(case_id)
    if case_id == 0b0000:
        return CellCase.EMPTY
    if case_id == 0b1111:
        return CellCase.FULL
    if case_id in SADDLE_IDS:
        center = sum(corners) / 4.0
        return CellCase.SADDLE_JOINED if center > threshold else CellCase.SADDLE_SPLIT
    return CellCase.SINGLE


def _edge_pairs(case_id: int, case: CellCase) -> list[tuple[Edge, Edge]]:
    if case in (CellCase.EMPTY, CellCase.FULL):
        return []
    if case is CellCase.SINGLE:
        if case_id in SINGLE_CROSSINGS:
            return [SINGLE_CROSSINGS[case_id]]
        start, end = SINGLE_CROSSINGS[0b1111 - case_id]
        return [(end, start)]
    return list(SADDLE_CROSSINGS[(case_id, case)])


def segments_for(
    threshold: float,
    position: tuple[int, int],
    case_id: int,
    corners: Corners,
) -> list[Segment]:
    """Produce the crossing segments for a classified cell.

    Args:
        threshold: Contour level
        position: (x, y) of the cell's top-left sample
        case_id: Classification id from classify()
        corners: (top_left, top_right, bottom_left, bottom_right)

    Returns:
        Zero, one, or two directed segments

    Raises:
        InvalidClassificationError: If case_id is outside [0, 15]

    Examples:
        >>> seg, = segments_for(5.0, (0, 0), 0b0001, (1.0, 3.0, 3.0, 7.0))
        >>> seg.start.interpolated, seg.end.interpolated
        (Point(x=0.5, y=1.0), Point(x=1.0, y=0.5))
    """
    case = resolve_case(case_id, corners, threshold)
    return _build_segments(threshold, position, case_id, case, corners)


def _build_segments(
    threshold: float,
    position: tuple[int, int],
    case_id: int,
    case: CellCase,
    corners: Corners,
) -> list[Segment]:
    x, y = position
    return [
        Segment(
            start=crossing_point(threshold, x, y, start, corners),
            end=crossing_point(threshold, x, y, end, corners),
        )
        for start, end in _edge_pairs(case_id, case)
    ]


def classify_cell(field: ScalarField, threshold: float, x: int, y: int) -> Cell:
    """Classify the cell whose top-left sample is (x, y).

    Args:
        field: Scalar field
        threshold: Contour level
        x: Column of the top-left sample
        y: Row of the top-left sample

    Returns:
        Classified Cell with its segments

    Raises:
        OutOfBoundsError: If the cell extends past the field
    """
    corners = field.corners_of_cell(x, y)
    case_id = classify(threshold, corners)
    case = resolve_case(case_id, corners, threshold)
    return Cell(
        x=x,
        y=y,
        case_id=case_id,
        case=case,
        segments=_build_segments(threshold, (x, y), case_id, case, corners),
    )
