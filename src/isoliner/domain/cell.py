"""Cell classification types.

This module defines the types describing one 2x2 cell of a scalar field
after it has been compared against a threshold.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from isoliner.domain.path import Segment


class Edge(Enum):
    """Side of a cell, or of the field's outer rectangle.

    Members are declared in clockwise order starting at the top, as seen
    with y pointing down.
    """

    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3

    def next_clockwise(self) -> "Edge":
        """Get the edge that follows this one walking clockwise."""
        return Edge((self.value + 1) % 4)


class CellCase(Enum):
    """Resolved topology of a classified cell.

    - EMPTY: every corner at or below the threshold
    - FULL: every corner above the threshold
    - SINGLE: one crossing segment
    - SADDLE_JOINED: diagonal corners above the threshold, joined through the center
    - SADDLE_SPLIT: diagonal corners above the threshold, separated by the center
    """

    EMPTY = auto()
    FULL = auto()
    SINGLE = auto()
    SADDLE_JOINED = auto()
    SADDLE_SPLIT = auto()


@dataclass
class Cell:
    """A classified 2x2 cell.

    Attributes:
        x: Column of the cell's top-left sample
        y: Row of the cell's top-left sample
        case_id: 4-bit classification (TL, TR, BL, BR, most significant first)
        case: Resolved topology for the classification
        segments: Crossing segments produced by the cell
    """

    x: int
    y: int
    case_id: int
    case: CellCase
    segments: list[Segment] = field(default_factory=list)

    @property
    def position(self) -> tuple[int, int]:
        """Cell position as an (x, y) tuple."""
        return (self.x, self.y)

    def is_crossed(self) -> bool:
        """Check if the contour passes through this cell.

        Returns:
            True if the cell produced at least one segment
        """
        return len(self.segments) > 0
