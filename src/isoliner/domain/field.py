"""Scalar field representation.

This module defines the scalar field domain model, an immutable rectangular
grid of samples that contours are extracted from.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from isoliner.exceptions import FieldShapeError, OutOfBoundsError


@dataclass(frozen=True)
class ScalarField:
    """Immutable grid of scalar samples in row-major order.

    Built once from decoded input and reused across thresholds. Designed
    for serialization to worker processes.

    Attributes:
        width: Number of samples per row (at least 2)
        height: Number of rows (at least 2)
        values: Row-major samples, index x + y * width
    """

    width: int
    height: int
    values: tuple[float, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(float(v) for v in self.values))

        count = len(self.values)
        if self.width < 2 or self.height < 2:
            raise FieldShapeError(
                self.width, self.height, count, "width and height must be at least 2"
            )
        if count != self.width * self.height:
            raise FieldShapeError(
                self.width,
                self.height,
                count,
                f"expected {self.width * self.height} samples",
            )

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "ScalarField":
        """Build a field from a list of rows.

        Args:
            rows: Rows of samples, top row first

        Returns:
            ScalarField instance
        """
        height = len(rows)
        width = len(rows[0]) if height else 0
        values: list[float] = []
        for row in rows:
            if len(row) != width:
                raise FieldShapeError(width, height, len(row), "rows must have equal length")
            values.extend(float(v) for v in row)
        return cls(width=width, height=height, values=tuple(values))

    @property
    def cell_count(self) -> int:
        """Number of 2x2 cells in the field."""
        return (self.width - 1) * (self.height - 1)

    @property
    def min_value(self) -> float:
        """Smallest sample."""
        return min(self.values)

    @property
    def max_value(self) -> float:
        """Largest sample."""
        return max(self.values)

    def value_at(self, x: int, y: int) -> float:
        """Get the sample at an integer grid coordinate.

        Args:
            x: Column
            y: Row

        Returns:
            Sample value

        Raises:
            OutOfBoundsError: If the coordinate lies outside the field
        """
        if x < 0 or y < 0 or x > self.width - 1 or y > self.height - 1:
            raise OutOfBoundsError("sample", x, y, self.width, self.height)
        return self.values[x + y * self.width]

    def corners_of_cell(self, x: int, y: int) -> tuple[float, float, float, float]:
        """Get the four samples of the cell whose top-left corner is (x, y).

        Args:
            x: Column of the top-left sample
            y: Row of the top-left sample

        Returns:
            Tuple of (top_left, top_right, bottom_left, bottom_right)

        Raises:
            OutOfBoundsError: If the cell extends past the field
        """
        if x < 0 or y < 0 or x > self.width - 2 or y > self.height - 2:
            raise OutOfBoundsError("cell", x, y, self.width, self.height)
        return (
            self.value_at(x, y),
            self.value_at(x + 1, y),
            self.value_at(x, y + 1),
            self.value_at(x + 1, y + 1),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the field
        """
        return {
            "width": self.width,
            "height": self.height,
            "values": list(self.values),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScalarField":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a field

        Returns:
            ScalarField instance
        """
        return cls(
            width=data["width"],
            height=data["height"],
            values=tuple(data["values"]),
        )
