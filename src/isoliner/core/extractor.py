"""Segment extraction over a whole scalar field.

Walks every cell of a field for one threshold, in row-major order, and
collects the crossing segments produced by cell classification.
"""

from collections.abc import Iterator

from isoliner.core.classifier import classify_cell
from isoliner.domain import Cell, ScalarField, Segment


class SegmentExtractor:
    """Collects crossing segments for one threshold.

    The extractor is stateless and safe for use in parallel processing.
    Emission order is rows top to bottom, cells left to right, and within a
    saddle cell the order given by its case table.
    """

    def iter_cells(self, field: ScalarField, threshold: float) -> Iterator[Cell]:
        """Classify every cell of the field.

        Args:
            field: Scalar field
            threshold: Contour level

        Yields:
            Classified cells in row-major order
        """
        for y in range(field.height - 1):
            for x in range(field.width - 1):
                yield classify_cell(field, threshold, x, y)

    def extract(self, field: ScalarField, threshold: float) -> list[Segment]:
        """Collect the crossing segments of every cell.

        Args:
            field: Scalar field
            threshold: Contour level

        Returns:
            Flat list of segments in emission order
        """
        segments: list[Segment] = []
        for cell in self.iter_cells(field, threshold):
            if cell.is_crossed():
                segments.extend(cell.segments)
        return segments


def extract_segments(field: ScalarField, threshold: float) -> list[Segment]:
    """Collect the crossing segments of every cell of a field."""
    return SegmentExtractor().extract(field, threshold)
