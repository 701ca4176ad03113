"""Path stitching for crossing segments.

This module merges the unordered segments of one threshold into ordered
paths by matching endpoint identity. Matching always compares raw anchors:
two cells sharing an edge produce bit-identical anchors for it, while their
interpolated positions come from different code paths and may differ in
the last bit.

Paths are kept in an arena keyed by stable integer handles. Head and tail
anchors are indexed so each segment finds its neighbours without scanning
every path.
"""

from collections.abc import Iterable

from isoliner.domain import Path, Point, Segment
from isoliner.exceptions import TopologyContradictionError


class PathStitcher:
    """Stitches directed segments into open and closed paths.

    For each segment (start S, end E):
    1. Find paths whose tail is S (append candidates) and whose head is E
       (prepend candidates)
    2. More than one candidate of either kind is a contradiction
    3. Same path on both sides: append E and close the loop
    4. Different paths: the tail path absorbs the head path
    5. Tail path only: append E
    6. Head path only: prepend S
    7. Neither: start a new path [S, E]

    A stitcher holds state for a single run; stitch() resets it.

    Example:
        stitcher = PathStitcher(threshold=5.0)
        paths = stitcher.stitch(segments)
    """

    def __init__(self, threshold: float | None = None) -> None:
        """Initialize the stitcher.

        Args:
            threshold: Threshold being stitched, reported in diagnostics
        """
        self.threshold = threshold
        self._paths: dict[int, Path] = {}
        self._by_tail: dict[Point, list[int]] = {}
        self._by_head: dict[Point, list[int]] = {}
        self._next_handle = 0

    def stitch(self, segments: Iterable[Segment]) -> list[Path]:
        """Stitch segments into paths.

        Args:
            segments: Segments in emission order

        Returns:
            Paths in order of creation

        Raises:
            TopologyContradictionError: If a segment matches more than one
                path tail or more than one path head
        """
        self._reset()
        for segment in segments:
            self.add(segment)
        return self.paths

    @property
    def paths(self) -> list[Path]:
        """Paths built so far, in order of creation."""
        return list(self._paths.values())

    def add(self, segment: Segment) -> None:
        """Stitch one segment into the paths built so far.

        Args:
            segment: Segment to add

        Raises:
            TopologyContradictionError: If the segment matches more than one
                path tail or more than one path head
        """
        start = segment.start.raw
        end = segment.end.raw

        tail_matches = list(self._by_tail.get(start, ()))
        head_matches = list(self._by_head.get(end, ()))

        if len(tail_matches) > 1 or len(head_matches) > 1:
            raise TopologyContradictionError(
                segment, tail_matches, head_matches, threshold=self.threshold
            )

        tail_handle = tail_matches[0] if tail_matches else None
        head_handle = head_matches[0] if head_matches else None

        if tail_handle is not None and head_handle is not None:
            if tail_handle == head_handle:
                self._close(tail_handle, segment)
            else:
                self._merge(tail_handle, head_handle)
        elif tail_handle is not None:
            path = self._paths[tail_handle]
            self._unindex(self._by_tail, path.tail.raw, tail_handle)
            path.append(segment.end)
            self._index(self._by_tail, end, tail_handle)
        elif head_handle is not None:
            path = self._paths[head_handle]
            self._unindex(self._by_head, path.head.raw, head_handle)
            path.prepend(segment.start)
            self._index(self._by_head, start, head_handle)
        else:
            self._create(segment)

    def _reset(self) -> None:
        self._paths = {}
        self._by_tail = {}
        self._by_head = {}
        self._next_handle = 0

    def _create(self, segment: Segment) -> None:
        handle = self._next_handle
        self._next_handle += 1
        self._paths[handle] = Path(points=[segment.start, segment.end])
        self._index(self._by_head, segment.start.raw, handle)
        self._index(self._by_tail, segment.end.raw, handle)

    def _close(self, handle: int, segment: Segment) -> None:
        path = self._paths[handle]
        self._unindex(self._by_tail, path.tail.raw, handle)
        path.append(segment.end)
        path.closed = True
        self._index(self._by_tail, segment.end.raw, handle)

    def _merge(self, tail_handle: int, head_handle: int) -> None:
        # The head path starts at the segment's end anchor, so extending
        # with it appends E followed by the rest of that path.
        target = self._paths[tail_handle]
        source = self._paths.pop(head_handle)

        self._unindex(self._by_tail, target.tail.raw, tail_handle)
        self._unindex(self._by_head, source.head.raw, head_handle)
        self._unindex(self._by_tail, source.tail.raw, head_handle)

        target.extend(source)
        self._index(self._by_tail, target.tail.raw, tail_handle)

    @staticmethod
    def _index(table: dict[Point, list[int]], point: Point, handle: int) -> None:
        table.setdefault(point, []).append(handle)

    @staticmethod
    def _unindex(table: dict[Point, list[int]], point: Point, handle: int) -> None:
        handles = table[point]
        handles.remove(handle)
        if not handles:
            del table[point]


def stitch_segments(segments: Iterable[Segment], threshold: float | None = None) -> list[Path]:
    """Stitch segments into paths.

    Args:
        segments: Segments in emission order
        threshold: Threshold being stitched, reported in diagnostics

    Returns:
        Paths in order of creation
    """
    return PathStitcher(threshold=threshold).stitch(segments)
